"""Note service implementation."""

import logging
from typing import List, Optional
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.note import Note
from ..repositories.note_repository import NoteRepository
from ..repositories.user_repository import UserRepository
from ..schemas.notes import NoteCreate, NoteQuery, NoteResponse, NoteUpdate
from .interfaces import INoteService

logger = logging.getLogger(__name__)


class NoteService(INoteService):
    """Note service implementation.

    Every authenticated user may read every note. Mutations are checked
    against the stored owner here, per request, whatever the caller's UI
    decided to show.
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self.note_repo = NoteRepository(session)
        # Used to fetch the owner's username for fresh writes
        self.user_repo = UserRepository(session)

    async def create_note(self, user_id: UUID, request: NoteCreate) -> NoteResponse:
        """Create new note."""
        note = await self.note_repo.create_note(
            {
                "title": request.title,
                "subject": request.subject,
                "content": request.content,
                "user_id": user_id,
            }
        )
        logger.info(f"User {user_id} created note {note.id}")
        return await self._note_to_response(note)

    async def get_note(self, note_id: UUID) -> NoteResponse:
        """Get note by ID with its owner's username."""
        row = await self.note_repo.get_with_owner(note_id)
        if not row:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Note not found")

        note, owner_username = row
        return self._build_response(note, owner_username)

    async def update_note(self, note_id: UUID, user_id: UUID, request: NoteUpdate) -> NoteResponse:
        """Update title/subject/content of a note the user owns."""
        note = await self._get_owned_note(note_id, user_id, action="edit")

        changes = request.changes()
        if changes:
            note = await self.note_repo.update_note(note, changes)
            logger.info(f"User {user_id} updated note {note_id}: {sorted(changes)}")

        return await self._note_to_response(note)

    async def delete_note(self, note_id: UUID, user_id: UUID) -> None:
        """Delete a note the user owns."""
        note = await self._get_owned_note(note_id, user_id, action="delete")
        await self.note_repo.delete_note(note)

    async def list_notes(self, query: NoteQuery) -> List[NoteResponse]:
        """List notes with owner usernames."""
        rows = await self.note_repo.list_notes(query)
        return [self._build_response(note, owner_username) for note, owner_username in rows]

    async def list_subjects(self, owner_id: Optional[UUID] = None) -> List[str]:
        """Distinct subjects in use."""
        return await self.note_repo.list_subjects(owner_id)

    async def _get_owned_note(self, note_id: UUID, user_id: UUID, action: str) -> Note:
        note = await self.note_repo.get_by_id(note_id)
        if not note:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Note not found")

        if not note.is_owned_by(user_id):
            logger.warning(f"User {user_id} denied {action} on note {note_id} owned by {note.user_id}")
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"You can only {action} your own notes",
            )
        return note

    async def _note_to_response(self, note: Note) -> NoteResponse:
        owner = await self.user_repo.get_by_id(note.user_id)
        return self._build_response(note, owner.username if owner else None)

    def _build_response(self, note: Note, owner_username: Optional[str]) -> NoteResponse:
        return NoteResponse(
            id=note.id,
            title=note.title,
            subject=note.subject,
            content=note.content,
            user_id=note.user_id,
            owner_username=owner_username,
            created_at=note.created_at,
            updated_at=note.updated_at,
        )
