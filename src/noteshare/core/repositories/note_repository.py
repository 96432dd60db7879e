"""Note repository for database operations."""

import logging
from datetime import datetime, timezone
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import asc, desc, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.note import Note
from ..models.user import User
from ..schemas.notes import NoteOrderField, NoteQuery

logger = logging.getLogger(__name__)

# rows returned by list/detail reads: the note and its owner's username
NoteRow = Tuple[Note, Optional[str]]

# the only columns an update may touch
MUTABLE_FIELDS = ("title", "subject", "content")


class NoteRepository:
    """Repository for note database operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    def _with_owner(self):
        return select(Note, User.username).outerjoin(User, Note.user_id == User.id)

    async def create_note(self, note_data: dict) -> Note:
        """Create new note; created_at and updated_at share one timestamp."""
        now = datetime.now(timezone.utc)
        note = Note(**note_data, created_at=now, updated_at=now)
        self.session.add(note)
        await self.session.commit()
        await self.session.refresh(note)
        return note

    async def get_by_id(self, note_id: UUID) -> Optional[Note]:
        """Get note by ID."""
        stmt = select(Note).where(Note.id == note_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_with_owner(self, note_id: UUID) -> Optional[NoteRow]:
        """Get note by ID together with the owner's username."""
        stmt = self._with_owner().where(Note.id == note_id)
        result = await self.session.execute(stmt)
        row = result.first()
        return (row[0], row[1]) if row else None

    async def update_note(self, note: Note, update_data: dict) -> Note:
        """Apply title/subject/content changes and refresh updated_at."""
        for key, value in update_data.items():
            if key in MUTABLE_FIELDS:
                setattr(note, key, value)
            else:
                logger.warning(f"Ignoring immutable note field '{key}' on update of {note.id}")

        note.updated_at = datetime.now(timezone.utc)
        await self.session.commit()
        await self.session.refresh(note)
        return note

    async def delete_note(self, note: Note) -> None:
        """Delete note."""
        try:
            await self.session.delete(note)
            await self.session.commit()
        except Exception as e:
            logger.error(f"Unexpected error deleting note {note.id}: {e}")
            await self.session.rollback()
            raise
        logger.info(f"Deleted note {note.id}")

    async def list_notes(self, query: NoteQuery) -> List[NoteRow]:
        """List notes with owner usernames, filtered and ordered per query."""
        stmt = self._with_owner()

        if query.owner_id is not None:
            stmt = stmt.where(Note.user_id == query.owner_id)

        term = (query.query or "").strip()
        if term:
            pattern = f"%{term}%"
            stmt = stmt.where(
                or_(
                    Note.title.ilike(pattern),
                    Note.subject.ilike(pattern),
                    Note.content.ilike(pattern),
                )
            )

        if query.subject and query.subject != "all":
            stmt = stmt.where(Note.subject == query.subject)

        column = Note.updated_at if query.order_by == NoteOrderField.UPDATED_AT else Note.created_at
        direction = asc if query.ascending else desc
        # id breaks ties so the order is total
        stmt = stmt.order_by(direction(column), direction(Note.id))

        result = await self.session.execute(stmt)
        return [(row[0], row[1]) for row in result.all()]

    async def list_subjects(self, owner_id: Optional[UUID] = None) -> List[str]:
        """Distinct subjects, alphabetically."""
        stmt = select(Note.subject.distinct()).order_by(Note.subject)
        if owner_id is not None:
            stmt = stmt.where(Note.user_id == owner_id)
        result = await self.session.execute(stmt)
        return [subject for subject in result.scalars()]

