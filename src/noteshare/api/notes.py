"""Notes API endpoints."""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.schemas.notes import NoteCreate, NoteOrderField, NoteQuery, NoteResponse, NoteUpdate
from ..core.services import NoteService
from ..database import get_db_session
from ..middleware.auth import get_current_user_id

router = APIRouter(prefix="/notes", tags=["notes"])


def _resolve_owner(owner: Optional[str], current_user_id: UUID) -> Optional[UUID]:
    if owner is None:
        return None
    if owner == "me":
        return current_user_id
    try:
        return UUID(owner)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="owner must be 'me' or a user id",
        )


@router.post("/", response_model=NoteResponse, status_code=status.HTTP_201_CREATED)
async def create_note(
    request: NoteCreate,
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Create a new note owned by the caller."""
    note_service = NoteService(session)
    return await note_service.create_note(current_user_id, request)


@router.get("/", response_model=List[NoteResponse])
async def list_notes(
    owner: Optional[str] = Query(None, description="'me' or a user id; omit for all notes"),
    order_by: NoteOrderField = Query(NoteOrderField.CREATED_AT),
    ascending: bool = Query(False),
    q: Optional[str] = Query(None, description="Search title, subject and content"),
    subject: Optional[str] = Query(None, description="Exact subject, or 'all'"),
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """List notes. Every note is visible to every signed-in user."""
    note_service = NoteService(session)
    query = NoteQuery(
        owner_id=_resolve_owner(owner, current_user_id),
        query=q,
        subject=subject,
        order_by=order_by,
        ascending=ascending,
    )
    return await note_service.list_notes(query)


@router.get("/subjects", response_model=List[str])
async def list_subjects(
    owner: Optional[str] = Query(None),
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Distinct subjects for the subject filter."""
    note_service = NoteService(session)
    return await note_service.list_subjects(_resolve_owner(owner, current_user_id))


@router.get("/{note_id}", response_model=NoteResponse)
async def get_note(
    note_id: UUID,
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Get a specific note."""
    note_service = NoteService(session)
    return await note_service.get_note(note_id)


@router.put("/{note_id}", response_model=NoteResponse)
async def update_note(
    note_id: UUID,
    request: NoteUpdate,
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Update a note (owner only)."""
    note_service = NoteService(session)
    return await note_service.update_note(note_id, current_user_id, request)


@router.delete("/{note_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_note(
    note_id: UUID,
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Delete a note (owner only)."""
    note_service = NoteService(session)
    await note_service.delete_note(note_id, current_user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
