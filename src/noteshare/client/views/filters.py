"""
Derived note lists: search, subject filter and sort.

All functions are pure; they never mutate their input and always return a
new list.
"""

from enum import Enum
from typing import Iterable, List, Optional, Sequence

from ...core.schemas.notes import NoteResponse

ALL_SUBJECTS = "all"


class SortOrder(str, Enum):
    NEWEST = "newest"
    OLDEST = "oldest"

    def toggled(self) -> "SortOrder":
        return SortOrder.OLDEST if self is SortOrder.NEWEST else SortOrder.NEWEST


def search_notes(notes: Iterable[NoteResponse], term: Optional[str]) -> List[NoteResponse]:
    """Case-insensitive substring match on title, subject or content."""
    needle = (term or "").strip().lower()
    if not needle:
        return list(notes)
    return [
        note
        for note in notes
        if needle in note.title.lower()
        or needle in note.subject.lower()
        or needle in note.content.lower()
    ]


def filter_by_subject(notes: Iterable[NoteResponse], subject: Optional[str]) -> List[NoteResponse]:
    if not subject or subject == ALL_SUBJECTS:
        return list(notes)
    return [note for note in notes if note.subject == subject]


def _created_key(note: NoteResponse):
    # id breaks created_at ties so the order is total
    return (note.created_at, str(note.id))


def sort_notes(notes: Iterable[NoteResponse], sort_by: SortOrder) -> List[NoteResponse]:
    return sorted(notes, key=_created_key, reverse=sort_by == SortOrder.NEWEST)


def apply_filters(
    notes: Sequence[NoteResponse],
    search_term: Optional[str] = None,
    subject_filter: Optional[str] = ALL_SUBJECTS,
    sort_by: Optional[SortOrder] = None,
) -> List[NoteResponse]:
    """Search and subject filter; sorted only when ``sort_by`` is given."""
    result = filter_by_subject(search_notes(notes, search_term), subject_filter)
    if sort_by is not None:
        result = sort_notes(result, sort_by)
    return result


def unique_subjects(notes: Iterable[NoteResponse]) -> List[str]:
    return sorted({note.subject for note in notes})
