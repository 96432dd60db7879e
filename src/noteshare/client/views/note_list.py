"""Dashboard (own notes) and Notes browser (everyone's notes)."""

import logging
from enum import Enum
from typing import List, Optional

from ...core.schemas.notes import NoteResponse
from .. import navigation
from ..errors import NoteShareError
from .base import BaseView
from .filters import ALL_SUBJECTS, SortOrder, apply_filters, unique_subjects

logger = logging.getLogger(__name__)


class ListVariant(str, Enum):
    DASHBOARD = "dashboard"
    BROWSER = "browser"


class NoteListView(BaseView):
    """
    Lists notes and derives the visible rows from the search term, subject
    filter and sort order.

    The dashboard fetches the signed-in user's notes, most recently updated
    first, and keeps that order. The browser fetches every note, newest
    first, and re-sorts client side when the sort toggle changes.
    """

    def __init__(self, session, api, notifier, navigator, variant: ListVariant = ListVariant.BROWSER):
        super().__init__(session, api, notifier, navigator)
        self.variant = variant
        self.notes: List[NoteResponse] = []
        self.loading = False
        self.loaded = False
        self.username: Optional[str] = None

        self.search_term = ""
        self.subject_filter = ALL_SUBJECTS
        self.sort_by = SortOrder.NEWEST

    @property
    def is_dashboard(self) -> bool:
        return self.variant == ListVariant.DASHBOARD

    @property
    def visible_notes(self) -> List[NoteResponse]:
        return apply_filters(
            self.notes,
            search_term=self.search_term,
            subject_filter=self.subject_filter,
            sort_by=None if self.is_dashboard else self.sort_by,
        )

    @property
    def subjects(self) -> List[str]:
        return unique_subjects(self.notes)

    @property
    def is_empty(self) -> bool:
        """True only once a fetch has completed with no rows."""
        return self.loaded and not self.loading and not self.notes

    async def mount(self) -> None:
        await super().mount()
        user = await self.require_user()
        if user is None:
            return
        self.username = user.username
        if self.is_dashboard:
            await self._load_profile()
        await self.refresh()

    async def refresh(self) -> None:
        user = self.session.current_user
        if user is None or not self.mounted:
            return

        token = self.requests.begin()
        self.loading = True
        try:
            if self.is_dashboard:
                notes = await self.api.list_notes(owner=user.id, order_by="updated_at", ascending=False)
            else:
                notes = await self.api.list_notes(order_by="created_at", ascending=False)
        except NoteShareError as e:
            if self.requests.is_current(token):
                self.loading = False
                message = "Could not load your notes." if self.is_dashboard else "Could not load notes."
                self.notifier.error("Error", message)
                logger.warning(f"{self.variant.value} fetch failed: {e}")
            return

        if not self.requests.is_current(token):
            logger.debug(f"Discarding stale {self.variant.value} response")
            return
        self.notes = notes
        self.loading = False
        self.loaded = True

    async def _load_profile(self) -> None:
        try:
            profile = await self.session.refresh_profile()
        except NoteShareError as e:
            logger.info(f"Profile fetch failed, keeping session username: {e}")
            return
        if profile is not None and self.mounted:
            self.username = profile.username

    def set_search(self, term: str) -> None:
        self.search_term = term

    def set_subject(self, subject: str) -> None:
        self.subject_filter = subject or ALL_SUBJECTS

    def toggle_sort(self) -> SortOrder:
        self.sort_by = self.sort_by.toggled()
        return self.sort_by

    def open_note(self, note_id) -> None:
        self.navigator.navigate(navigation.note_detail(note_id))

    def new_note(self) -> None:
        self.navigator.navigate(navigation.NOTE_NEW)
