"""Single note page with owner-only edit and delete."""

import logging
from typing import Optional, Union
from uuid import UUID

from ...core.schemas.notes import NoteResponse
from .. import navigation
from ..errors import NoteShareError
from .base import BaseView

logger = logging.getLogger(__name__)


class NoteDetailView(BaseView):
    """Shows a note. Edit and delete are offered to the owner only; the
    server checks ownership again on every write."""

    def __init__(self, session, api, notifier, navigator, note_id: Union[UUID, str]):
        super().__init__(session, api, notifier, navigator)
        self.note_id = note_id
        self.note: Optional[NoteResponse] = None
        self.loading = False
        self.confirm_open = False
        self.deleting = False

    @property
    def is_owner(self) -> bool:
        user = self.session.current_user
        return bool(user and self.note and user.id == self.note.user_id)

    @property
    def can_edit(self) -> bool:
        return self.is_owner

    @property
    def can_delete(self) -> bool:
        return self.is_owner

    @property
    def show_updated(self) -> bool:
        return bool(self.note and self.note.updated_at != self.note.created_at)

    @property
    def owner_name(self) -> str:
        if self.note and self.note.owner_username:
            return self.note.owner_username
        return "Unknown"

    async def mount(self) -> None:
        await super().mount()
        if await self.require_user() is None:
            return
        await self.load()

    async def load(self) -> None:
        token = self.requests.begin()
        self.loading = True
        try:
            note = await self.api.get_note(self.note_id)
        except NoteShareError as e:
            if self.requests.is_current(token):
                self.loading = False
                logger.info(f"Note {self.note_id} could not be loaded: {e}")
                self.notifier.error("Error", "Could not load note.")
                self.navigator.navigate(navigation.NOTES, replace=True)
            return

        if self.requests.is_current(token):
            self.note = note
            self.loading = False

    def edit(self) -> None:
        if self.can_edit:
            self.navigator.navigate(navigation.note_edit(self.note_id))

    def request_delete(self) -> bool:
        """Open the confirmation step."""
        if not self.can_delete:
            return False
        self.confirm_open = True
        return True

    def cancel_delete(self) -> None:
        self.confirm_open = False

    async def confirm_delete(self) -> bool:
        """Delete the note; does nothing unless confirmation is open."""
        if not self.confirm_open or self.deleting:
            return False

        self.deleting = True
        try:
            await self.api.delete_note(self.note_id)
        except NoteShareError as e:
            logger.warning(f"Delete of note {self.note_id} failed: {e}")
            self.notifier.error("Error", "Could not delete note.")
            return False
        finally:
            self.deleting = False
            self.confirm_open = False

        self.notifier.notify("Note deleted", "Your note has been deleted successfully.")
        self.navigator.navigate(navigation.DASHBOARD)
        return True
