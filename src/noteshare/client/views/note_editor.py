"""Create and edit form for notes."""

import logging
from enum import Enum
from typing import Optional, Union
from uuid import UUID

from .. import navigation
from ..errors import NoteShareError
from .base import BaseView

logger = logging.getLogger(__name__)


class EditorMode(str, Enum):
    CREATE = "create"
    EDIT = "edit"


class NoteEditorView(BaseView):
    """Form state for a new note, or for an existing note its owner edits."""

    def __init__(self, session, api, notifier, navigator, note_id: Optional[Union[UUID, str]] = None):
        super().__init__(session, api, notifier, navigator)
        self.note_id = note_id
        self.mode = EditorMode.EDIT if note_id is not None else EditorMode.CREATE
        self.title = ""
        self.subject = ""
        self.content = ""
        self.loading = False
        self.saving = False

    @property
    def is_edit(self) -> bool:
        return self.mode == EditorMode.EDIT

    async def mount(self) -> None:
        await super().mount()
        user = await self.require_user()
        if user is None or not self.is_edit:
            return

        token = self.requests.begin()
        self.loading = True
        try:
            note = await self.api.get_note(self.note_id)
        except NoteShareError as e:
            if self.requests.is_current(token):
                self.loading = False
                logger.info(f"Note {self.note_id} could not be loaded for editing: {e}")
                self.notifier.error("Error", "Could not load note.")
                self.navigator.navigate(navigation.DASHBOARD, replace=True)
            return

        if not self.requests.is_current(token):
            return
        self.loading = False

        if note.user_id != user.id:
            self.notifier.error("Access Denied", "You can only edit your own notes.")
            self.navigator.navigate(navigation.DASHBOARD, replace=True)
            return

        self.title = note.title
        self.subject = note.subject
        self.content = note.content

    def validate(self) -> bool:
        return all(value.strip() for value in (self.title, self.subject, self.content))

    async def submit(self) -> bool:
        """Save the form. Form values are kept when saving fails."""
        if not self.validate():
            self.notifier.error("Missing fields", "Please fill in all fields.")
            return False
        if self.saving:
            return False

        self.saving = True
        try:
            if self.is_edit:
                note = await self.api.update_note(
                    self.note_id, title=self.title, subject=self.subject, content=self.content
                )
            else:
                note = await self.api.create_note(self.title, self.subject, self.content)
        except NoteShareError as e:
            action = "update" if self.is_edit else "create"
            logger.warning(f"Could not {action} note: {e}")
            self.notifier.error("Error", f"Could not {action} note.")
            return False
        finally:
            self.saving = False

        if self.is_edit:
            self.notifier.notify("Note updated", "Your note has been updated successfully.")
        else:
            self.notifier.notify("Note created", "Your note has been created successfully.")
        self.navigator.navigate(navigation.note_detail(note.id))
        return True

    def cancel(self) -> None:
        """Discard edits and go back."""
        target = navigation.note_detail(self.note_id) if self.is_edit else navigation.DASHBOARD
        self.navigator.navigate(target)
