"""Home, login and registration pages."""

import logging
from datetime import date
from typing import Optional, Union

from .. import navigation
from ..errors import NoteShareError
from .base import BaseView

logger = logging.getLogger(__name__)


class HomeView(BaseView):
    """Landing page; signed-in users go straight to the dashboard."""

    async def mount(self) -> None:
        await super().mount()
        user = await self.session.wait_until_resolved()
        if self.mounted and user is not None:
            self.navigator.navigate(navigation.DASHBOARD, replace=True)


class LoginView(BaseView):
    def __init__(self, session, api, notifier, navigator):
        super().__init__(session, api, notifier, navigator)
        self.login_id = ""
        self.password = ""
        self.submitting = False

    async def submit(self) -> bool:
        if not self.login_id.strip() or not self.password:
            self.notifier.error("Missing fields", "Please enter both User ID and password.")
            return False

        self.submitting = True
        try:
            await self.session.sign_in(self.login_id.strip(), self.password)
        except NoteShareError as e:
            logger.info(f"Login failed for {self.login_id}: {e}")
            self.notifier.error("Login failed", "Invalid User ID or password.")
            return False
        finally:
            self.submitting = False

        self.notifier.notify("Welcome back!", "Successfully logged in.")
        self.navigator.navigate(navigation.DASHBOARD)
        return True


class RegisterView(BaseView):
    def __init__(self, session, api, notifier, navigator):
        super().__init__(session, api, notifier, navigator)
        self.username = ""
        self.login_id = ""
        self.password = ""
        self.date_of_birth: Optional[Union[date, str]] = None
        self.submitting = False

    def _missing_fields(self) -> bool:
        return (
            not self.username.strip()
            or not self.login_id.strip()
            or not self.password
            or not self.date_of_birth
        )

    async def submit(self) -> bool:
        if self._missing_fields():
            self.notifier.error("Missing fields", "Please fill in all fields.")
            return False

        self.submitting = True
        try:
            await self.session.sign_up(
                self.username.strip(), self.login_id.strip(), self.password, self.date_of_birth
            )
        except NoteShareError as e:
            self.notifier.error(
                "Registration failed",
                e.message or "Could not create account. User ID might already exist.",
            )
            return False
        finally:
            self.submitting = False

        self.notifier.notify("Success!", "Account created successfully.")
        self.navigator.navigate(navigation.DASHBOARD)
        return True
