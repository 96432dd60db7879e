"""Top-level chrome: logo, theme toggle, auth links and logout."""

import logging
from enum import Enum
from typing import List, Optional, Tuple

from ...core.schemas.auth import UserResponse
from .. import navigation
from ..errors import NoteShareError
from .base import BaseView

logger = logging.getLogger(__name__)

NavLink = Tuple[str, str]


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"


class NavigationShell(BaseView):
    """Header shared by all pages.

    Re-reads the profile on mount so the greeting shows the stored
    username, and follows the session for later sign-ins and sign-outs.
    """

    def __init__(self, session, api, notifier, navigator, theme: Theme = Theme.LIGHT):
        super().__init__(session, api, notifier, navigator)
        self.theme = theme
        self.menu_open = False
        self.username: Optional[str] = None
        self._unsubscribe = None

    async def mount(self) -> None:
        await super().mount()
        self._unsubscribe = self.session.subscribe(self._on_session_change)
        user = await self.session.wait_until_resolved()
        if not self.mounted:
            return
        self._on_session_change(user)
        if user is None:
            return

        token = self.requests.begin()
        try:
            profile = await self.api.get_me()
        except NoteShareError as e:
            logger.info(f"Profile fetch failed: {e}")
            return
        if self.requests.is_current(token) and self.session.current_user is not None:
            self.username = profile.username

    def unmount(self) -> None:
        super().unmount()
        if self._unsubscribe:
            self._unsubscribe()
            self._unsubscribe = None

    def _on_session_change(self, user: Optional[UserResponse]) -> None:
        self.username = user.username if user else None

    @property
    def is_authenticated(self) -> bool:
        return self.session.current_user is not None

    @property
    def greeting(self) -> Optional[str]:
        if not self.is_authenticated:
            return None
        return f"Hello, {self.username or self.session.current_user.username}!"

    @property
    def links(self) -> List[NavLink]:
        """(label, route) pairs; the Logout entry is an action, not a route."""
        if self.is_authenticated:
            return [("Dashboard", navigation.DASHBOARD), ("Logout", "")]
        return [("Login", navigation.LOGIN), ("Register", navigation.REGISTER)]

    def toggle_theme(self) -> Theme:
        self.theme = Theme.DARK if self.theme == Theme.LIGHT else Theme.LIGHT
        return self.theme

    def toggle_menu(self) -> bool:
        self.menu_open = not self.menu_open
        return self.menu_open

    def go(self, route: str) -> None:
        self.menu_open = False
        self.navigator.navigate(route)

    def go_home(self) -> None:
        self.go(navigation.HOME)

    async def logout(self) -> None:
        """Sign out, then always land on the home page."""
        self.menu_open = False
        await self.session.sign_out()
        self.navigator.navigate(navigation.HOME)
