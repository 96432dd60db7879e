"""
Session state shared by the client views.

A ``SessionProvider`` is created once and passed to every view. Views must
not make redirect decisions before :meth:`SessionProvider.wait_until_resolved`
returns, otherwise a user whose session is still being restored would be
sent to the login page.
"""

import asyncio
import logging
from datetime import date
from enum import Enum
from typing import Callable, List, Optional, Union

from ..core.schemas.auth import UserResponse
from .api import BackendClient
from .errors import AuthError, NoteShareError

logger = logging.getLogger(__name__)

SessionListener = Callable[[Optional[UserResponse]], None]


class SessionState(str, Enum):
    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    RESOLVED = "resolved"


class SessionProvider:
    """Current identity plus sign-in, sign-up and sign-out."""

    def __init__(self, api: BackendClient):
        self.api = api
        self.state = SessionState.UNINITIALIZED
        self.current_user: Optional[UserResponse] = None
        self._resolved = asyncio.Event()
        self._listeners: List[SessionListener] = []

    @property
    def loading(self) -> bool:
        return self.state != SessionState.RESOLVED

    @property
    def is_authenticated(self) -> bool:
        return self.current_user is not None

    async def initialize(self, access_token: Optional[str] = None) -> Optional[UserResponse]:
        """Restore a stored session, or resolve as anonymous."""
        self.state = SessionState.LOADING
        user = None
        if access_token:
            self.api.access_token = access_token
            try:
                user = await self.api.get_me()
            except AuthError:
                logger.info("Stored session is no longer valid")
                self.api.access_token = None
            except NoteShareError as e:
                logger.warning(f"Could not restore session: {e}")
                self.api.access_token = None

        self._resolve(user)
        return user

    async def wait_until_resolved(self) -> Optional[UserResponse]:
        await self._resolved.wait()
        return self.current_user

    async def sign_in(self, login_id: str, password: str) -> UserResponse:
        """Raises InvalidCredentialsError on failure."""
        token = await self.api.login(login_id, password)
        self._resolve(token.user)
        logger.info(f"Signed in as {token.user.login_id}")
        return token.user

    async def sign_up(
        self, username: str, login_id: str, password: str, date_of_birth: Union[date, str]
    ) -> UserResponse:
        """Create an account; success signs the new user in."""
        token = await self.api.register(username, login_id, password, date_of_birth)
        self._resolve(token.user)
        logger.info(f"Registered and signed in as {token.user.login_id}")
        return token.user

    async def sign_out(self) -> None:
        """End the backend session if possible; local state is always cleared."""
        try:
            await self.api.logout()
        except NoteShareError as e:
            logger.warning(f"Logout request failed, clearing local session anyway: {e}")
        finally:
            self._resolve(None)

    async def refresh_profile(self) -> Optional[UserResponse]:
        """Re-read the profile of the signed-in user."""
        if not self.current_user:
            return None
        user = await self.api.get_me()
        self._set_user(user)
        return user

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def _resolve(self, user: Optional[UserResponse]) -> None:
        self.state = SessionState.RESOLVED
        self._resolved.set()
        self._set_user(user)

    def _set_user(self, user: Optional[UserResponse]) -> None:
        self.current_user = user
        for listener in list(self._listeners):
            listener(user)
