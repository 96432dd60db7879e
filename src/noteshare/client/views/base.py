"""Shared plumbing for view controllers."""

from typing import Optional

from ...core.schemas.auth import UserResponse
from .. import navigation
from ..api import BackendClient
from ..navigation import Navigator
from ..notifications import Notifier
from ..session import SessionProvider
from ..tracking import RequestTracker


class BaseView:
    """Holds the injected collaborators and the view's request tracker."""

    def __init__(
        self,
        session: SessionProvider,
        api: BackendClient,
        notifier: Notifier,
        navigator: Navigator,
    ):
        self.session = session
        self.api = api
        self.notifier = notifier
        self.navigator = navigator
        self.requests = RequestTracker()
        self.mounted = False

    async def mount(self) -> None:
        self.mounted = True
        self.requests.reset()

    def unmount(self) -> None:
        self.mounted = False
        self.requests.invalidate()

    async def require_user(self) -> Optional[UserResponse]:
        """Wait for the session; anonymous visitors are sent to Login.

        Returns None without navigating if the view was unmounted meanwhile.
        """
        user = await self.session.wait_until_resolved()
        if not self.mounted:
            return None
        if user is None:
            self.navigator.navigate(navigation.LOGIN, replace=True)
        return user
