"""
Headless NoteShare client.

Views are plain objects driven by asyncio: they expose state and actions,
talk to the backend through ``BackendClient`` and report through an injected
``Notifier`` and ``Navigator``.
"""

from .api import BackendClient
from .errors import (
    AccessDeniedError,
    AuthError,
    DuplicateLoginIdError,
    InvalidCredentialsError,
    NoteShareError,
    NotFoundError,
    TransientFetchError,
    ValidationError,
)
from .navigation import Navigator
from .notifications import Notification, NotificationVariant, Notifier
from .tracking import RequestTracker
from .session import SessionProvider, SessionState

__all__ = [
    "BackendClient",
    "SessionProvider",
    "SessionState",
    "Navigator",
    "Notifier",
    "Notification",
    "NotificationVariant",
    "RequestTracker",
    "NoteShareError",
    "ValidationError",
    "AuthError",
    "InvalidCredentialsError",
    "DuplicateLoginIdError",
    "NotFoundError",
    "AccessDeniedError",
    "TransientFetchError",
]
