"""Errors raised by the NoteShare client.

Views catch these and turn them into notifications; none of them is fatal.
"""

from typing import Optional


class NoteShareError(Exception):
    """Base client error."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ValidationError(NoteShareError):
    """A required field is missing or malformed (local check or HTTP 422)."""


class AuthError(NoteShareError):
    """Missing, expired or rejected session (HTTP 401)."""


class InvalidCredentialsError(AuthError):
    """Login id and password do not match an account."""


class DuplicateLoginIdError(AuthError):
    """Registration with a login id that is already taken (HTTP 409)."""


class NotFoundError(NoteShareError):
    """The requested note does not exist (HTTP 404)."""


class AccessDeniedError(NoteShareError):
    """Authenticated but not the owner (HTTP 403)."""


class TransientFetchError(NoteShareError):
    """Network failure or server error (5xx)."""
