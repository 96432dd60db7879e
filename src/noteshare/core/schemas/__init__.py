"""
Pydantic schemas for validating and documenting API requests and responses.
"""

from .auth import LoginRequest, RegisterRequest, TokenResponse, UserResponse, UserUpdateRequest
from .common import ErrorResponse, HealthCheckResponse, MessageResponse
from .notes import NoteCreate, NoteOrderField, NoteQuery, NoteResponse, NoteUpdate

__all__ = [
    # Auth schemas
    "LoginRequest",
    "RegisterRequest",
    "TokenResponse",
    "UserResponse",
    "UserUpdateRequest",
    # Note schemas
    "NoteCreate",
    "NoteUpdate",
    "NoteResponse",
    "NoteQuery",
    "NoteOrderField",
    # Common schemas
    "ErrorResponse",
    "HealthCheckResponse",
    "MessageResponse",
]
