"""
Database models for NoteShare.

Models included:
    - User: account with a display name and a unique login id
    - Note: titled, subject-tagged note owned by one user
"""

from .base import BaseModel
from .note import Note
from .user import User

__all__ = [
    "BaseModel",
    "User",
    "Note",
]
