"""
NoteShare - note sharing service and client

Users register, keep their own notes and browse the notes everyone shares.
The backend owns persistence and access rules; the client package drives
the session and note views against it.
"""

__version__ = "1.0.0"
