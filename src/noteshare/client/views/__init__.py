"""View controllers for the client routes."""

from .auth import HomeView, LoginView, RegisterView
from .filters import SortOrder, apply_filters, filter_by_subject, search_notes, sort_notes, unique_subjects
from .note_detail import NoteDetailView
from .note_editor import EditorMode, NoteEditorView
from .note_list import ListVariant, NoteListView
from .shell import NavigationShell, Theme

__all__ = [
    "HomeView",
    "LoginView",
    "RegisterView",
    "NoteListView",
    "ListVariant",
    "NoteDetailView",
    "NoteEditorView",
    "EditorMode",
    "NavigationShell",
    "Theme",
    "SortOrder",
    "apply_filters",
    "search_notes",
    "filter_by_subject",
    "sort_notes",
    "unique_subjects",
]
