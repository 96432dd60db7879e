"""View controller tests against a scripted fake backend."""

import asyncio
import uuid
from datetime import datetime, timedelta, timezone

import pytest

from src.noteshare.client import navigation
from src.noteshare.client.errors import NotFoundError, TransientFetchError
from src.noteshare.client.navigation import Navigator
from src.noteshare.client.notifications import NotificationVariant, Notifier
from src.noteshare.client.session import SessionProvider
from src.noteshare.client.views import (
    EditorMode,
    HomeView,
    ListVariant,
    NavigationShell,
    NoteDetailView,
    NoteEditorView,
    NoteListView,
    SortOrder,
    Theme,
)
from src.noteshare.core.schemas.auth import TokenResponse, UserResponse
from src.noteshare.core.schemas.notes import NoteResponse

NOW = datetime(2026, 3, 1, tzinfo=timezone.utc)


def _user(name):
    return UserResponse(
        id=uuid.uuid4(), username=name, login_id=name.lower(), date_of_birth="2000-01-01", created_at=NOW
    )


def _note(owner, title="Calc Notes", subject="Math", minutes=0, edited=False):
    created = NOW + timedelta(minutes=minutes)
    return NoteResponse(
        id=uuid.uuid4(),
        title=title,
        subject=subject,
        content="...",
        user_id=owner.id,
        owner_username=owner.username,
        created_at=created,
        updated_at=created + timedelta(seconds=30) if edited else created,
    )


class FakeApi:
    """Returns canned data; ``gate`` holds list calls until released."""

    def __init__(self, user):
        self.access_token = None
        self.user = user
        self.notes = []
        self.list_calls = []
        self.list_error = None
        self.note_error = None
        self.write_error = None
        self.deleted = []
        self.created = []
        self.updated = []
        self.gate = None

    async def login(self, login_id, password):
        return TokenResponse(access_token="tok", expires_in=60, user=self.user)

    async def logout(self):
        self.access_token = None

    async def get_me(self):
        return self.user

    async def list_notes(self, **kwargs):
        self.list_calls.append(kwargs)
        if self.gate is not None:
            await self.gate.wait()
        if self.list_error:
            raise self.list_error
        return list(self.notes)

    async def get_note(self, note_id):
        if self.note_error:
            raise self.note_error
        for note in self.notes:
            if note.id == note_id:
                return note
        raise NotFoundError("Note not found", 404)

    async def create_note(self, title, subject, content):
        if self.write_error:
            raise self.write_error
        note = NoteResponse(
            id=uuid.uuid4(), title=title, subject=subject, content=content,
            user_id=self.user.id, created_at=NOW, updated_at=NOW,
        )
        self.created.append(note)
        return note

    async def update_note(self, note_id, **changes):
        if self.write_error:
            raise self.write_error
        self.updated.append((note_id, changes))
        note = await self.get_note(note_id)
        return note.model_copy(update=changes)

    async def delete_note(self, note_id):
        if self.write_error:
            raise self.write_error
        self.deleted.append(note_id)


@pytest.fixture
def alice():
    return _user("Alice")


@pytest.fixture
def bob():
    return _user("Bob")


@pytest.fixture
async def ctx(alice):
    api = FakeApi(alice)
    session = SessionProvider(api)
    await session.initialize()
    await session.sign_in("alice", "p@ss")
    return api, session, Notifier(), Navigator()


async def test_list_redirects_anonymous_to_login(alice):
    api = FakeApi(alice)
    session = SessionProvider(api)
    nav = Navigator("/notes")
    view = NoteListView(session, api, Notifier(), nav)

    mounting = asyncio.ensure_future(view.mount())
    await asyncio.sleep(0)
    # no redirect decision while the session is still loading
    assert nav.current == "/notes"

    await session.initialize()
    await mounting
    assert nav.current == navigation.LOGIN
    assert api.list_calls == []


async def test_dashboard_fetches_own_notes_by_updated_at(ctx, alice):
    api, session, notifier, nav = ctx
    view = NoteListView(session, api, notifier, nav, variant=ListVariant.DASHBOARD)
    await view.mount()

    assert api.list_calls == [{"owner": alice.id, "order_by": "updated_at", "ascending": False}]
    assert view.username == "Alice"


async def test_browser_fetches_all_notes_newest_first(ctx):
    api, session, notifier, nav = ctx
    view = NoteListView(session, api, notifier, nav)
    await view.mount()
    assert api.list_calls == [{"order_by": "created_at", "ascending": False}]


async def test_loading_vs_empty(ctx):
    api, session, notifier, nav = ctx
    api.gate = asyncio.Event()
    view = NoteListView(session, api, notifier, nav)

    mounting = asyncio.ensure_future(view.mount())
    await asyncio.sleep(0.01)
    assert view.loading is True
    assert view.is_empty is False

    api.gate.set()
    await mounting
    assert view.loading is False
    assert view.is_empty is True


async def test_browser_derived_view(ctx, alice, bob):
    api, session, notifier, nav = ctx
    api.notes = [
        _note(alice, "Calc Notes", "Math", minutes=1),
        _note(bob, "Rome", "History", minutes=2),
        _note(bob, "Algebra", "Math", minutes=3),
    ]
    view = NoteListView(session, api, notifier, nav)
    await view.mount()

    assert view.subjects == ["History", "Math"]
    assert [n.title for n in view.visible_notes] == ["Algebra", "Rome", "Calc Notes"]

    view.set_search("calc")
    assert [n.title for n in view.visible_notes] == ["Calc Notes"]
    view.set_subject("History")
    assert view.visible_notes == []
    view.set_search("")
    view.set_subject("")
    assert view.subject_filter == "all"

    assert view.toggle_sort() == SortOrder.OLDEST
    assert [n.title for n in view.visible_notes] == ["Calc Notes", "Rome", "Algebra"]


async def test_dashboard_keeps_server_order(ctx, alice):
    api, session, notifier, nav = ctx
    older_but_edited = _note(alice, "Edited", minutes=0)
    newer = _note(alice, "Newer", minutes=5)
    api.notes = [older_but_edited, newer]
    view = NoteListView(session, api, notifier, nav, variant=ListVariant.DASHBOARD)
    await view.mount()

    view.toggle_sort()
    assert [n.title for n in view.visible_notes] == ["Edited", "Newer"]


@pytest.mark.parametrize(
    "variant,message",
    [(ListVariant.BROWSER, "Could not load notes."), (ListVariant.DASHBOARD, "Could not load your notes.")],
)
async def test_fetch_failure_keeps_prior_rows(ctx, alice, variant, message):
    api, session, notifier, nav = ctx
    api.notes = [_note(alice)]
    view = NoteListView(session, api, notifier, nav, variant=variant)
    await view.mount()
    assert len(view.notes) == 1

    api.list_error = TransientFetchError("down")
    await view.refresh()

    assert len(view.notes) == 1
    assert view.loading is False
    assert notifier.last.description == message
    assert notifier.last.variant == NotificationVariant.DESTRUCTIVE


async def test_first_failure_leaves_list_empty_not_loaded(ctx):
    api, session, notifier, nav = ctx
    api.list_error = TransientFetchError("down")
    view = NoteListView(session, api, notifier, nav)
    await view.mount()
    assert view.notes == []
    assert view.is_empty is False


async def test_stale_response_is_discarded(ctx, alice):
    api, session, notifier, nav = ctx
    api.gate = asyncio.Event()
    api.notes = [_note(alice, "old")]
    view = NoteListView(session, api, notifier, nav)

    slow = asyncio.ensure_future(view.mount())
    await asyncio.sleep(0.01)
    view.unmount()
    api.gate.set()
    await slow

    assert view.notes == []
    assert view.loaded is False


async def test_newer_fetch_wins(ctx, alice):
    api, session, notifier, nav = ctx
    first_gate = api.gate = asyncio.Event()
    api.notes = [_note(alice, "first")]
    view = NoteListView(session, api, notifier, nav)

    first = asyncio.ensure_future(view.mount())
    await asyncio.sleep(0.01)
    api.gate = None
    api.notes = [_note(alice, "second")]
    await view.refresh()
    assert [n.title for n in view.notes] == ["second"]

    # release the first, older request
    api.notes = [_note(alice, "stale")]
    first_gate.set()
    await first
    assert [n.title for n in view.notes] == ["second"]


async def test_detail_owner_controls(ctx, alice, bob):
    api, session, notifier, nav = ctx
    mine, theirs = _note(alice), _note(bob, edited=True)
    api.notes = [mine, theirs]

    view = NoteDetailView(session, api, notifier, nav, mine.id)
    await view.mount()
    assert view.is_owner and view.can_edit and view.can_delete
    assert view.show_updated is False
    assert view.owner_name == "Alice"

    other = NoteDetailView(session, api, notifier, nav, theirs.id)
    await other.mount()
    assert not other.is_owner and not other.can_edit and not other.can_delete
    assert other.show_updated is True
    assert other.request_delete() is False
    other.edit()
    assert nav.current == "/"


async def test_detail_missing_note_redirects_to_browser(ctx):
    api, session, notifier, nav = ctx
    view = NoteDetailView(session, api, notifier, nav, uuid.uuid4())
    await view.mount()
    assert nav.current == navigation.NOTES
    assert notifier.last.description == "Could not load note."


async def test_delete_requires_confirmation(ctx, alice):
    api, session, notifier, nav = ctx
    note = _note(alice)
    api.notes = [note]
    view = NoteDetailView(session, api, notifier, nav, note.id)
    await view.mount()

    assert await view.confirm_delete() is False
    assert api.deleted == []

    assert view.request_delete() is True
    view.cancel_delete()
    assert await view.confirm_delete() is False
    assert api.deleted == []

    view.request_delete()
    assert await view.confirm_delete() is True
    assert api.deleted == [note.id]
    assert nav.current == navigation.DASHBOARD
    assert notifier.last.title == "Note deleted"


async def test_delete_failure_stays(ctx, alice):
    api, session, notifier, nav = ctx
    note = _note(alice)
    api.notes = [note]
    view = NoteDetailView(session, api, notifier, nav, note.id)
    await view.mount()
    path = nav.current

    api.write_error = TransientFetchError("down")
    view.request_delete()
    assert await view.confirm_delete() is False
    assert nav.current == path
    assert view.note is not None
    assert notifier.last.description == "Could not delete note."


async def test_editor_modes(ctx):
    api, session, notifier, nav = ctx
    assert NoteEditorView(session, api, notifier, nav).mode == EditorMode.CREATE
    assert NoteEditorView(session, api, notifier, nav, uuid.uuid4()).mode == EditorMode.EDIT


async def test_editor_validation_blocks_backend(ctx):
    api, session, notifier, nav = ctx
    view = NoteEditorView(session, api, notifier, nav)
    await view.mount()
    view.title, view.subject, view.content = "T", "   ", "C"

    assert await view.submit() is False
    assert api.created == []
    assert notifier.last.title == "Missing fields"


async def test_editor_create_failure_preserves_form(ctx):
    api, session, notifier, nav = ctx
    view = NoteEditorView(session, api, notifier, nav)
    await view.mount()
    view.title, view.subject, view.content = "T", "S", "C"

    api.write_error = TransientFetchError("down")
    assert await view.submit() is False
    assert (view.title, view.subject, view.content) == ("T", "S", "C")
    assert notifier.last.description == "Could not create note."

    api.write_error = None
    assert await view.submit() is True
    assert nav.current == navigation.note_detail(api.created[0].id)


async def test_editor_edit_foreign_note_denied(ctx, bob):
    api, session, notifier, nav = ctx
    theirs = _note(bob)
    api.notes = [theirs]
    view = NoteEditorView(session, api, notifier, nav, theirs.id)
    await view.mount()

    assert nav.current == navigation.DASHBOARD
    assert notifier.last.title == "Access Denied"
    assert notifier.last.description == "You can only edit your own notes."
    assert view.title == ""


async def test_editor_edit_load_failure(ctx):
    api, session, notifier, nav = ctx
    view = NoteEditorView(session, api, notifier, nav, uuid.uuid4())
    await view.mount()
    assert nav.current == navigation.DASHBOARD
    assert notifier.last.description == "Could not load note."


async def test_editor_update_and_cancel(ctx, alice):
    api, session, notifier, nav = ctx
    note = _note(alice)
    api.notes = [note]
    view = NoteEditorView(session, api, notifier, nav, note.id)
    await view.mount()
    assert view.title == "Calc Notes"

    view.content = "new content"
    assert await view.submit() is True
    assert api.updated == [(note.id, {"title": "Calc Notes", "subject": "Math", "content": "new content"})]
    assert nav.current == navigation.note_detail(note.id)

    view.cancel()
    assert nav.current == navigation.note_detail(note.id)
    create = NoteEditorView(session, api, notifier, nav)
    create.cancel()
    assert nav.current == navigation.DASHBOARD


async def test_shell_links_theme_menu_and_logout(ctx):
    api, session, notifier, nav = ctx
    shell = NavigationShell(session, api, notifier, nav)
    await shell.mount()

    assert shell.greeting == "Hello, Alice!"
    assert [label for label, _ in shell.links] == ["Dashboard", "Logout"]

    assert shell.toggle_theme() == Theme.DARK
    assert shell.toggle_theme() == Theme.LIGHT

    assert shell.toggle_menu() is True
    shell.go(navigation.DASHBOARD)
    assert shell.menu_open is False
    assert nav.current == navigation.DASHBOARD

    await shell.logout()
    assert session.current_user is None
    assert nav.current == navigation.HOME
    assert shell.greeting is None
    assert [label for label, _ in shell.links] == ["Login", "Register"]
    shell.unmount()


async def test_shell_uses_fetched_profile_name(ctx, alice):
    api, session, notifier, nav = ctx
    api.user = alice.model_copy(update={"username": "Alice Liddell"})
    shell = NavigationShell(session, api, notifier, nav)
    await shell.mount()
    assert shell.greeting == "Hello, Alice Liddell!"


async def test_unmount_before_session_resolves_does_not_redirect(alice):
    api = FakeApi(alice)
    session = SessionProvider(api)
    nav = Navigator("/notes")
    view = NoteListView(session, api, Notifier(), nav)

    mounting = asyncio.ensure_future(view.mount())
    await asyncio.sleep(0)
    view.unmount()
    nav.navigate(navigation.REGISTER)

    await session.initialize()
    await mounting
    assert nav.history == ["/notes", navigation.REGISTER]


async def test_unmount_before_sign_in_skips_fetch(alice):
    api = FakeApi(alice)
    api.notes = [_note(alice)]
    session = SessionProvider(api)
    view = NoteListView(session, api, Notifier(), Navigator("/notes"))

    mounting = asyncio.ensure_future(view.mount())
    await asyncio.sleep(0)
    view.unmount()

    await session.sign_in("alice", "p@ss")
    await mounting
    assert api.list_calls == []
    assert view.notes == []


@pytest.mark.parametrize("make_view", [
    lambda deps, note_id: NoteDetailView(*deps, note_id),
    lambda deps, note_id: NoteEditorView(*deps, note_id),
    lambda deps, note_id: HomeView(*deps),
])
async def test_unmounted_views_leave_navigation_alone(alice, make_view):
    api = FakeApi(alice)
    session = SessionProvider(api)
    notifier, nav = Notifier(), Navigator("/somewhere")
    view = make_view((session, api, notifier, nav), uuid.uuid4())

    mounting = asyncio.ensure_future(view.mount())
    await asyncio.sleep(0)
    view.unmount()

    await session.sign_in("alice", "p@ss")
    await mounting
    assert nav.history == ["/somewhere"]
    assert notifier.last is None


async def test_remount_after_unmount_fetches_again(ctx, alice):
    api, session, notifier, nav = ctx
    api.notes = [_note(alice)]
    view = NoteListView(session, api, notifier, nav)
    await view.mount()
    view.unmount()

    await view.mount()
    assert len(api.list_calls) == 2
    assert len(view.notes) == 1


async def test_list_open_and_new_note_navigation(ctx, alice):
    api, session, notifier, nav = ctx
    note = _note(alice)
    api.notes = [note]
    view = NoteListView(session, api, notifier, nav, variant=ListVariant.DASHBOARD)
    await view.mount()

    view.open_note(note.id)
    assert nav.current == navigation.note_detail(note.id)
    view.new_note()
    assert nav.current == navigation.NOTE_NEW


async def test_shell_go_home_closes_menu(ctx):
    api, session, notifier, nav = ctx
    nav.navigate(navigation.DASHBOARD)
    shell = NavigationShell(session, api, notifier, nav)
    await shell.mount()

    shell.toggle_menu()
    shell.go_home()
    assert shell.menu_open is False
    assert nav.current == navigation.HOME
    shell.unmount()
