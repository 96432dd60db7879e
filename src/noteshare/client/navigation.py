"""Client routes and a minimal history-keeping navigator."""

import logging
from typing import Callable, List, Union
from uuid import UUID

logger = logging.getLogger(__name__)

HOME = "/"
LOGIN = "/login"
REGISTER = "/register"
DASHBOARD = "/dashboard"
NOTES = "/notes"
NOTE_NEW = "/notes/new"


def note_detail(note_id: Union[UUID, str]) -> str:
    return f"{NOTES}/{note_id}"


def note_edit(note_id: Union[UUID, str]) -> str:
    return f"{NOTES}/{note_id}/edit"


class Navigator:
    """Tracks the active route; listeners run on every navigation."""

    def __init__(self, initial: str = HOME):
        self.history: List[str] = [initial]
        self._listeners: List[Callable[[str], None]] = []

    @property
    def current(self) -> str:
        return self.history[-1]

    def navigate(self, path: str, replace: bool = False) -> None:
        if replace:
            self.history[-1] = path
        else:
            self.history.append(path)
        logger.debug(f"navigate -> {path}")
        for listener in list(self._listeners):
            listener(path)

    def back(self) -> str:
        if len(self.history) > 1:
            self.history.pop()
        return self.current

    def subscribe(self, listener: Callable[[str], None]) -> Callable[[], None]:
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)
