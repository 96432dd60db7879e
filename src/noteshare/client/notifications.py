"""Dismissible, non-blocking notifications (toasts)."""

import itertools
import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

logger = logging.getLogger(__name__)


class NotificationVariant(str, Enum):
    DEFAULT = "default"
    DESTRUCTIVE = "destructive"


@dataclass
class Notification:
    id: int
    title: str
    description: Optional[str] = None
    variant: NotificationVariant = NotificationVariant.DEFAULT


class Notifier:
    """Collects notifications until they are dismissed."""

    def __init__(self):
        self._ids = itertools.count(1)
        self.notifications: List[Notification] = []

    def notify(
        self,
        title: str,
        description: Optional[str] = None,
        variant: NotificationVariant = NotificationVariant.DEFAULT,
    ) -> Notification:
        notification = Notification(next(self._ids), title, description, variant)
        self.notifications.append(notification)
        log = logger.warning if variant == NotificationVariant.DESTRUCTIVE else logger.info
        log(f"{title}: {description}" if description else title)
        return notification

    def error(self, title: str, description: Optional[str] = None) -> Notification:
        return self.notify(title, description, NotificationVariant.DESTRUCTIVE)

    def dismiss(self, notification_id: int) -> None:
        self.notifications = [n for n in self.notifications if n.id != notification_id]

    def clear(self) -> None:
        self.notifications.clear()

    @property
    def last(self) -> Optional[Notification]:
        return self.notifications[-1] if self.notifications else None
