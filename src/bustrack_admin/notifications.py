"""Ephemeral, auto-expiring notifications shown by each view.

A notification expires ``ttl`` seconds after it was added, whatever the
user does. Expiry is enforced twice: lazily by :meth:`NotificationQueue.visible`
against the injected clock, and eagerly by a ``loop.call_later`` timer when
an event loop is running. There is no cap on queue depth and no
de-duplication, so repeated identical failures stack.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Callable
from enum import StrEnum

from pydantic import BaseModel, ConfigDict

from bustrack_admin._constants import DEFAULT_NOTIFICATION_TTL


class NotificationType(StrEnum):
    SUCCESS = "success"
    ERROR = "error"


class Notification(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    """Creation timestamp in milliseconds, bumped to stay unique."""
    message: str
    type: NotificationType
    created_at: float
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at


class NotificationQueue:
    """Time-ordered expiry queue of :class:`Notification` objects."""

    def __init__(
        self,
        *,
        ttl: float = DEFAULT_NOTIFICATION_TTL,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._ttl = ttl
        self._clock = clock
        self._items: list[Notification] = []
        self._timers: dict[int, asyncio.TimerHandle] = {}
        self._last_id = 0

    @property
    def ttl(self) -> float:
        return self._ttl

    def add(self, message: str, type: NotificationType | str = NotificationType.SUCCESS) -> Notification:
        now = self._clock()
        notification_id = max(int(now * 1000), self._last_id + 1)
        self._last_id = notification_id
        notification = Notification(
            id=notification_id,
            message=message,
            type=NotificationType(type),
            created_at=now,
            expires_at=now + self._ttl,
        )
        self._items.append(notification)
        self._schedule_removal(notification_id)
        return notification

    def success(self, message: str) -> Notification:
        return self.add(message, NotificationType.SUCCESS)

    def error(self, message: str) -> Notification:
        return self.add(message, NotificationType.ERROR)

    def visible(self) -> list[Notification]:
        """Notifications still alive at the current clock reading."""
        now = self._clock()
        self._items = [n for n in self._items if not n.is_expired(now)]
        return list(self._items)

    def messages(self) -> list[str]:
        return [n.message for n in self.visible()]

    def latest(self) -> Notification | None:
        items = self.visible()
        return items[-1] if items else None

    def dismiss(self, notification_id: int) -> None:
        self._items = [n for n in self._items if n.id != notification_id]
        timer = self._timers.pop(notification_id, None)
        if timer is not None:
            timer.cancel()

    def clear(self) -> None:
        for timer in self._timers.values():
            timer.cancel()
        self._timers.clear()
        self._items.clear()

    def __len__(self) -> int:
        return len(self.visible())

    def _schedule_removal(self, notification_id: int) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return
        self._timers[notification_id] = loop.call_later(self._ttl, self.dismiss, notification_id)
