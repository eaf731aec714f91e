from __future__ import annotations

import asyncio

import pytest

from bustrack_admin.notifications import NotificationQueue, NotificationType


class _Clock:
    def __init__(self, now: float = 1_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


def test_notification_expires_after_ttl() -> None:
    clock = _Clock()
    queue = NotificationQueue(ttl=5.0, clock=clock)
    queue.success("Buses loaded successfully")

    clock.now += 4.999
    assert queue.messages() == ["Buses loaded successfully"]

    clock.now += 0.002
    assert queue.messages() == []


def test_expiry_is_per_notification() -> None:
    clock = _Clock()
    queue = NotificationQueue(ttl=5.0, clock=clock)
    queue.success("first")
    clock.now += 3.0
    queue.error("second")

    clock.now += 2.5
    assert queue.messages() == ["second"]
    latest = queue.latest()
    assert latest is not None and latest.type is NotificationType.ERROR


def test_ids_unique_within_same_millisecond() -> None:
    queue = NotificationQueue(clock=_Clock())
    ids = {queue.error("Failed to fetch buses. Please try again.").id for _ in range(3)}
    assert len(ids) == 3


def test_identical_messages_stack() -> None:
    queue = NotificationQueue(clock=_Clock())
    queue.error("boom")
    queue.error("boom")
    assert queue.messages() == ["boom", "boom"]
    assert len(queue) == 2


def test_dismiss_and_clear() -> None:
    queue = NotificationQueue(clock=_Clock())
    first = queue.success("a")
    queue.success("b")

    queue.dismiss(first.id)
    assert queue.messages() == ["b"]

    queue.clear()
    assert queue.latest() is None


@pytest.mark.asyncio
async def test_timer_removes_notification_without_polling() -> None:
    # Frozen clock: only the loop timer can evict.
    queue = NotificationQueue(ttl=0.05, clock=_Clock())
    queue.success("saved")

    await asyncio.sleep(0.15)

    assert queue.messages() == []
