"""Shared view plumbing.

A view is what a route renders. It is mounted on every navigation to its
path and unmounted when the router moves elsewhere. Views never let a
:class:`~bustrack_admin.exceptions.BusTrackError` escape: each failure is
logged once and turned into a notification or popup.
"""

from __future__ import annotations

import abc
import asyncio
import logging
from enum import StrEnum
from typing import TYPE_CHECKING, ClassVar

from pydantic import BaseModel, ConfigDict

from bustrack_admin.exceptions import ApiError, BusTrackError
from bustrack_admin.notifications import NotificationQueue
from bustrack_admin.session import Session

if TYPE_CHECKING:
    from bustrack_admin.client import BusTrackClient

_logger = logging.getLogger(__name__)


def error_message(exc: BusTrackError, fallback: str, *, prefer_server: bool = True) -> str:
    """Text shown to the user for *exc*: the API's own message, else *fallback*."""
    if prefer_server and isinstance(exc, ApiError) and exc.server_message:
        return exc.server_message
    return fallback


class PopupType(StrEnum):
    SUCCESS = "success"
    ERROR = "error"


class Popup(BaseModel):
    """Modal message used by the profile and password reset screens."""

    model_config = ConfigDict(frozen=True)

    title: str
    message: str
    type: PopupType
    redirect: str | None = None
    """Path to navigate to once the popup is acknowledged."""


class View:
    """Base for everything a route can render."""

    path: ClassVar[str] = ""
    title: ClassVar[str] = ""

    def __init__(self, client: BusTrackClient) -> None:
        self._client = client
        self.mounted = False

    @property
    def session(self) -> Session:
        return self._client.session.session

    async def mount(self) -> str | None:
        """Prepare the view; returns a redirect path or ``None`` to render."""
        self.mounted = True
        return None

    def unmount(self) -> None:
        self.mounted = False


class PopupView(View):
    """View reporting outcomes through a single :class:`Popup`."""

    def __init__(self, client: BusTrackClient) -> None:
        super().__init__(client)
        self.popup: Popup | None = None
        self.loading = False

    def show_popup(
        self,
        title: str,
        message: str,
        type: PopupType,
        *,
        redirect: str | None = None,
    ) -> Popup:
        self.popup = Popup(title=title, message=message, type=type, redirect=redirect)
        return self.popup

    def close_popup(self) -> str | None:
        """Dismiss the popup, returning its redirect target if any."""
        popup, self.popup = self.popup, None
        return popup.redirect if popup is not None else None


class ResourceView(View, abc.ABC):
    """View bound to one API collection.

    Fetches on mount and again whenever the session token changes while
    mounted. There is no in-flight guard: overlapping refreshes may finish
    out of order and the last one to finish wins.
    """

    resource_name: ClassVar[str] = ""

    def __init__(self, client: BusTrackClient) -> None:
        super().__init__(client)
        self.notifications = NotificationQueue(ttl=client.config.notification_ttl)
        self.loading = True
        # None until the first fetch finishes.
        self.last_fetch_ok: bool | None = None
        self._loaded_token: str | None = None
        self._unsubscribe = None
        self._refresh_task: asyncio.Task[bool] | None = None

    async def mount(self) -> str | None:
        await super().mount()
        self._unsubscribe = self._client.session.subscribe(self._on_session_changed)
        if self.session.token:
            await self.refresh()
        return None

    def unmount(self) -> None:
        super().unmount()
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self.notifications.clear()

    @abc.abstractmethod
    async def refresh(self) -> bool:
        """Refetch the collection; returns whether the fetch succeeded."""

    async def wait_idle(self) -> None:
        """Await a refresh scheduled by a token change, if one is pending."""
        task = self._refresh_task
        if task is not None and not task.done():
            await task

    def _on_session_changed(self, session: Session) -> None:
        if not session.token or session.token == self._loaded_token:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return
        self._refresh_task = loop.create_task(self.refresh())

    def _remember_token(self) -> None:
        self._loaded_token = self.session.token

    def _report_failure(
        self,
        action: str,
        exc: BusTrackError,
        fallback: str,
        *,
        prefer_server: bool = True,
    ) -> None:
        _logger.warning("Failed to %s: %s", action, exc)
        self.notifications.error(error_message(exc, fallback, prefer_server=prefer_server))
