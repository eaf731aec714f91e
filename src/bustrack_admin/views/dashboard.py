"""Landing screen and the admin layout wrapped around protected views."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING

from bustrack_admin.views.base import View

if TYPE_CHECKING:
    from bustrack_admin.client import BusTrackClient


@dataclass(frozen=True)
class NavLink:
    name: str
    to: str


class AdminLayout:
    """Sidebar shared by every protected screen."""

    LINKS: tuple[NavLink, ...] = (
        NavLink("Dashboard", "/dashboard"),
        NavLink("Buses", "/buses"),
        NavLink("Users", "/users"),
        NavLink("Profile", "/profile"),
    )

    def __init__(self, client: BusTrackClient, active_path: str) -> None:
        self._client = client
        self.active_path = active_path

    @property
    def links(self) -> tuple[NavLink, ...]:
        return self.LINKS

    @property
    def user_name(self) -> str:
        user = self._client.session.user
        return user.name if user is not None else ""

    def is_active(self, link: NavLink) -> bool:
        return link.to == self.active_path

    def logout(self) -> str:
        self._client.session.logout()
        return "/login"


class DashboardView(View):
    path = "/dashboard"
    title = "Welcome to Bus Tracker Admin"
    subtitle = "Manage your transportation system efficiently and effectively"
    instructions: tuple[str, ...] = (
        "Use the sidebar to navigate through different sections",
        "Track buses, manage users, and monitor system performance",
        "Everything you need is just a click away",
    )

    def __init__(self, client: BusTrackClient, *, now: Callable[[], datetime] = datetime.now) -> None:
        super().__init__(client)
        self._now = now

    @property
    def time_text(self) -> str:
        return self._now().strftime("%H:%M")

    @property
    def date_text(self) -> str:
        moment = self._now()
        return f"{moment:%A}, {moment:%B} {moment.day}, {moment.year}"
