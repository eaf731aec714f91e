"""Route table and authentication guard.

The guard is re-evaluated on every navigation; its decision is never
cached. While the session is still loading from storage nothing renders,
which avoids flashing protected content at the cost of a blank screen.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from bustrack_admin.session import Session
from bustrack_admin.views.auth import ForgotPasswordView, LoginView
from bustrack_admin.views.base import View
from bustrack_admin.views.buses import BusesView
from bustrack_admin.views.dashboard import AdminLayout, DashboardView
from bustrack_admin.views.profile import ProfileView
from bustrack_admin.views.users import UsersView

if TYPE_CHECKING:
    from bustrack_admin.client import BusTrackClient

_logger = logging.getLogger(__name__)

LOGIN_PATH = "/login"

# Guards against redirect cycles between views; two hops cover every route.
_MAX_REDIRECTS = 5

ViewFactory = Callable[["BusTrackClient"], View]


class GuardOutcome(StrEnum):
    PENDING = "pending"
    REDIRECT = "redirect"
    ALLOW = "allow"


class RouteGuard:
    """Three-state gate in front of protected routes."""

    def __init__(self, login_path: str = LOGIN_PATH) -> None:
        self.login_path = login_path

    def check(self, session: Session) -> GuardOutcome:
        if session.loading:
            return GuardOutcome.PENDING
        if not session.is_authenticated:
            return GuardOutcome.REDIRECT
        return GuardOutcome.ALLOW


@dataclass(frozen=True)
class Route:
    path: str
    factory: ViewFactory
    protected: bool = False


@dataclass
class Navigation:
    """Result of :meth:`Router.navigate`.

    ``view`` is ``None`` only while the session is still loading.
    """

    requested: str
    path: str
    outcome: GuardOutcome
    view: View | None = None
    layout: AdminLayout | None = None

    @property
    def redirected(self) -> bool:
        return self.requested != self.path

    @property
    def rendered(self) -> bool:
        return self.view is not None


DEFAULT_ROUTES: tuple[Route, ...] = (
    Route(LoginView.path, LoginView),
    Route(ForgotPasswordView.path, ForgotPasswordView),
    Route(DashboardView.path, DashboardView, protected=True),
    Route(BusesView.path, BusesView, protected=True),
    Route(UsersView.path, UsersView, protected=True),
    Route(ProfileView.path, ProfileView, protected=True),
)


class Router:
    """Maps paths to freshly mounted views.

    ``/`` and unknown paths redirect to the login route. Each navigation
    unmounts the current view and mounts a new instance, so resource views
    refetch every time they are visited.
    """

    def __init__(
        self,
        client: BusTrackClient,
        *,
        routes: tuple[Route, ...] = DEFAULT_ROUTES,
        guard: RouteGuard | None = None,
    ) -> None:
        self._client = client
        self._routes = {route.path: route for route in routes}
        self._guard = guard or RouteGuard()
        self.current: Navigation | None = None

    def resolve(self, path: str) -> Route | None:
        normalized = "/" + path.strip().strip("/")
        return self._routes.get(normalized)

    async def navigate(self, path: str) -> Navigation:
        requested = path
        target = path
        guard_redirected = False
        for _ in range(_MAX_REDIRECTS):
            route = self.resolve(target)
            if route is None:
                target = self._guard.login_path
                continue

            outcome = GuardOutcome.ALLOW
            if route.protected:
                outcome = self._guard.check(self._client.session.session)
                if outcome is GuardOutcome.PENDING:
                    self._unmount_current()
                    return self._commit(Navigation(requested=requested, path=route.path, outcome=outcome))
                if outcome is GuardOutcome.REDIRECT:
                    _logger.debug("Guard redirect %s -> %s", route.path, self._guard.login_path)
                    guard_redirected = True
                    target = self._guard.login_path
                    continue
            if guard_redirected:
                outcome = GuardOutcome.REDIRECT

            view = route.factory(self._client)
            self._unmount_current()
            redirect = await view.mount()
            if redirect is not None and redirect != route.path:
                view.unmount()
                target = redirect
                continue

            layout = AdminLayout(self._client, route.path) if route.protected else None
            return self._commit(
                Navigation(requested=requested, path=route.path, outcome=outcome, view=view, layout=layout)
            )
        raise RuntimeError(f"Too many redirects while navigating to {requested!r}")

    def _commit(self, navigation: Navigation) -> Navigation:
        self.current = navigation
        return navigation

    def _unmount_current(self) -> None:
        if self.current is not None and self.current.view is not None:
            self.current.view.unmount()
