"""High-level async client for the bus-tracking admin API."""

from __future__ import annotations

import logging
from typing import Any

import aiohttp

from bustrack_admin._api import auth as _auth_api
from bustrack_admin._api import buses as _buses_api
from bustrack_admin._api import users as _users_api
from bustrack_admin._transport import HttpTransport, Transport
from bustrack_admin.config import AdminConfig
from bustrack_admin.exceptions import BusTrackError
from bustrack_admin.models.auth import LoginResponse
from bustrack_admin.models.bus import Bus
from bustrack_admin.models.forms import (
    BusForm,
    LoginForm,
    PasswordChangeForm,
    PasswordResetForm,
    ProfileForm,
)
from bustrack_admin.models.user import UserPage
from bustrack_admin.session import SessionStore
from bustrack_admin.storage import DurableStorage, JsonFileStorage

_logger = logging.getLogger(__name__)


class BusTrackClient:
    """Async client for the bus-tracking admin API.

    The client owns the HTTP transport and the :class:`SessionStore`; every
    authenticated call reads the bearer token from the store.

    Usage::

        async with BusTrackClient(config) as client:
            if await client.session.login("admin@example.com", "secret"):
                buses = await client.list_buses()
    """

    def __init__(
        self,
        config: AdminConfig,
        *,
        storage: DurableStorage | None = None,
        http_session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
    ) -> None:
        self._config = config
        self._external_session = http_session is not None
        self._http_session = http_session
        self._transport: Transport | None = transport
        self._owns_transport = transport is None
        self._storage = storage if storage is not None else JsonFileStorage(config.storage_path)
        self.session = SessionStore(self._storage, self.authenticate)

    @property
    def config(self) -> AdminConfig:
        return self._config

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> BusTrackClient:
        if self._owns_transport:
            if self._http_session is None:
                self._http_session = aiohttp.ClientSession()
            self._transport = HttpTransport(self._config, self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        if self._owns_transport:
            self._transport = None

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise BusTrackError("Client not initialized. Use 'async with BusTrackClient(...) as client:'")
        return self._transport

    # ------------------------------------------------------------------
    # Authentication (no token required)
    # ------------------------------------------------------------------

    async def authenticate(self, email: str, password: str) -> LoginResponse:
        """Call the admin login endpoint; raises on any failure.

        Most callers want :meth:`SessionStore.login` instead, which persists
        the result and collapses failures to ``False``.
        """
        return await _auth_api.login_admin(self._require_transport(), LoginForm(email=email, password=password))

    async def request_password_reset(self, email: str) -> str:
        return await _auth_api.request_password_reset(self._require_transport(), email)

    async def reset_password(self, form: PasswordResetForm) -> None:
        await _auth_api.reset_password(self._require_transport(), form)

    # ------------------------------------------------------------------
    # Buses
    # ------------------------------------------------------------------

    async def list_buses(self) -> list[Bus]:
        return await _buses_api.fetch_buses(self._require_transport(), self.session.token)

    async def create_bus(self, form: BusForm) -> Bus:
        return await _buses_api.create_bus(self._require_transport(), self.session.token, form)

    async def update_bus(self, bus_id: int, form: BusForm) -> Bus | None:
        return await _buses_api.update_bus(self._require_transport(), self.session.token, bus_id, form)

    async def set_bus_active(self, bus: Bus, active: bool) -> Bus:
        """Flip a bus's active flag, returning the server copy when sent."""
        form = BusForm.from_bus(bus).model_copy(update={"is_active": active})
        updated = await self.update_bus(bus.id, form)
        return updated if updated is not None else bus.model_copy(update={"is_active": active})

    async def delete_bus(self, bus_id: int) -> None:
        await _buses_api.delete_bus(self._require_transport(), self.session.token, bus_id)

    # ------------------------------------------------------------------
    # Users and profile
    # ------------------------------------------------------------------

    async def list_users(self, page: int = 1) -> UserPage:
        return await _users_api.fetch_user_page(self._require_transport(), self.session.token, page)

    async def delete_user(self, user_id: int) -> None:
        await _users_api.delete_user(self._require_transport(), self.session.token, user_id)

    async def update_profile(self, form: ProfileForm) -> None:
        await _users_api.update_profile(self._require_transport(), self.session.token, form)

    async def change_password(self, form: PasswordChangeForm) -> None:
        await _users_api.change_password(self._require_transport(), self.session.token, form)
