from __future__ import annotations

import copy
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import pytest
import pytest_asyncio

from bustrack_admin.client import BusTrackClient
from bustrack_admin.config import AdminConfig
from bustrack_admin.exceptions import ApiError, AuthenticationError
from bustrack_admin.storage import MemoryStorage

ADMIN_USER: dict[str, Any] = {"id": 1, "name": "Admin", "email": "a@b.com", "role": {"id": 1, "name": "admin"}}


def make_bus(bus_id: int, *, active: bool = True) -> dict[str, Any]:
    return {
        "id": bus_id,
        "bus_name": f"Bus {bus_id}",
        "driver_name": f"Driver {bus_id}",
        "license_plate": f"PL-{bus_id:03d}",
        "is_active": 1 if active else 0,
        "created_at": "2025-01-15T08:00:00.000000Z",
        "updated_at": "2025-01-15T08:00:00.000000Z",
    }


def make_user(user_id: int, role: str = "user") -> dict[str, Any]:
    return {
        "id": user_id,
        "name": f"User {user_id}",
        "email": f"user{user_id}@app.com",
        "role": {"id": 1 if role == "admin" else 2, "name": role},
        "created_at": "2025-02-20",
    }


@dataclass
class FakeAdminBackend:
    """In-memory stand-in for the bus-tracking API (implements ``Transport``)."""

    email: str = "a@b.com"
    password: str = "secret"
    token: str = "abc123"
    buses: list[dict[str, Any]] = field(default_factory=list)
    users: list[dict[str, Any]] = field(default_factory=list)
    users_per_page: int = 2
    reset_token: str = "reset-1"
    failures: dict[tuple[str, str], tuple[int, str | None]] = field(default_factory=dict)
    calls: list[tuple[str, str]] = field(default_factory=list)
    bodies: list[dict[str, Any] | None] = field(default_factory=list)

    def fail(self, method: str, endpoint: str, status: int = 500, message: str | None = None) -> None:
        self.failures[(method, endpoint)] = (status, message)

    def count(self, method: str, endpoint: str) -> int:
        return self.calls.count((method, endpoint))

    def _raise(self, endpoint: str, status: int, message: str | None) -> None:
        error_cls = AuthenticationError if status in (401, 403) else ApiError
        raise error_cls(f"HTTP {status} from {endpoint}", status_code=status, endpoint=endpoint, server_message=message)

    def _bus_index(self, endpoint: str) -> int:
        bus_id = int(endpoint.rsplit("/", 1)[1])
        for index, bus in enumerate(self.buses):
            if bus["id"] == bus_id:
                return index
        self._raise(endpoint, 404, "Bus not found")
        raise AssertionError("unreachable")

    async def request(
        self,
        method: str,
        endpoint: str,
        *,
        token: str | None = None,
        json: Mapping[str, Any] | None = None,
        params: Mapping[str, Any] | None = None,
    ) -> Any:
        self.calls.append((method, endpoint))
        self.bodies.append(dict(json) if json is not None else None)

        failure = self.failures.get((method, endpoint))
        if failure is not None:
            self._raise(endpoint, *failure)

        if endpoint == "/auth/login-admin":
            assert json is not None
            if json.get("email") != self.email or json.get("password") != self.password:
                self._raise(endpoint, 401, "Invalid credentials")
            return {"token": self.token, "user": copy.deepcopy(ADMIN_USER)}

        if endpoint == "/update/forgot-password":
            assert json is not None
            if json.get("email") != self.email:
                self._raise(endpoint, 404, "Email not found")
            return {"token": self.reset_token}

        if endpoint == "/update/reset-password":
            assert json is not None
            if json.get("token") != self.reset_token:
                self._raise(endpoint, 422, "Invalid reset token")
            self.password = str(json["password"])
            return {"message": "Password reset"}

        if token != self.token:
            self._raise(endpoint, 401, "Unauthenticated.")

        if endpoint == "/buses" and method == "GET":
            return {"data": copy.deepcopy(self.buses)}
        if endpoint == "/buses" and method == "POST":
            assert json is not None
            new_id = max((bus["id"] for bus in self.buses), default=0) + 1
            bus = {**make_bus(new_id), **json, "id": new_id}
            self.buses.append(bus)
            return copy.deepcopy(bus)
        if endpoint.startswith("/buses/") and method == "PUT":
            assert json is not None
            index = self._bus_index(endpoint)
            self.buses[index] = {**self.buses[index], **json, "updated_at": "2025-03-01T00:00:00Z"}
            return copy.deepcopy(self.buses[index])
        if endpoint.startswith("/buses/") and method == "DELETE":
            del self.buses[self._bus_index(endpoint)]
            return None

        if endpoint == "/bta/users" and method == "GET":
            page = int((params or {}).get("page", 1))
            size = self.users_per_page
            last_page = max(1, -(-len(self.users) // size))
            start = (page - 1) * size
            return {
                "data": {
                    "data": copy.deepcopy(self.users[start : start + size]),
                    "current_page": page,
                    "last_page": last_page,
                    "total": len(self.users),
                }
            }
        if endpoint.startswith("/bta/users/") and method == "DELETE":
            user_id = int(endpoint.rsplit("/", 1)[1])
            self.users = [user for user in self.users if user["id"] != user_id]
            return {"message": "User deleted"}

        if endpoint == "/update/info":
            return {"message": "Profile updated"}
        if endpoint == "/bta/direct/password":
            assert json is not None
            if json.get("current_password") != self.password:
                self._raise(endpoint, 422, "Current password is incorrect")
            self.password = str(json["new_password"])
            return {"message": "Password changed"}

        self._raise(endpoint, 404, "Not found")


@pytest.fixture
def config() -> AdminConfig:
    return AdminConfig(base_url="https://api.test/api")


@pytest.fixture
def backend() -> FakeAdminBackend:
    return FakeAdminBackend(
        buses=[make_bus(i, active=i % 2 == 1) for i in range(1, 8)],
        users=[make_user(1, "admin"), make_user(2), make_user(3), make_user(4), make_user(5)],
    )


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def client(config: AdminConfig, backend: FakeAdminBackend, storage: MemoryStorage) -> BusTrackClient:
    return BusTrackClient(config, storage=storage, transport=backend)


@pytest_asyncio.fixture
async def logged_in_client(client: BusTrackClient) -> BusTrackClient:
    assert await client.session.login("a@b.com", "secret")
    return client
