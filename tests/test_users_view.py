from __future__ import annotations

import pytest

from bustrack_admin.client import BusTrackClient
from bustrack_admin.views import UsersView
from bustrack_admin.views.base import ResourceView

from conftest import FakeAdminBackend


async def _mounted(client: BusTrackClient) -> UsersView:
    view = UsersView(client)
    await view.mount()
    return view


@pytest.mark.asyncio
async def test_first_page_and_counters(logged_in_client: BusTrackClient) -> None:
    view = await _mounted(logged_in_client)

    assert [user.id for user in view.page_rows] == [1, 2]
    assert (view.admin_count, view.user_count) == (1, 1)
    assert view.summary == "Showing page 1 of 3 - Total 5 users"
    assert view.notifications.messages() == ["Users loaded successfully"]


@pytest.mark.asyncio
async def test_paging_requests_each_page_from_server(
    logged_in_client: BusTrackClient, backend: FakeAdminBackend
) -> None:
    view = await _mounted(logged_in_client)

    assert await view.next_page()
    assert [user.id for user in view.page_rows] == [3, 4]
    assert await view.next_page()
    assert [user.id for user in view.page_rows] == [5]
    assert not await view.next_page()
    assert await view.go_to_page(1)
    assert not await view.previous_page()

    assert backend.count("GET", "/bta/users") == 4


@pytest.mark.asyncio
async def test_fetch_failure_message(logged_in_client: BusTrackClient, backend: FakeAdminBackend) -> None:
    backend.fail("GET", "/bta/users", 500, "boom")

    view = await _mounted(logged_in_client)

    assert view.page_rows == []
    assert view.notifications.messages() == ["Failed to fetch users. Please try again."]
    assert view.last_fetch_ok is False
    assert view.summary == "Showing page 1 of 1 - Total 0 users"


@pytest.mark.asyncio
async def test_delete_user_calls_api_then_drops_row(
    logged_in_client: BusTrackClient, backend: FakeAdminBackend
) -> None:
    view = await _mounted(logged_in_client)

    assert await view.delete_user(2)

    assert backend.count("DELETE", "/bta/users/2") == 1
    assert [user.id for user in view.page_rows] == [1]
    assert view.users.total == 4
    assert view.notifications.messages()[-1] == "User deleted successfully"


@pytest.mark.asyncio
async def test_delete_user_failure_keeps_row(logged_in_client: BusTrackClient, backend: FakeAdminBackend) -> None:
    backend.fail("DELETE", "/bta/users/2", 403, "This action is unauthorized.")
    view = await _mounted(logged_in_client)

    assert not await view.delete_user(2)

    assert [user.id for user in view.page_rows] == [1, 2]
    assert view.notifications.messages()[-1] == "This action is unauthorized."


def test_resource_view_requires_refresh_override(client: BusTrackClient) -> None:
    with pytest.raises(TypeError):
        ResourceView(client)  # type: ignore[abstract]
