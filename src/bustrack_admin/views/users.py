"""User accounts screen."""

from __future__ import annotations

from typing import TYPE_CHECKING

from bustrack_admin.exceptions import BusTrackError
from bustrack_admin.models.user import User
from bustrack_admin.pagination import PageResult, PaginatedList, ServerPagePagination
from bustrack_admin.views.base import ResourceView

if TYPE_CHECKING:
    from bustrack_admin.client import BusTrackClient


class UsersView(ResourceView):
    """User table paged by the server (``?page=N``)."""

    path = "/users"
    title = "Users"
    resource_name = "users"

    def __init__(self, client: BusTrackClient) -> None:
        super().__init__(client)
        self.users: PaginatedList[User] = PaginatedList(ServerPagePagination(self._fetch_page))

    async def _fetch_page(self, page: int) -> PageResult[User]:
        result = await self._client.list_users(page)
        return PageResult(
            items=result.items,
            current_page=result.current_page,
            last_page=result.last_page,
            total=result.total,
        )

    @property
    def page_rows(self) -> list[User]:
        return self.users.page_items

    @property
    def admin_count(self) -> int:
        return sum(1 for user in self.users.items if user.is_admin)

    @property
    def user_count(self) -> int:
        return sum(1 for user in self.users.items if not user.is_admin)

    @property
    def summary(self) -> str:
        last_page = max(1, self.users.last_page)
        return f"Showing page {self.users.current_page} of {last_page} - Total {self.users.total} users"

    async def refresh(self) -> bool:
        return await self._load(self.users.current_page)

    async def _load(self, page: int) -> bool:
        self._remember_token()
        self.loading = True
        try:
            await self.users.load(page)
        except BusTrackError as exc:
            self._report_failure("fetch users", exc, "Failed to fetch users. Please try again.", prefer_server=False)
            self.last_fetch_ok = False
            return False
        finally:
            self.loading = False
        self.last_fetch_ok = True
        self.notifications.success("Users loaded successfully")
        return True

    async def next_page(self) -> bool:
        if not self.users.has_next:
            return False
        return await self._load(self.users.current_page + 1)

    async def previous_page(self) -> bool:
        if not self.users.has_previous:
            return False
        return await self._load(self.users.current_page - 1)

    async def go_to_page(self, page: int) -> bool:
        return await self._load(page)

    async def delete_user(self, user_id: int) -> bool:
        """Delete on the server, then drop the row locally."""
        try:
            await self._client.delete_user(user_id)
        except BusTrackError as exc:
            self._report_failure("delete user", exc, "Failed to delete user. Please try again.")
            return False

        self.users.remove(lambda user: user.id == user_id)
        self.notifications.success("User deleted successfully")
        return True
