"""Fleet management screen."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from bustrack_admin.exceptions import BusTrackError, FormValidationError
from bustrack_admin.models.bus import Bus
from bustrack_admin.models.forms import BusForm
from bustrack_admin.pagination import ClientSlicePagination, PaginatedList
from bustrack_admin.views.base import ResourceView

if TYPE_CHECKING:
    from bustrack_admin.client import BusTrackClient


def _utc_iso() -> str:
    return datetime.now(UTC).isoformat()


class BusesView(ResourceView):
    """Bus table with client-side pagination.

    Every mutation patches the local list first, then refetches the full
    fleet so the table converges on the server's state.
    """

    path = "/buses"
    title = "Buses"
    resource_name = "buses"

    def __init__(self, client: BusTrackClient) -> None:
        super().__init__(client)
        self.buses: PaginatedList[Bus] = PaginatedList(
            ClientSlicePagination(client.list_buses, page_size=client.config.bus_page_size)
        )

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    @property
    def page_rows(self) -> list[Bus]:
        return self.buses.page_items

    @property
    def total_count(self) -> int:
        return len(self.buses.items)

    @property
    def active_count(self) -> int:
        return sum(1 for bus in self.buses.items if bus.is_active)

    @property
    def inactive_count(self) -> int:
        return self.total_count - self.active_count

    @property
    def summary(self) -> str:
        return f"Showing {self.buses.range_start} - {self.buses.range_end} of {self.buses.total} buses"

    def find(self, bus_id: int) -> Bus | None:
        return next((bus for bus in self.buses.items if bus.id == bus_id), None)

    async def refresh(self) -> bool:
        self._remember_token()
        self.loading = True
        try:
            await self.buses.load()
        except BusTrackError as exc:
            self._report_failure("fetch buses", exc, "Failed to fetch buses. Please try again.", prefer_server=False)
            self.last_fetch_ok = False
            return False
        finally:
            self.loading = False
        self.last_fetch_ok = True
        self.notifications.success("Buses loaded successfully")
        return True

    async def next_page(self) -> None:
        await self.buses.next_page()

    async def previous_page(self) -> None:
        await self.buses.previous_page()

    async def go_to_page(self, page: int) -> None:
        await self.buses.go_to(page)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def add_bus(self, form: BusForm) -> bool:
        try:
            form.ensure_complete()
        except FormValidationError as exc:
            self.notifications.error(str(exc))
            return False

        try:
            created = await self._client.create_bus(form)
        except BusTrackError as exc:
            self._report_failure("add bus", exc, "Failed to add bus. Please try again.")
            return False

        self.buses.append(created)
        self.notifications.success("Bus added successfully")
        await self.refresh()
        return True

    async def edit_bus(self, bus_id: int, form: BusForm) -> bool:
        """Replace every editable field of the bus with *form*.

        Start from ``BusForm.from_bus(current)`` to change only some fields.
        """
        try:
            form.ensure_complete()
        except FormValidationError as exc:
            self.notifications.error(str(exc))
            return False

        try:
            await self._client.update_bus(bus_id, form)
        except BusTrackError as exc:
            self._report_failure("update bus", exc, "Failed to update bus. Please try again.")
            return False

        patch = {**form.payload(), "updated_at": _utc_iso()}
        self.buses.replace(lambda bus: bus.id == bus_id, lambda bus: bus.model_copy(update=patch))
        self.notifications.success("Bus updated successfully")
        await self.refresh()
        return True

    async def toggle_active(self, bus_id: int) -> bool:
        bus = self.find(bus_id)
        if bus is None:
            self.notifications.error("Bus not found. Please refresh the list.")
            return False

        activate = not bus.is_active
        try:
            updated = await self._client.set_bus_active(bus, activate)
        except BusTrackError as exc:
            self._report_failure("update bus status", exc, "Failed to update bus status. Please try again.")
            return False

        self.buses.replace(lambda item: item.id == bus_id, lambda _item: updated)
        self.notifications.success(f"Bus {'activated' if activate else 'deactivated'} successfully")
        await self.refresh()
        return True

    async def delete_bus(self, bus_id: int) -> bool:
        try:
            await self._client.delete_bus(bus_id)
        except BusTrackError as exc:
            self._report_failure("delete bus", exc, "Failed to delete bus. Please try again.", prefer_server=False)
            return False

        self.buses.remove(lambda bus: bus.id == bus_id)
        self.notifications.success("Bus deleted successfully")
        return True
