"""Bus endpoints: /buses and /buses/{id}."""

from __future__ import annotations

from bustrack_admin._api._common import parse_payload, require_token
from bustrack_admin._constants import BUSES_ENDPOINT, bus_endpoint
from bustrack_admin._transport import Transport
from bustrack_admin.models.bus import Bus
from bustrack_admin.models.forms import BusForm


async def fetch_buses(transport: Transport, token: str | None) -> list[Bus]:
    """Download the whole fleet (the API does not paginate buses)."""
    payload = await transport.request("GET", BUSES_ENDPOINT, token=require_token(token, BUSES_ENDPOINT))
    return parse_payload(BUSES_ENDPOINT, payload, Bus.list_from_payload)


async def create_bus(transport: Transport, token: str | None, form: BusForm) -> Bus:
    payload = await transport.request(
        "POST",
        BUSES_ENDPOINT,
        token=require_token(token, BUSES_ENDPOINT),
        json=form.payload(),
    )
    return parse_payload(BUSES_ENDPOINT, payload, Bus.from_payload)


async def update_bus(transport: Transport, token: str | None, bus_id: int, form: BusForm) -> Bus | None:
    """Update a bus; also used for the active toggle.

    Returns the server copy, or ``None`` when the API answered without a body.
    """
    endpoint = bus_endpoint(bus_id)
    payload = await transport.request(
        "PUT",
        endpoint,
        token=require_token(token, endpoint),
        json=form.payload(),
    )
    if payload is None:
        return None
    return parse_payload(endpoint, payload, Bus.from_payload)


async def delete_bus(transport: Transport, token: str | None, bus_id: int) -> None:
    endpoint = bus_endpoint(bus_id)
    await transport.request("DELETE", endpoint, token=require_token(token, endpoint))
