"""Bus model."""

from __future__ import annotations

from typing import Any

from pydantic import field_validator

from bustrack_admin.models._base import ApiModel, coerce_bool, unwrap_data


class Bus(ApiModel):
    """A bus in the fleet.

    Fields are mapped from the ``/buses`` resource. Timestamps are kept as
    the strings the API sends; they are display-only on the client.
    """

    id: int
    bus_name: str = ""
    """Human-readable bus name (the only field the forms require)."""
    driver_name: str = ""
    license_plate: str = ""
    is_active: bool = True
    created_at: str | None = None
    updated_at: str | None = None

    @field_validator("is_active", mode="before")
    @classmethod
    def _coerce_active(cls, value: Any) -> Any:
        return coerce_bool(value)

    @property
    def status_label(self) -> str:
        """``"Active"`` or ``"Inactive"`` as shown in the bus table."""
        return "Active" if self.is_active else "Inactive"

    @classmethod
    def from_payload(cls, payload: Any) -> Bus:
        """Parse a single bus, bare or wrapped in ``{"data": {...}}``."""
        return cls.model_validate(unwrap_data(payload))

    @classmethod
    def list_from_payload(cls, payload: Any) -> list[Bus]:
        """Parse the bus listing, bare list or wrapped in ``{"data": [...]}``."""
        items = unwrap_data(payload)
        if not isinstance(items, list):
            raise ValueError("bus listing payload is not a list")
        return [cls.model_validate(item) for item in items if isinstance(item, dict)]
