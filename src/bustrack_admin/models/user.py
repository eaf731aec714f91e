"""User account models."""

from __future__ import annotations

from typing import Any

from pydantic import ConfigDict, Field, field_validator

from bustrack_admin.models._base import ApiModel, unwrap_data

DEFAULT_ROLE_NAME = "user"


class Role(ApiModel):
    """Role attached to a user account (e.g. ``admin`` or ``user``)."""

    id: int | None = None
    name: str = DEFAULT_ROLE_NAME

    @property
    def display_name(self) -> str:
        """Capitalised role name for table display."""
        return self.name[:1].upper() + self.name[1:]


class User(ApiModel):
    """A user account as returned by the API.

    Unknown keys are kept (``extra="allow"``) so the cached copy persisted
    in durable storage round-trips everything the server sent.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="allow",
        populate_by_name=True,
    )

    id: int
    name: str = ""
    email: str = ""
    role: Role = Field(default_factory=Role)
    created_at: str | None = None
    updated_at: str | None = None

    @field_validator("role", mode="before")
    @classmethod
    def _coerce_role(cls, value: Any) -> Any:
        # Some listings send the bare role name instead of an object.
        if isinstance(value, str):
            return {"name": value or DEFAULT_ROLE_NAME}
        return value

    @property
    def role_name(self) -> str:
        return self.role.name or DEFAULT_ROLE_NAME

    @property
    def is_admin(self) -> bool:
        return self.role_name.lower() == "admin"

    def to_storage(self) -> dict[str, Any]:
        """Serializable form written to durable storage."""
        return self.model_dump(mode="json")


class UserPage(ApiModel):
    """One server-side page of the user listing.

    Parsed from ``{"data": {"data": [...], "current_page", "last_page",
    "total"}}``; the outer envelope is optional.
    """

    items: list[User] = Field(default_factory=list, validation_alias="data")
    current_page: int = 1
    last_page: int = 1
    total: int = 0

    @classmethod
    def from_payload(cls, payload: Any) -> UserPage:
        inner = payload
        if not (isinstance(payload, dict) and isinstance(payload.get("data"), list)):
            inner = unwrap_data(payload)
        if not isinstance(inner, dict) or not isinstance(inner.get("data"), list):
            raise ValueError("user page payload has no 'data' list")
        return cls.model_validate(inner)
