"""Pydantic form models for client entrypoints.

These models provide a consistent "validate → normalize → execute" flow.
Validation is presence-only (plus the password rules); format checks such
as email syntax or licence plate patterns are left to the server.
"""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict

from bustrack_admin._constants import MIN_PASSWORD_LENGTH
from bustrack_admin.exceptions import FormValidationError
from bustrack_admin.models.bus import Bus

REQUIRED_FIELDS_MESSAGE = "Please fill in all required fields"
ALL_FIELDS_MESSAGE = "Please fill in all fields"
EMAIL_REQUIRED_MESSAGE = "Please enter your email"


def _blank(value: Any) -> bool:
    return not str(value or "").strip()


def check_password_pair(
    new_password: str,
    confirm_password: str,
    *,
    min_length: int = MIN_PASSWORD_LENGTH,
    mismatch_message: str = "Passwords don't match",
) -> None:
    """Raise :class:`FormValidationError` for a mismatched or short password."""
    if new_password != confirm_password:
        raise FormValidationError(mismatch_message)
    if len(new_password) < min_length:
        raise FormValidationError(f"Password must be at least {min_length} characters")


class _Form(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        validate_default=True,
    )


class BusForm(_Form):
    """Create/edit form for a bus."""

    REQUIRED: ClassVar[tuple[str, ...]] = ("bus_name",)

    bus_name: str = ""
    driver_name: str = ""
    license_plate: str = ""
    is_active: bool = True

    @classmethod
    def from_bus(cls, bus: Bus) -> BusForm:
        return cls(
            bus_name=bus.bus_name,
            driver_name=bus.driver_name,
            license_plate=bus.license_plate,
            is_active=bus.is_active,
        )

    def ensure_complete(self) -> None:
        if any(_blank(getattr(self, name)) for name in self.REQUIRED):
            raise FormValidationError(REQUIRED_FIELDS_MESSAGE)

    def payload(self) -> dict[str, Any]:
        return self.model_dump()


class LoginForm(_Form):
    email: str
    password: str

    def payload(self) -> dict[str, Any]:
        return {"email": self.email.strip(), "password": self.password}


class ProfileForm(_Form):
    name: str
    email: str

    def ensure_complete(self) -> None:
        if _blank(self.name) or _blank(self.email):
            raise FormValidationError(ALL_FIELDS_MESSAGE)

    def payload(self) -> dict[str, Any]:
        return {"name": self.name.strip(), "email": self.email.strip()}


class PasswordChangeForm(_Form):
    current_password: str
    new_password: str
    confirm_password: str

    def ensure_valid(self, *, min_length: int = MIN_PASSWORD_LENGTH) -> None:
        check_password_pair(self.new_password, self.confirm_password, min_length=min_length)

    def payload(self) -> dict[str, Any]:
        return {
            "current_password": self.current_password,
            "new_password": self.new_password,
            "new_password_confirmation": self.confirm_password,
        }


class PasswordResetForm(_Form):
    token: str
    new_password: str
    confirm_password: str

    def ensure_valid(self, *, min_length: int = MIN_PASSWORD_LENGTH) -> None:
        check_password_pair(
            self.new_password,
            self.confirm_password,
            min_length=min_length,
            mismatch_message="Passwords do not match",
        )

    def payload(self) -> dict[str, Any]:
        return {
            "token": self.token,
            "password": self.new_password,
            "password_confirmation": self.confirm_password,
        }
