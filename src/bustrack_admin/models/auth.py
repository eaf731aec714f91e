"""Authentication response models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from bustrack_admin.models._base import unwrap_data
from bustrack_admin.models.user import User


class _TokenBody(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    token: str

    @field_validator("token", mode="before")
    @classmethod
    def _token_non_empty(cls, value: Any) -> str:
        token = str(value or "").strip()
        if not token:
            raise ValueError("token must be non-empty")
        return token

    @classmethod
    def from_payload(cls, payload: Any) -> Any:
        if isinstance(payload, dict) and "token" not in payload:
            payload = unwrap_data(payload)
        return cls.model_validate(payload)


class LoginResponse(_TokenBody):
    """Body returned by ``POST /auth/login-admin``.

    Parameters
    ----------
    token : str
        Opaque bearer token for subsequent requests.
    user : User
        The authenticated staff account.
    """

    user: User


class ResetTokenResponse(_TokenBody):
    """Body returned by ``POST /update/forgot-password``."""
