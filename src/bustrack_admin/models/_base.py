"""Base model and envelope helpers for bus-tracking API responses.

Every response model inherits from :class:`ApiModel` which provides:

* ``extra="ignore"`` so fields the API adds later do not break parsing.
* A ``model_validator(mode="before")`` that drops ``None`` values so the
  field default is used instead of failing validation.

The API is inconsistent about wrapping payloads: some endpoints answer
with the object itself, some with ``{"data": <object>}``. The
:func:`unwrap_data` helper strips one such envelope.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator


def unwrap_data(payload: Any) -> Any:
    """Return ``payload["data"]`` when *payload* is a ``{"data": ...}`` envelope."""
    if isinstance(payload, dict) and "data" in payload:
        return payload["data"]
    return payload


def coerce_bool(value: Any) -> Any:
    """Map the API's ``0``/``1``/``"true"`` style flags onto ``bool``."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in {"1", "true", "yes", "active"}:
            return True
        if normalized in {"0", "false", "no", "inactive", ""}:
            return False
    return value


class ApiModel(BaseModel):
    """Base for API response models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        return {key: value for key, value in values.items() if value is not None}
