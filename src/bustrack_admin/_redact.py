"""Helpers for safe debug logging.

Login, password change and password reset bodies carry plaintext secrets,
and every authenticated request carries a bearer token. This module redacts
those fields before anything is emitted at DEBUG level.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import BaseModel

_REDACTED = "<redacted>"
_MAX_DEPTH = 20

_SENSITIVE_KEYS: frozenset[str] = frozenset(
    {
        "password",
        "current_password",
        "new_password",
        "new_password_confirmation",
        "password_confirmation",
        "confirm_password",
        "token",
        "authorization",
        "cookie",
    }
)

_BEARER_RE = re.compile(r"(Bearer\s+)\S+", re.IGNORECASE)


def _is_sensitive(key: Any) -> bool:
    return str(key).lower() in _SENSITIVE_KEYS


def _redact_text(text: str, max_string: int) -> str:
    text = _BEARER_RE.sub(rf"\1{_REDACTED}", text)
    if len(text) > max_string:
        return f"{text[:max_string]}…<truncated>"
    return text


def redact_for_log(value: Any, *, max_string: int = 512, _depth: int = 0) -> Any:
    """Return a redacted copy of *value* suitable for debug logs.

    Mappings lose the values of secret keys, strings are truncated and
    stripped of inline bearer credentials, and pydantic models are dumped
    first so forms and DTOs can be logged directly.
    """
    if _depth > _MAX_DEPTH:
        return "<max-depth>"
    if value is None or isinstance(value, (bool, int, float)):
        return value
    if isinstance(value, str):
        return _redact_text(value, max_string)
    if isinstance(value, (bytes, bytearray)):
        return f"<bytes:{len(value)}b>"
    if isinstance(value, BaseModel):
        value = value.model_dump(mode="json")

    if isinstance(value, Mapping):
        return {
            str(key): _REDACTED
            if _is_sensitive(key)
            else redact_for_log(item, max_string=max_string, _depth=_depth + 1)
            for key, item in value.items()
        }
    if isinstance(value, Sequence):
        return [redact_for_log(item, max_string=max_string, _depth=_depth + 1) for item in value]
    return repr(value)
