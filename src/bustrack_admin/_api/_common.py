"""Shared helpers for endpoint modules.

This module centralizes the most repeated patterns:
- refusing authenticated calls without a token
- turning a malformed success body into an :class:`ApiError`

It is internal to bustrack_admin and may change at any time.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

from pydantic import ValidationError

from bustrack_admin.exceptions import ApiError, NotAuthenticatedError

T = TypeVar("T")


def require_token(token: str | None, endpoint: str) -> str:
    if not token:
        raise NotAuthenticatedError(f"{endpoint} requires an authenticated session")
    return token


def parse_payload(endpoint: str, payload: Any, parser: Callable[[Any], T]) -> T:
    """Run *parser* over a success body, mapping shape errors to ``ApiError``."""
    try:
        return parser(payload)
    except (ValidationError, ValueError, TypeError) as exc:
        raise ApiError(
            f"{endpoint} returned an unexpected payload: {exc}",
            endpoint=endpoint,
        ) from exc
