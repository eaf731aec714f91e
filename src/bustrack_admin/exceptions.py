"""Custom exception hierarchy for bustrack_admin."""

from __future__ import annotations


class BusTrackError(Exception):
    """Base exception for all bustrack_admin errors."""


class ConfigError(BusTrackError):
    """Invalid or missing configuration."""


class TransportError(BusTrackError):
    """HTTP-level failure (network, timeout, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class ApiError(BusTrackError):
    """API answered with a non-2xx status.

    ``server_message`` carries the ``message`` field of the error body when
    the API sent one; views prefer it over their fixed fallback text.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
        server_message: str | None = None,
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        self.server_message = server_message
        super().__init__(message)


class AuthenticationError(ApiError):
    """Login failed or the bearer token was rejected (401/403)."""


class NotAuthenticatedError(BusTrackError):
    """An authenticated call was attempted without a session token."""


class FormValidationError(BusTrackError):
    """Client-side form check failed before any request was issued."""
