"""HTTP transport with bearer-token authentication and JSON bodies."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from bustrack_admin._constants import AUTH_FAILURE_STATUSES, USER_AGENT
from bustrack_admin._redact import redact_for_log
from bustrack_admin.config import AdminConfig
from bustrack_admin.exceptions import ApiError, AuthenticationError, TransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """What the endpoint modules in ``_api`` send requests through.

    ``HttpTransport`` is the real implementation; tests pass an in-memory
    backend instead.
    """

    async def request(
        self,
        method: str,
        endpoint: str,
        *,
        token: str | None = None,
        json: Mapping[str, Any] | None = None,
        params: Mapping[str, Any] | None = None,
    ) -> Any:
        ...


def _server_message(body: Any) -> str | None:
    """Pull the human-readable ``message`` out of an error body."""
    if isinstance(body, dict):
        message = body.get("message")
        if isinstance(message, str) and message.strip():
            return message.strip()
    return None


class HttpTransport:
    """aiohttp transport speaking JSON to the bus-tracking REST API."""

    def __init__(self, config: AdminConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=config.request_timeout)

    async def request(
        self,
        method: str,
        endpoint: str,
        *,
        token: str | None = None,
        json: Mapping[str, Any] | None = None,
        params: Mapping[str, Any] | None = None,
    ) -> Any:
        """Send one request and return the decoded JSON body.

        Returns ``None`` for an empty body (e.g. ``204 No Content``).

        Raises
        ------
        AuthenticationError
            On 401/403.
        ApiError
            On any other non-2xx status.
        TransportError
            On network failure, timeout or a body that is not JSON.
        """
        headers: dict[str, str] = {
            "accept": "application/json",
            "user-agent": USER_AGENT,
        }
        if token:
            headers["authorization"] = f"Bearer {token}"

        url = f"{self._config.base_url}{endpoint}"
        _logger.debug("%s %s", method, url)
        if self._config.api_trace_enabled and json is not None:
            _logger.debug("%s %s body=%s", method, endpoint, redact_for_log(dict(json)))

        try:
            async with self._http.request(
                method,
                url,
                json=dict(json) if json is not None else None,
                params=dict(params) if params is not None else None,
                headers=headers,
                timeout=self._timeout,
            ) as resp:
                status = resp.status
                text = await resp.text()
        except asyncio.TimeoutError as exc:
            raise TransportError(f"Request to {endpoint} timed out", endpoint=endpoint) from exc
        except aiohttp.ClientError as exc:
            raise TransportError(f"Request to {endpoint} failed: {exc}", endpoint=endpoint) from exc

        body = self._decode(text, endpoint=endpoint, status=status)
        if self._config.api_trace_enabled:
            _logger.debug("%s %s -> %d %s", method, endpoint, status, redact_for_log(body))

        if not 200 <= status < 300:
            server_message = _server_message(body)
            error_cls = AuthenticationError if status in AUTH_FAILURE_STATUSES else ApiError
            raise error_cls(
                f"HTTP {status} from {endpoint}: {server_message or text[:200]}",
                status_code=status,
                endpoint=endpoint,
                server_message=server_message,
            )
        return body

    @staticmethod
    def _decode(text: str, *, endpoint: str, status: int) -> Any:
        if not text.strip():
            return None
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            if 200 <= status < 300:
                raise TransportError(
                    f"Invalid JSON from {endpoint}: {text[:200]}",
                    status_code=status,
                    endpoint=endpoint,
                ) from exc
            # Error pages are often HTML; keep the status-based error path.
            return None
