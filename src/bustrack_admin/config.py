"""Client configuration for bustrack_admin."""

from __future__ import annotations

import dataclasses
import os
from pathlib import Path
from typing import Any

from bustrack_admin._constants import (
    DEFAULT_BUS_PAGE_SIZE,
    DEFAULT_NOTIFICATION_TTL,
    DEFAULT_REQUEST_TIMEOUT,
    MIN_PASSWORD_LENGTH,
)
from bustrack_admin.exceptions import ConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _default_storage_path() -> Path:
    return Path.home() / ".bustrack_admin" / "storage.json"


@dataclasses.dataclass(frozen=True)
class AdminConfig:
    """Client configuration.

    Parameters
    ----------
    base_url : str
        Base URL of the bus-tracking REST API (e.g.
        ``"https://api.example.com/api"``). Trailing slashes are dropped.
    storage_path : Path
        JSON file holding the persisted ``token`` and ``user`` keys.
    request_timeout : float
        Total timeout in seconds applied to every HTTP request.
    notification_ttl : float
        Seconds a notification stays visible after it is added.
    bus_page_size : int
        Rows per page in the bus list.
    min_password_length : int
        Shortest password accepted by the password change and reset forms.
    api_trace_enabled : bool
        Log redacted request and response bodies at DEBUG level.
    """

    base_url: str
    storage_path: Path = dataclasses.field(default_factory=_default_storage_path)
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    notification_ttl: float = DEFAULT_NOTIFICATION_TTL
    bus_page_size: int = DEFAULT_BUS_PAGE_SIZE
    min_password_length: int = MIN_PASSWORD_LENGTH
    api_trace_enabled: bool = False

    def __post_init__(self) -> None:
        base_url = str(self.base_url or "").strip().rstrip("/")
        if not base_url:
            raise ConfigError("base_url must be non-empty (set BUSTRACK_API_URL)")
        if not base_url.startswith(("http://", "https://")):
            raise ConfigError(f"base_url must be an http(s) URL, got {base_url!r}")
        if self.bus_page_size < 1:
            raise ConfigError("bus_page_size must be at least 1")
        if self.request_timeout <= 0:
            raise ConfigError("request_timeout must be positive")
        # Frozen dataclass: normalise through object.__setattr__.
        object.__setattr__(self, "base_url", base_url)
        object.__setattr__(self, "storage_path", Path(self.storage_path).expanduser())

    @classmethod
    def from_env(cls, **overrides: Any) -> AdminConfig:
        """Create configuration from environment variables.

        Reads ``BUSTRACK_API_URL`` and the optional ``BUSTRACK_*``
        variables below. Explicit keyword arguments override environment
        values; ``None`` overrides are ignored so CLI flags can be passed
        through unconditionally.

        Raises
        ------
        ConfigError
            If no base URL is available or a numeric variable is malformed.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        base_url = env.get("BUSTRACK_API_URL")
        if base_url is not None:
            config_kwargs["base_url"] = base_url

        storage = env.get("BUSTRACK_STORAGE_PATH")
        if storage is not None:
            config_kwargs["storage_path"] = Path(storage)

        _NUMERIC_ENV_MAP: dict[str, tuple[str, type]] = {
            "BUSTRACK_REQUEST_TIMEOUT": ("request_timeout", float),
            "BUSTRACK_NOTIFICATION_TTL": ("notification_ttl", float),
            "BUSTRACK_BUS_PAGE_SIZE": ("bus_page_size", int),
        }
        for env_key, (field_name, caster) in _NUMERIC_ENV_MAP.items():
            val = env.get(env_key)
            if val is None:
                continue
            try:
                config_kwargs[field_name] = caster(val)
            except ValueError as exc:
                raise ConfigError(f"{env_key} must be numeric, got {val!r}") from exc

        config_kwargs["api_trace_enabled"] = _env_bool(env.get("BUSTRACK_API_TRACE_ENABLED"), False)

        config_kwargs.update({key: value for key, value in overrides.items() if value is not None})

        if "base_url" not in config_kwargs:
            raise ConfigError("BUSTRACK_API_URL is not set")
        return cls(**config_kwargs)
