"""Internal constants shared across the library."""

USER_AGENT = "bustrack-admin/0.1"

# Durable storage keys. Nothing else is ever persisted.
TOKEN_KEY = "token"
USER_KEY = "user"

DEFAULT_REQUEST_TIMEOUT: float = 30.0
DEFAULT_NOTIFICATION_TTL: float = 5.0
DEFAULT_BUS_PAGE_SIZE = 5
MIN_PASSWORD_LENGTH = 6

# ------------------------------------------------------------------
# Endpoints
# ------------------------------------------------------------------

LOGIN_ENDPOINT = "/auth/login-admin"
BUSES_ENDPOINT = "/buses"
USERS_ENDPOINT = "/bta/users"
UPDATE_INFO_ENDPOINT = "/update/info"
CHANGE_PASSWORD_ENDPOINT = "/bta/direct/password"
FORGOT_PASSWORD_ENDPOINT = "/update/forgot-password"
RESET_PASSWORD_ENDPOINT = "/update/reset-password"

AUTH_FAILURE_STATUSES: frozenset[int] = frozenset({401, 403})


def bus_endpoint(bus_id: int) -> str:
    return f"{BUSES_ENDPOINT}/{int(bus_id)}"


def user_endpoint(user_id: int) -> str:
    return f"{USERS_ENDPOINT}/{int(user_id)}"
