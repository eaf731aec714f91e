"""bustrack_admin - Async Python admin client for the bus-tracking platform API."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("bustrack-admin")
except PackageNotFoundError:
    __version__ = "0+local"
from bustrack_admin.client import BusTrackClient
from bustrack_admin.config import AdminConfig
from bustrack_admin.exceptions import (
    ApiError,
    AuthenticationError,
    BusTrackError,
    ConfigError,
    FormValidationError,
    NotAuthenticatedError,
    TransportError,
)
from bustrack_admin.models import Bus, BusForm, Role, User, UserPage
from bustrack_admin.notifications import Notification, NotificationQueue, NotificationType
from bustrack_admin.pagination import ClientSlicePagination, PaginatedList, ServerPagePagination
from bustrack_admin.router import GuardOutcome, Navigation, RouteGuard, Router
from bustrack_admin.session import Session, SessionStore
from bustrack_admin.storage import DurableStorage, JsonFileStorage, MemoryStorage

__all__ = [
    "__version__",
    "AdminConfig",
    "ApiError",
    "AuthenticationError",
    "Bus",
    "BusForm",
    "BusTrackClient",
    "BusTrackError",
    "ClientSlicePagination",
    "ConfigError",
    "DurableStorage",
    "FormValidationError",
    "GuardOutcome",
    "JsonFileStorage",
    "MemoryStorage",
    "Navigation",
    "NotAuthenticatedError",
    "Notification",
    "NotificationQueue",
    "NotificationType",
    "PaginatedList",
    "Role",
    "RouteGuard",
    "Router",
    "ServerPagePagination",
    "Session",
    "SessionStore",
    "TransportError",
    "User",
    "UserPage",
]
