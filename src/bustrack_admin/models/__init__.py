"""Data models for bus-tracking API responses and admin forms."""

from bustrack_admin.models._base import ApiModel, unwrap_data
from bustrack_admin.models.auth import LoginResponse, ResetTokenResponse
from bustrack_admin.models.bus import Bus
from bustrack_admin.models.forms import (
    BusForm,
    LoginForm,
    PasswordChangeForm,
    PasswordResetForm,
    ProfileForm,
    check_password_pair,
)
from bustrack_admin.models.user import Role, User, UserPage

__all__ = [
    "ApiModel",
    "Bus",
    "BusForm",
    "LoginForm",
    "LoginResponse",
    "PasswordChangeForm",
    "PasswordResetForm",
    "ProfileForm",
    "ResetTokenResponse",
    "Role",
    "User",
    "UserPage",
    "check_password_pair",
    "unwrap_data",
]
