"""Screens rendered by the router."""

from bustrack_admin.views.auth import ForgotPasswordView, LoginView, ResetStep
from bustrack_admin.views.base import Popup, PopupType, ResourceView, View
from bustrack_admin.views.buses import BusesView
from bustrack_admin.views.dashboard import AdminLayout, DashboardView, NavLink
from bustrack_admin.views.profile import ProfileView
from bustrack_admin.views.users import UsersView

__all__ = [
    "AdminLayout",
    "BusesView",
    "DashboardView",
    "ForgotPasswordView",
    "LoginView",
    "NavLink",
    "Popup",
    "PopupType",
    "ProfileView",
    "ResetStep",
    "ResourceView",
    "UsersView",
    "View",
]
