"""Public screens: login and the two-step password reset."""

from __future__ import annotations

import logging
from enum import StrEnum
from typing import TYPE_CHECKING

from bustrack_admin.exceptions import BusTrackError, FormValidationError
from bustrack_admin.models.forms import EMAIL_REQUIRED_MESSAGE, PasswordResetForm
from bustrack_admin.views.base import PopupType, PopupView, View, error_message

if TYPE_CHECKING:
    from bustrack_admin.client import BusTrackClient

_logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"


class LoginView(View):
    path = "/login"
    title = "Smart Bus Tracker"

    def __init__(self, client: BusTrackClient) -> None:
        super().__init__(client)
        self.error = ""

    async def mount(self) -> str | None:
        await super().mount()
        if self.session.is_authenticated:
            return "/dashboard"
        return None

    async def submit(self, email: str, password: str) -> str | None:
        """Log in; returns ``"/dashboard"`` on success, ``None`` otherwise."""
        self.error = ""
        if await self._client.session.login(email, password):
            return "/dashboard"
        self.error = INVALID_CREDENTIALS_MESSAGE
        return None


class ResetStep(StrEnum):
    EMAIL = "email"
    RESET = "reset"


class ForgotPasswordView(PopupView):
    """Email validation, then a new password against the returned token."""

    path = "/forgot-password"
    title = "Forgot Password"

    def __init__(self, client: BusTrackClient) -> None:
        super().__init__(client)
        self.step = ResetStep.EMAIL
        self.email = ""
        self._reset_token: str | None = None

    async def send_email(self, email: str) -> bool:
        self.email = email
        if not email.strip():
            self.show_popup("Error", EMAIL_REQUIRED_MESSAGE, PopupType.ERROR)
            return False

        self.loading = True
        try:
            self._reset_token = await self._client.request_password_reset(email)
        except BusTrackError as exc:
            _logger.warning("Failed to validate email: %s", exc)
            self.show_popup("Error", error_message(exc, "Failed to validate email"), PopupType.ERROR)
            return False
        finally:
            self.loading = False

        self.step = ResetStep.RESET
        self.show_popup("Success", "Email validated! You can now reset your password.", PopupType.SUCCESS)
        return True

    async def reset_password(self, new_password: str, confirm_password: str) -> bool:
        if self.step is not ResetStep.RESET or not self._reset_token:
            self.show_popup("Error", "Please validate your email first", PopupType.ERROR)
            return False

        form = PasswordResetForm(
            token=self._reset_token,
            new_password=new_password,
            confirm_password=confirm_password,
        )
        try:
            form.ensure_valid(min_length=self._client.config.min_password_length)
        except FormValidationError as exc:
            self.show_popup("Error", str(exc), PopupType.ERROR)
            return False

        self.loading = True
        try:
            await self._client.reset_password(form)
        except BusTrackError as exc:
            _logger.warning("Failed to reset password: %s", exc)
            self.show_popup("Error", error_message(exc, "Failed to reset password"), PopupType.ERROR)
            return False
        finally:
            self.loading = False

        self.show_popup(
            "Success",
            "Password reset successful! Please login with your new password.",
            PopupType.SUCCESS,
            redirect="/login",
        )
        return True
