"""Own-profile screen: name/email update and password change."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from bustrack_admin.exceptions import BusTrackError, FormValidationError
from bustrack_admin.models.forms import PasswordChangeForm, ProfileForm
from bustrack_admin.views.base import PopupType, PopupView, error_message

if TYPE_CHECKING:
    from bustrack_admin.client import BusTrackClient

_logger = logging.getLogger(__name__)


class ProfileView(PopupView):
    path = "/profile"
    title = "Profile"

    def __init__(self, client: BusTrackClient) -> None:
        super().__init__(client)
        user = client.session.user
        self.name = user.name if user is not None else ""
        self.email = user.email if user is not None else ""
        self.password_loading = False

    async def update_profile(self, name: str | None = None, email: str | None = None) -> bool:
        if name is not None:
            self.name = name
        if email is not None:
            self.email = email
        form = ProfileForm(name=self.name, email=self.email)
        try:
            form.ensure_complete()
        except FormValidationError as exc:
            self.show_popup("Error", str(exc), PopupType.ERROR)
            return False

        self.loading = True
        try:
            await self._client.update_profile(form)
        except BusTrackError as exc:
            _logger.warning("Failed to update profile: %s", exc)
            self.show_popup("Error", error_message(exc, "Failed to update profile"), PopupType.ERROR)
            return False
        finally:
            self.loading = False

        user = self._client.session.user
        if user is not None:
            self._client.session.update_user(user.model_copy(update=form.payload()))
        self.show_popup("Success", "Profile updated successfully", PopupType.SUCCESS)
        return True

    async def change_password(self, current_password: str, new_password: str, confirm_password: str) -> bool:
        """Change the password; a success signs the session out.

        Mismatched or short passwords are rejected before any request.
        """
        form = PasswordChangeForm(
            current_password=current_password,
            new_password=new_password,
            confirm_password=confirm_password,
        )
        try:
            form.ensure_valid(min_length=self._client.config.min_password_length)
        except FormValidationError as exc:
            self.show_popup("Error", str(exc), PopupType.ERROR)
            return False

        self.password_loading = True
        try:
            await self._client.change_password(form)
        except BusTrackError as exc:
            _logger.warning("Failed to change password: %s", exc)
            self.show_popup("Error", error_message(exc, "Failed to change password"), PopupType.ERROR)
            return False
        finally:
            self.password_loading = False

        # The server invalidates the old token on a password change.
        self._client.session.logout()
        self.show_popup(
            "Success",
            "Password changed successfully. You will be logged out.",
            PopupType.SUCCESS,
            redirect="/login",
        )
        return True

    def logout(self) -> str:
        self._client.session.logout()
        return "/login"
