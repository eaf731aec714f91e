"""Authentication endpoints.

Endpoints:
  - /auth/login-admin
  - /update/forgot-password
  - /update/reset-password
"""

from __future__ import annotations

import logging

from bustrack_admin._api._common import parse_payload
from bustrack_admin._constants import FORGOT_PASSWORD_ENDPOINT, LOGIN_ENDPOINT, RESET_PASSWORD_ENDPOINT
from bustrack_admin._transport import Transport
from bustrack_admin.exceptions import ApiError, AuthenticationError
from bustrack_admin.models.auth import LoginResponse, ResetTokenResponse
from bustrack_admin.models.forms import LoginForm, PasswordResetForm

_logger = logging.getLogger(__name__)


async def login_admin(transport: Transport, form: LoginForm) -> LoginResponse:
    """Exchange staff credentials for a bearer token and user record.

    Raises
    ------
    AuthenticationError
        If the API rejected the credentials or answered without a token.
    """
    try:
        payload = await transport.request("POST", LOGIN_ENDPOINT, json=form.payload())
    except AuthenticationError:
        raise
    except ApiError as exc:
        # 422 and friends are still "bad credentials" from the caller's view.
        raise AuthenticationError(
            f"Login failed: {exc}",
            status_code=exc.status_code,
            endpoint=LOGIN_ENDPOINT,
            server_message=exc.server_message,
        ) from exc

    try:
        result = parse_payload(LOGIN_ENDPOINT, payload, LoginResponse.from_payload)
    except ApiError as exc:
        raise AuthenticationError(str(exc), endpoint=LOGIN_ENDPOINT) from exc
    _logger.debug("Login succeeded for user id=%s", result.user.id)
    return result


async def request_password_reset(transport: Transport, email: str) -> str:
    """Validate *email* and return the one-time reset token."""
    payload = await transport.request("POST", FORGOT_PASSWORD_ENDPOINT, json={"email": email.strip()})
    return parse_payload(FORGOT_PASSWORD_ENDPOINT, payload, ResetTokenResponse.from_payload).token


async def reset_password(transport: Transport, form: PasswordResetForm) -> None:
    await transport.request("POST", RESET_PASSWORD_ENDPOINT, json=form.payload())
