"""User endpoints: /bta/users, /update/info and /bta/direct/password."""

from __future__ import annotations

from bustrack_admin._api._common import parse_payload, require_token
from bustrack_admin._constants import (
    CHANGE_PASSWORD_ENDPOINT,
    UPDATE_INFO_ENDPOINT,
    USERS_ENDPOINT,
    user_endpoint,
)
from bustrack_admin._transport import Transport
from bustrack_admin.models.forms import PasswordChangeForm, ProfileForm
from bustrack_admin.models.user import UserPage


async def fetch_user_page(transport: Transport, token: str | None, page: int = 1) -> UserPage:
    payload = await transport.request(
        "GET",
        USERS_ENDPOINT,
        token=require_token(token, USERS_ENDPOINT),
        params={"page": max(1, int(page))},
    )
    return parse_payload(USERS_ENDPOINT, payload, UserPage.from_payload)


async def delete_user(transport: Transport, token: str | None, user_id: int) -> None:
    endpoint = user_endpoint(user_id)
    await transport.request("DELETE", endpoint, token=require_token(token, endpoint))


async def update_profile(transport: Transport, token: str | None, form: ProfileForm) -> None:
    await transport.request(
        "POST",
        UPDATE_INFO_ENDPOINT,
        token=require_token(token, UPDATE_INFO_ENDPOINT),
        json=form.payload(),
    )


async def change_password(transport: Transport, token: str | None, form: PasswordChangeForm) -> None:
    await transport.request(
        "POST",
        CHANGE_PASSWORD_ENDPOINT,
        token=require_token(token, CHANGE_PASSWORD_ENDPOINT),
        json=form.payload(),
    )
