from __future__ import annotations

import pytest

from bustrack_admin.client import BusTrackClient
from bustrack_admin.storage import MemoryStorage
from bustrack_admin.views import ForgotPasswordView, LoginView, PopupType, ResetStep

from conftest import FakeAdminBackend


@pytest.mark.asyncio
async def test_login_with_bad_credentials(client: BusTrackClient, storage: MemoryStorage) -> None:
    view = LoginView(client)

    assert await view.submit("a@b.com", "wrong") is None

    assert view.error == "Invalid email or password"
    assert not client.session.is_authenticated
    assert storage.keys() == []


@pytest.mark.asyncio
async def test_login_success_clears_error(client: BusTrackClient) -> None:
    view = LoginView(client)
    await view.submit("a@b.com", "wrong")

    assert await view.submit("a@b.com", "secret") == "/dashboard"

    assert view.error == ""
    assert client.session.token == "abc123"


@pytest.mark.asyncio
async def test_forgot_password_requires_email(client: BusTrackClient, backend: FakeAdminBackend) -> None:
    view = ForgotPasswordView(client)

    assert not await view.send_email("   ")

    assert backend.calls == []
    assert view.popup is not None and view.popup.message == "Please enter your email"


@pytest.mark.asyncio
async def test_forgot_password_unknown_email(client: BusTrackClient) -> None:
    view = ForgotPasswordView(client)

    assert not await view.send_email("ghost@b.com")

    assert view.step is ResetStep.EMAIL
    assert view.popup is not None
    assert view.popup.type is PopupType.ERROR
    assert view.popup.message == "Email not found"


@pytest.mark.asyncio
async def test_reset_before_validation_is_refused(client: BusTrackClient, backend: FakeAdminBackend) -> None:
    view = ForgotPasswordView(client)

    assert not await view.reset_password("abcdef", "abcdef")

    assert backend.calls == []
    assert view.popup is not None and view.popup.message == "Please validate your email first"


@pytest.mark.asyncio
async def test_full_reset_flow(client: BusTrackClient, backend: FakeAdminBackend) -> None:
    view = ForgotPasswordView(client)

    assert await view.send_email("a@b.com")
    assert view.step is ResetStep.RESET
    assert view.popup is not None
    assert view.popup.message == "Email validated! You can now reset your password."
    view.close_popup()

    assert not await view.reset_password("abcdef", "abcxyz")
    assert view.popup is not None and view.popup.message == "Passwords do not match"

    assert await view.reset_password("abcdef", "abcdef")
    assert backend.bodies[-1] == {"token": "reset-1", "password": "abcdef", "password_confirmation": "abcdef"}
    assert view.close_popup() == "/login"

    assert await client.session.login("a@b.com", "abcdef")
