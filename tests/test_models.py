from __future__ import annotations

import pytest
from pydantic import ValidationError

from bustrack_admin.exceptions import FormValidationError
from bustrack_admin.models import Bus, BusForm, User, UserPage
from bustrack_admin.models.auth import LoginResponse, ResetTokenResponse
from bustrack_admin.models.forms import PasswordChangeForm, PasswordResetForm, ProfileForm

from conftest import ADMIN_USER, make_bus, make_user


def test_bus_coerces_numeric_active_flag() -> None:
    active = Bus.model_validate(make_bus(1, active=True))
    inactive = Bus.model_validate(make_bus(2, active=False))

    assert active.is_active is True
    assert active.status_label == "Active"
    assert inactive.is_active is False
    assert inactive.status_label == "Inactive"


def test_bus_null_fields_fall_back_to_defaults() -> None:
    bus = Bus.model_validate({"id": 3, "bus_name": "Line 3", "driver_name": None, "is_active": None})
    assert bus.driver_name == ""
    assert bus.is_active is True


def test_bus_listing_accepts_envelope_and_bare_list() -> None:
    items = [make_bus(1), make_bus(2)]
    assert [bus.id for bus in Bus.list_from_payload({"data": items})] == [1, 2]
    assert [bus.id for bus in Bus.list_from_payload(items)] == [1, 2]
    with pytest.raises(ValueError):
        Bus.list_from_payload({"data": {"id": 1}})


def test_user_role_as_string_is_coerced() -> None:
    user = User.model_validate({"id": 9, "name": "Kim", "role": "admin"})
    assert user.is_admin
    assert user.role.display_name == "Admin"


def test_user_storage_form_keeps_unknown_fields() -> None:
    user = User.model_validate({**ADMIN_USER, "phone": "555"})
    stored = user.to_storage()
    assert stored["phone"] == "555"
    assert User.model_validate(stored) == user


def test_user_page_parses_nested_envelope() -> None:
    payload = {
        "data": {
            "data": [make_user(1, "admin"), make_user(2)],
            "current_page": 2,
            "last_page": 3,
            "total": 6,
        }
    }
    page = UserPage.from_payload(payload)
    assert [user.id for user in page.items] == [1, 2]
    assert (page.current_page, page.last_page, page.total) == (2, 3, 6)


def test_user_page_rejects_payload_without_rows() -> None:
    with pytest.raises(ValueError):
        UserPage.from_payload({"data": {"current_page": 1}})


def test_login_response_requires_token() -> None:
    result = LoginResponse.from_payload({"data": {"token": "abc", "user": ADMIN_USER}})
    assert result.token == "abc"
    assert result.user.email == "a@b.com"
    with pytest.raises(ValidationError):
        LoginResponse.from_payload({"token": "  ", "user": ADMIN_USER})


def test_reset_token_response() -> None:
    assert ResetTokenResponse.from_payload({"token": "reset-1"}).token == "reset-1"


def test_bus_form_requires_name_only() -> None:
    with pytest.raises(FormValidationError, match="required"):
        BusForm(bus_name="  ").ensure_complete()
    BusForm(bus_name="Line 1").ensure_complete()


def test_bus_form_from_bus_payload() -> None:
    form = BusForm.from_bus(Bus.model_validate(make_bus(4, active=False)))
    assert form.payload() == {
        "bus_name": "Bus 4",
        "driver_name": "Driver 4",
        "license_plate": "PL-004",
        "is_active": False,
    }


def test_profile_form_requires_both_fields() -> None:
    with pytest.raises(FormValidationError, match="Please fill in all fields"):
        ProfileForm(name="Admin", email="").ensure_complete()
    assert ProfileForm(name=" Admin ", email=" a@b.com").payload() == {"name": "Admin", "email": "a@b.com"}


def test_password_change_form_rules() -> None:
    with pytest.raises(FormValidationError, match="Passwords don't match"):
        PasswordChangeForm(current_password="old", new_password="abcdef", confirm_password="abcdeg").ensure_valid()
    with pytest.raises(FormValidationError, match="at least 6"):
        PasswordChangeForm(current_password="old", new_password="abc", confirm_password="abc").ensure_valid()

    form = PasswordChangeForm(current_password="old", new_password="abcdef", confirm_password="abcdef")
    form.ensure_valid()
    assert form.payload()["new_password_confirmation"] == "abcdef"


def test_password_reset_form_payload() -> None:
    form = PasswordResetForm(token="t", new_password="abcdef", confirm_password="abcdef")
    assert form.payload() == {"token": "t", "password": "abcdef", "password_confirmation": "abcdef"}
    with pytest.raises(FormValidationError, match="Passwords do not match"):
        PasswordResetForm(token="t", new_password="abcdef", confirm_password="x").ensure_valid()
