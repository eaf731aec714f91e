from __future__ import annotations

from bustrack_admin._redact import redact_for_log
from bustrack_admin.models.forms import PasswordChangeForm


def test_redact_for_log_redacts_sensitive_keys() -> None:
    payload = {
        "email": "a@b.com",
        "password": "pw",
        "token": "abc123",
        "user": {"name": "Admin", "new_password": "x", "new_password_confirmation": "x"},
    }

    redacted = redact_for_log(payload)
    assert redacted["email"] == "a@b.com"
    assert redacted["password"] == "<redacted>"
    assert redacted["token"] == "<redacted>"
    assert redacted["user"]["name"] == "Admin"
    assert redacted["user"]["new_password"] == "<redacted>"
    assert redacted["user"]["new_password_confirmation"] == "<redacted>"


def test_redact_for_log_walks_lists() -> None:
    redacted = redact_for_log({"data": [{"id": 1, "token": "t"}]})
    assert redacted == {"data": [{"id": 1, "token": "<redacted>"}]}


def test_redact_for_log_truncates_long_strings() -> None:
    long_value = "x" * 600
    redacted = redact_for_log({"value": long_value}, max_string=10)
    assert redacted["value"].startswith("x" * 10)
    assert "<truncated>" in redacted["value"]


def test_redact_for_log_masks_inline_bearer_and_models() -> None:
    assert redact_for_log("Authorization: Bearer abc123") == "Authorization: Bearer <redacted>"

    form = PasswordChangeForm(current_password="old", new_password="abcdef", confirm_password="abcdef")
    redacted = redact_for_log(form)
    assert redacted == {"current_password": "<redacted>", "new_password": "<redacted>", "confirm_password": "<redacted>"}
