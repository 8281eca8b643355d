"""Field rules for account input."""

from __future__ import annotations

from typing import Any

from marshmallow import fields, post_load, validate

from livefeed.services._shared.validation import TrimmedSchema

MIN_PASSWORD_LENGTH = 8
MAX_PASSWORD_LENGTH = 128
MAX_NAME_LENGTH = 100
MAX_STATUS_LENGTH = 255

INVALID_EMAIL = "Please enter a valid email."
WEAK_PASSWORD = f"Password must be at least {MIN_PASSWORD_LENGTH} characters, letters and digits only."
NAME_REQUIRED = "Name is required."
STATUS_REQUIRED = "Status is required."


class SignupFieldsSchema(TrimmedSchema):
    """Email format, non-empty name and an alphanumeric password of at least eight characters."""

    keep_whitespace = frozenset({"password"})

    email = fields.Email(
        required=True,
        validate=validate.Length(max=254),
        error_messages={"required": INVALID_EMAIL, "null": INVALID_EMAIL, "invalid": INVALID_EMAIL},
    )
    name = fields.String(
        required=True,
        validate=[
            validate.Length(min=1, error=NAME_REQUIRED),
            validate.Length(max=MAX_NAME_LENGTH),
        ],
        error_messages={"required": NAME_REQUIRED, "null": NAME_REQUIRED},
    )
    password = fields.String(
        required=True,
        validate=validate.Regexp(
            rf"^[A-Za-z0-9]{{{MIN_PASSWORD_LENGTH},{MAX_PASSWORD_LENGTH}}}\Z", error=WEAK_PASSWORD
        ),
        error_messages={"required": WEAK_PASSWORD, "null": WEAK_PASSWORD},
    )

    @post_load
    def _normalize_email(self, data: dict[str, Any], **kwargs: Any) -> dict[str, Any]:
        data["email"] = data["email"].lower()
        return data


class StatusFieldsSchema(TrimmedSchema):
    status = fields.String(
        required=True,
        validate=[
            validate.Length(min=1, error=STATUS_REQUIRED),
            validate.Length(max=MAX_STATUS_LENGTH),
        ],
        error_messages={"required": STATUS_REQUIRED, "null": STATUS_REQUIRED},
    )
