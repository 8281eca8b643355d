"""Authentication-related Marshmallow schemas.

Only shape is checked here. Presence and content rules (email format, password
strength, non-empty name) are applied by the account service, which reports
every violation at once.
"""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields


class SignupSchema(Schema):
    """Input payload for account registration."""

    class Meta:
        unknown = EXCLUDE

    email = fields.String(load_default=None, allow_none=True)
    name = fields.String(load_default=None, allow_none=True)
    password = fields.String(load_default=None, allow_none=True, load_only=True)


class LoginSchema(Schema):
    """Input payload for authenticating a user."""

    class Meta:
        unknown = EXCLUDE

    email = fields.String(required=True)
    password = fields.String(required=True, load_only=True)


class TokenResponseSchema(Schema):
    """Response payload containing an access token."""

    token = fields.String(required=True)
    user_id = fields.Integer(required=True, data_key="userId")


class UserSchema(Schema):
    """Public representation of an account."""

    id = fields.Integer(required=True)
    email = fields.String(required=True)
    name = fields.String(required=True)
    status = fields.String(required=True)


class StatusSchema(Schema):
    """Status line, both as input and output; emptiness is judged by the service."""

    class Meta:
        unknown = EXCLUDE

    status = fields.String(load_default=None, allow_none=True)
