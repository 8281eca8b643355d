"""Account endpoints: signup, login and the caller's status line."""

from __future__ import annotations

from flask import Blueprint, request

from livefeed.api.deps import auth_service, current_auth, json_response, timing
from livefeed.schemas import (
    LoginSchema,
    SignupSchema,
    StatusSchema,
    TokenResponseSchema,
    UserSchema,
)
from livefeed.services.auth.dto import LoginIn, SignupIn

bp = Blueprint("auth", __name__, url_prefix="/auth")

signup_schema = SignupSchema()
login_schema = LoginSchema()
status_schema = StatusSchema()
token_schema = TokenResponseSchema()
user_schema = UserSchema()


@bp.put("/signup")
@timing
def signup():
    """Create an account and return its public representation."""

    payload = signup_schema.load(request.get_json(silent=True) or {})
    user = auth_service().signup(SignupIn(**payload))
    body = {"message": "User created!", "userId": user.id, "data": user_schema.dump(user)}
    return json_response(body, status=201)


@bp.post("/login")
@timing
def login():
    """Authenticate credentials and issue a bearer token."""

    payload = login_schema.load(request.get_json(silent=True) or {})
    token = auth_service().login(LoginIn(**payload))
    return json_response(token_schema.dump(token))


@bp.get("/status")
@timing
def get_status():
    status = auth_service().get_status(current_auth())
    return json_response(status_schema.dump({"status": status}))


@bp.patch("/status")
@timing
def update_status():
    payload = status_schema.load(request.get_json(silent=True) or {})
    status = auth_service().update_status(current_auth(), payload["status"])
    return json_response({"message": "User updated.", "status": status})
