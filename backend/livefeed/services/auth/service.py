"""Account use-cases: signup, login and the user's status line."""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from livefeed.models.user import User
from livefeed.services._shared.base import BaseService, ServiceContext
from livefeed.services._shared.errors import ConflictError, NotFoundError, Unauthenticated
from livefeed.services._shared.ports import TokenProvider
from livefeed.services._shared.validation import load_fields
from livefeed.services.auth.dto import LoginIn, SignupIn, TokenOut, UserOut
from livefeed.services.auth.guard import AuthContext, require_authenticated
from livefeed.services.auth.validation import SignupFieldsSchema, StatusFieldsSchema

logger = logging.getLogger(__name__)

BAD_CREDENTIALS = "Invalid email or password."

_signup_schema = SignupFieldsSchema()
_status_schema = StatusFieldsSchema()


def _to_user_out(user: User) -> UserOut:
    return UserOut(id=user.id, email=user.email, name=user.name, status=user.status)


class AuthService(BaseService):
    """
    Signup, credential login and status management.

    :param token_provider: Issues bearer tokens on successful login.
    """

    def __init__(self, *, token_provider: TokenProvider, ctx: ServiceContext | None = None) -> None:
        super().__init__(ctx=ctx)
        self.tokens = token_provider

    # ------------------------------ signup -----------------------------------

    def signup(self, dto: SignupIn) -> UserOut:
        """
        Create an account.

        :raises InvalidInput: on a malformed email, weak password or empty name
            (all violations reported together).
        :raises ConflictError: if the email is already registered.
        """
        data = load_fields(
            _signup_schema, {"email": dto.email, "name": dto.name, "password": dto.password}
        )
        email, name, password = data["email"], data["name"], data["password"]

        try:
            with self.rw_uow() as uow:
                if uow.users.exists_by_email(email):
                    raise ConflictError("User", "Email already in use.")
                user = User(email=email, name=name)
                user.password = password
                uow.users.add(user)
                out = _to_user_out(user)
        except IntegrityError as exc:
            # Concurrent signup with the same email won the race.
            raise ConflictError("User", "Email already in use.") from exc

        logger.info("User signed up", extra={"user_id": out.id})
        return out

    # ------------------------------ login ------------------------------------

    def login(self, dto: LoginIn) -> TokenOut:
        """
        Verify credentials and issue a bearer token.

        :raises Unauthenticated: for an unknown email or wrong password alike.
        """
        with self.ro_uow() as uow:
            user = uow.users.authenticate(dto.email or "", dto.password or "")
            if user is None:
                logger.warning("Login failed")
                raise Unauthenticated(BAD_CREDENTIALS)
            user_id, email = user.id, user.email

        token = self.tokens.issue(identity=user_id, email=email)
        logger.info("User logged in", extra={"user_id": user_id})
        return TokenOut(token=token, user_id=user_id)

    # ------------------------------ status -----------------------------------

    def get_status(self, auth: AuthContext) -> str:
        actor = require_authenticated(auth)
        with self.ro_uow() as uow:
            user = uow.users.get(int(actor.identity))
            if user is None:
                raise NotFoundError("User", actor.identity, "User not found.")
            return user.status

    def update_status(self, auth: AuthContext, status: str) -> str:
        """
        Replace the caller's status line.

        :raises InvalidInput: if ``status`` is empty after trimming.
        :raises NotFoundError: if the token's user no longer exists.
        """
        actor = require_authenticated(auth)
        status = load_fields(_status_schema, {"status": status})["status"]

        with self.rw_uow() as uow:
            user = uow.users.get(int(actor.identity))
            if user is None:
                raise NotFoundError("User", actor.identity, "User not found.")
            user.status = status
            uow.users.flush()
        logger.info("User status updated", extra={"user_id": actor.identity})
        return status
