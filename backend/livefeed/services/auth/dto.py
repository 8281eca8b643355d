# comments in English; reST docstrings strict
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SignupIn:
    email: str | None
    name: str | None
    password: str | None


@dataclass(frozen=True, slots=True)
class LoginIn:
    email: str
    password: str


@dataclass(frozen=True, slots=True)
class TokenOut:
    """
    Issued credential.

    :param token: Signed bearer token.
    :param user_id: Id of the authenticated user.
    """

    token: str
    user_id: int


@dataclass(frozen=True, slots=True)
class UserOut:
    id: int
    email: str
    name: str
    status: str
