"""
Soft-fail authorization guard.

The guard turns the raw ``Authorization`` header into an auth context and
never rejects a request itself: operations that need an identity call
:func:`require_authenticated`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal

from livefeed.services._shared.errors import InvalidToken, Unauthenticated
from livefeed.services._shared.ports import TokenProvider

logger = logging.getLogger(__name__)

BEARER = "bearer"


@dataclass(frozen=True, slots=True)
class Authenticated:
    identity: str
    email: str

    @property
    def authenticated(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Anonymous:
    """Caller without a usable token. ``reason`` is ``"missing"`` or ``"invalid"``."""

    reason: Literal["missing", "invalid"] = "missing"

    @property
    def authenticated(self) -> bool:
        return False

    @property
    def identity(self) -> None:
        return None


AuthContext = Authenticated | Anonymous


def authenticate(raw_header: str | None, tokens: TokenProvider) -> AuthContext:
    """
    Resolve an ``Authorization`` header into an auth context.

    :param raw_header: Header value, or ``None`` when absent.
    :param tokens: Token verifier.
    :returns: ``Authenticated`` for a valid bearer token, ``Anonymous`` otherwise.
    """
    if raw_header is None or not raw_header.strip():
        return Anonymous("missing")

    parts = raw_header.split()
    if len(parts) != 2 or parts[0].lower() != BEARER:
        logger.warning("Malformed Authorization header", extra={"reason": "scheme"})
        return Anonymous("invalid")

    try:
        claims = tokens.verify(parts[1])
    except InvalidToken as exc:
        logger.warning("Rejected bearer token", extra={"reason": str(exc) or "invalid"})
        return Anonymous("invalid")

    return Authenticated(identity=claims.identity, email=claims.email)


def require_authenticated(auth: AuthContext) -> Authenticated:
    """
    Narrow ``auth`` to an identity.

    :raises Unauthenticated: if the caller is anonymous.
    """
    if isinstance(auth, Authenticated):
        return auth
    raise Unauthenticated()
