from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol

from livefeed.services._shared.errors import InvalidToken


@dataclass(frozen=True, slots=True)
class TokenClaims:
    """
    Verified content of an access token.

    :param identity: User id the token was issued for (string form).
    :param email: Email captured at issuance.
    :param issued_at: ``iat`` claim.
    :param expires_at: ``exp`` claim.
    """

    identity: str
    email: str
    issued_at: datetime
    expires_at: datetime


class TokenProvider(Protocol):
    """Port for issuing and verifying bearer tokens."""

    def issue(self, *, identity: int | str, email: str) -> str: ...

    def verify(self, token: str) -> TokenClaims: ...


class StubTokenProvider(TokenProvider):
    """Deterministic token provider used in unit tests.

    Tokens are opaque ``access.<identity>.<seq>`` strings; ``advance`` moves the
    provider's clock so expiry can be exercised without sleeping.
    """

    def __init__(self, *, ttl: timedelta = timedelta(hours=1)) -> None:
        self._now = datetime.now(tz=UTC)
        self._ttl = ttl
        self._seq = 0
        self._issued: dict[str, TokenClaims] = {}

    def advance(self, delta: timedelta) -> None:
        self._now += delta

    def issue(self, *, identity: int | str, email: str) -> str:
        self._seq += 1
        token = f"access.{identity}.{self._seq}"
        self._issued[token] = TokenClaims(
            identity=str(identity),
            email=email,
            issued_at=self._now,
            expires_at=self._now + self._ttl,
        )
        return token

    def verify(self, token: str) -> TokenClaims:
        claims = self._issued.get(token)
        if claims is None:
            raise InvalidToken("Unknown token.")
        if self._now >= claims.expires_at:
            raise InvalidToken("Token expired.")
        return claims
