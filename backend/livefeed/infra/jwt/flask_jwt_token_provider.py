# livefeed/infra/jwt/flask_jwt_token_provider.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, cast

import jwt as pyjwt
from flask_jwt_extended.exceptions import JWTExtendedException

from livefeed.services._shared.errors import InvalidToken
from livefeed.services._shared.ports import TokenClaims, TokenProvider


@dataclass(slots=True)
class JWTTokenProvider(TokenProvider):
    """
    Adapter for Flask-JWT-Extended.

    Tokens are HS256-signed access tokens carrying ``sub`` (user id as a
    string), ``email``, ``iat`` and ``exp``. Lifetime comes from
    ``JWT_ACCESS_TOKEN_EXPIRES``.

    .. note::
       Requires an active Flask app context with proper JWT settings.
    """

    def issue(self, *, identity: int | str, email: str) -> str:
        from flask_jwt_extended import create_access_token as _create_access

        # PyJWT rejects non-string subjects on decode.
        return cast(
            str,
            _create_access(identity=str(identity), additional_claims={"email": email}),
        )

    def decode(self, token: str) -> dict[str, Any]:
        from flask_jwt_extended import decode_token

        return cast(dict[str, Any], decode_token(token))

    def verify(self, token: str) -> TokenClaims:
        """
        Verify signature, structure and expiry of ``token``.

        :raises InvalidToken: for any failure; causes are not distinguished.
        """
        try:
            payload = self.decode(token)
        except (pyjwt.InvalidTokenError, JWTExtendedException, ValueError) as exc:
            raise InvalidToken(str(exc)) from exc

        # Flask-JWT-Extended sets "type": "access" | "refresh"
        if payload.get("type") != "access":
            raise InvalidToken("Not an access token.")
        try:
            return TokenClaims(
                identity=str(payload["sub"]),
                email=str(payload.get("email", "")),
                issued_at=datetime.fromtimestamp(int(payload["iat"]), tz=UTC),
                expires_at=datetime.fromtimestamp(int(payload["exp"]), tz=UTC),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise InvalidToken("Malformed token claims.") from exc
