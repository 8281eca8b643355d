"""Tests for the Flask-JWT-Extended token adapter."""

from __future__ import annotations

import pytest
from freezegun import freeze_time
from livefeed.infra.jwt.flask_jwt_token_provider import JWTTokenProvider
from livefeed.services._shared.errors import InvalidToken
from tests.helpers.auth import expired_token


@pytest.fixture()
def tokens() -> JWTTokenProvider:
    return JWTTokenProvider()


class TestJWTTokenProvider:
    def test_issue_then_verify_round_trips_identity(self, tokens):
        token = tokens.issue(identity=42, email="a@example.com")

        claims = tokens.verify(token)

        assert claims.identity == "42"
        assert claims.email == "a@example.com"
        assert claims.expires_at > claims.issued_at

    def test_default_lifetime_is_one_hour(self, tokens):
        claims = tokens.verify(tokens.issue(identity=1, email="a@example.com"))
        assert (claims.expires_at - claims.issued_at).total_seconds() == 3600

    def test_expired_token_is_rejected(self, tokens):
        with freeze_time("2026-01-01 12:00:00"):
            token = tokens.issue(identity=1, email="a@example.com")
            assert tokens.verify(token).identity == "1"

        with freeze_time("2026-01-01 13:00:01"), pytest.raises(InvalidToken):
            tokens.verify(token)

    def test_helper_expired_token_is_rejected(self, tokens):
        with pytest.raises(InvalidToken):
            tokens.verify(expired_token(1))

    @pytest.mark.parametrize("raw", ["", "garbage", "a.b.c"])
    def test_malformed_tokens_are_rejected(self, tokens, raw):
        with pytest.raises(InvalidToken):
            tokens.verify(raw)

    def test_tampered_signature_is_rejected(self, tokens):
        token = tokens.issue(identity=1, email="a@example.com")
        header, payload, signature = token.split(".")
        forged = ".".join([header, payload, signature[::-1]])
        with pytest.raises(InvalidToken):
            tokens.verify(forged)

    def test_refresh_tokens_are_not_access_tokens(self, tokens):
        from flask_jwt_extended import create_refresh_token

        with pytest.raises(InvalidToken):
            tokens.verify(create_refresh_token(identity="1"))
