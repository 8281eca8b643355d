"""Tests for the soft-fail authorization guard."""

from __future__ import annotations

from datetime import timedelta

import pytest
from livefeed.services._shared.errors import Unauthenticated
from livefeed.services._shared.ports import StubTokenProvider
from livefeed.services.auth import Anonymous, Authenticated, authenticate, require_authenticated


@pytest.fixture()
def tokens() -> StubTokenProvider:
    return StubTokenProvider()


class TestAuthenticate:
    def test_valid_bearer_token_authenticates(self, tokens):
        token = tokens.issue(identity=7, email="u@example.com")

        auth = authenticate(f"Bearer {token}", tokens)

        assert auth == Authenticated(identity="7", email="u@example.com")
        assert auth.authenticated is True

    def test_scheme_is_case_insensitive(self, tokens):
        token = tokens.issue(identity=7, email="u@example.com")
        assert authenticate(f"bearer {token}", tokens).authenticated is True

    @pytest.mark.parametrize("header", [None, "", "   "])
    def test_missing_header_is_anonymous_without_warning(self, tokens, header, caplog):
        auth = authenticate(header, tokens)

        assert auth == Anonymous("missing")
        assert auth.identity is None
        assert caplog.records == []

    @pytest.mark.parametrize("header", ["Token abc", "Bearer", "Bearer a b", "Bearer unknown"])
    def test_unusable_header_is_anonymous_and_logged(self, tokens, header, caplog):
        auth = authenticate(header, tokens)

        assert auth == Anonymous("invalid")
        assert auth.authenticated is False
        assert any(r.levelname == "WARNING" for r in caplog.records)

    def test_expired_token_turns_anonymous(self, tokens):
        token = tokens.issue(identity=7, email="u@example.com")
        assert authenticate(f"Bearer {token}", tokens).authenticated is True

        tokens.advance(timedelta(hours=1, seconds=1))

        assert authenticate(f"Bearer {token}", tokens) == Anonymous("invalid")


class TestRequireAuthenticated:
    def test_returns_identity(self):
        auth = Authenticated(identity="1", email="u@example.com")
        assert require_authenticated(auth) is auth

    def test_anonymous_raises(self):
        with pytest.raises(Unauthenticated) as exc_info:
            require_authenticated(Anonymous("invalid"))
        assert exc_info.value.status == 401
