# tests/unit/test_auth_service.py
from __future__ import annotations

import pytest
from livefeed.models.user import DEFAULT_STATUS, User
from livefeed.services._shared.errors import (
    ConflictError,
    InvalidInput,
    NotFoundError,
    Unauthenticated,
)
from livefeed.services._shared.ports import StubTokenProvider
from livefeed.services.auth import Anonymous, Authenticated, AuthService
from livefeed.services.auth.dto import LoginIn, SignupIn, TokenOut
from tests.factories.user import DEFAULT_PASSWORD, UserFactory
from tests.helpers.auth import as_user


@pytest.fixture()
def service() -> AuthService:
    return AuthService(token_provider=StubTokenProvider())


class TestSignup:
    def test_creates_user_with_default_status(self, service, session):
        out = service.signup(SignupIn(email=" New@Example.com ", name=" Max ", password="secret123"))

        persisted = session.get(User, out.id)
        assert persisted is not None
        assert persisted.email == "new@example.com"
        assert persisted.name == "Max"
        assert persisted.status == DEFAULT_STATUS
        assert persisted.verify_password("secret123")

    def test_duplicate_email_conflicts(self, service, session):
        UserFactory(email="taken@example.com")
        session.commit()

        with pytest.raises(ConflictError) as exc_info:
            service.signup(SignupIn(email="TAKEN@example.com", name="Max", password="secret123"))
        assert exc_info.value.message == "Email already in use."

    def test_reports_every_invalid_field(self, service):
        with pytest.raises(InvalidInput) as exc_info:
            service.signup(SignupIn(email="not-an-email", name="  ", password="short"))

        fields = {v["field"] for v in exc_info.value.violations}
        assert fields == {"email", "name", "password"}

    def test_password_must_be_alphanumeric(self, service):
        with pytest.raises(InvalidInput) as exc_info:
            service.signup(SignupIn(email="a@example.com", name="Max", password="secret 123!"))
        assert [v["field"] for v in exc_info.value.violations] == ["password"]


class TestLogin:
    def test_issues_token_for_valid_credentials(self, service, session):
        user = UserFactory(email="login@example.com")
        session.commit()

        out = service.login(LoginIn(email="Login@Example.com", password=DEFAULT_PASSWORD))

        assert isinstance(out, TokenOut)
        assert out.user_id == user.id
        claims = service.tokens.verify(out.token)
        assert claims.identity == str(user.id)
        assert claims.email == "login@example.com"

    def test_unknown_email_and_wrong_password_look_the_same(self, service, session):
        UserFactory(email="known@example.com")
        session.commit()

        with pytest.raises(Unauthenticated) as unknown:
            service.login(LoginIn(email="missing@example.com", password=DEFAULT_PASSWORD))
        with pytest.raises(Unauthenticated) as wrong:
            service.login(LoginIn(email="known@example.com", password="nope12345"))

        assert unknown.value.message == wrong.value.message


class TestStatus:
    def test_get_and_update_status(self, service, session):
        user = UserFactory()
        session.commit()
        auth = as_user(user)

        assert service.get_status(auth) == DEFAULT_STATUS
        assert service.update_status(auth, "  Busy  ") == "Busy"
        assert service.get_status(auth) == "Busy"

    def test_requires_authentication(self, service):
        with pytest.raises(Unauthenticated):
            service.get_status(Anonymous())
        with pytest.raises(Unauthenticated):
            service.update_status(Anonymous(), "Busy")

    def test_empty_status_is_invalid(self, service, session):
        user = UserFactory()
        session.commit()
        with pytest.raises(InvalidInput):
            service.update_status(as_user(user), "   ")

    def test_unknown_user_is_not_found(self, service):
        with pytest.raises(NotFoundError):
            service.get_status(Authenticated(identity="999999", email="ghost@example.com"))
