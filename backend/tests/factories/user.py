"""Factory Boy definition for :class:`livefeed.models.user.User`."""

from __future__ import annotations

import factory
from livefeed.models.user import User
from tests.factories import BaseFactory

DEFAULT_PASSWORD = "Passw0rd1"


class UserFactory(BaseFactory):
    """Build persisted :class:`livefeed.models.user.User` instances."""

    class Meta:
        model = User

    id = None  # let autoincrement handle it
    email = factory.Sequence(lambda n: f"user{n}@example.com")
    name = factory.Sequence(lambda n: f"User {n}")
    password_hash = factory.LazyFunction(lambda: "")  # set via postgen

    @factory.post_generation
    def password(obj, create, extracted, **kwargs):
        """Set password using model setter (ensures hashing)."""
        obj.password = extracted or DEFAULT_PASSWORD
