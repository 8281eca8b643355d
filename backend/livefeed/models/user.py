"""User model definition for the feed."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates
from werkzeug.security import check_password_hash, generate_password_hash

from livefeed.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .post import Post

DEFAULT_STATUS = "I am new!"


class User(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Account that signs in and owns posts.

    Fields
    ------
    email : str
        Login email. Stored normalized (lowercase, trimmed). Unique.
    password_hash : str
        One-way hash (write-only setter via ``password``).
    name : str
        Display name shown next to the user's posts.
    status : str
        Free-text status line.
    posts : list[Post]
        Posts owned by the user, oldest first. A post removed from this
        collection is deleted on flush (``delete-orphan``).
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(254), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(256), nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    status: Mapped[str] = mapped_column(String(255), nullable=False, default=DEFAULT_STATUS)

    posts: Mapped[list[Post]] = relationship(
        "Post",
        back_populates="creator",
        order_by="Post.id",
        cascade="all, delete-orphan",
    )

    __table_args__ = (UniqueConstraint("email", name="uq_users_email"),)

    # -------------------- Password API --------------------
    @property
    def password(self) -> Any:  # pragma: no cover - explicit write-only contract
        """
        Disallow reading passwords.

        :raises AttributeError: Always, to ensure password is write-only.
        """
        raise AttributeError("Password is write-only.")

    @password.setter
    def password(self, raw: str) -> None:
        """
        Hash and set the password.

        :param raw: Plain text password to hash.
        :type raw: str
        """
        if not isinstance(raw, str) or not raw:
            raise ValueError("Password must be a non-empty string.")
        self.password_hash = generate_password_hash(raw)

    def verify_password(self, raw: str) -> bool:
        """
        Verify a password against the stored hash.

        :param raw: Plain text password candidate.
        :type raw: str
        :returns: ``True`` if it matches; otherwise ``False``.
        :rtype: bool
        """
        if not self.password_hash:
            return False
        return bool(check_password_hash(self.password_hash, raw))

    # -------------------- Ownership --------------------
    def owns(self, post: Post) -> bool:
        """Return ``True`` when ``post`` was created by this user."""
        return post.creator_id == self.id

    # -------------------- Validators --------------------
    @validates("email")
    def _normalize_email(self, key: str, value: str) -> str:
        """
        Normalize email to lowercase without surrounding spaces.

        :raises ValueError: If email is missing.
        """
        if not value or not isinstance(value, str):
            raise ValueError("Email is required.")
        return value.strip().lower()

    @validates("name")
    def _normalize_name(self, key: str, value: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Name is required.")
        return value.strip()
