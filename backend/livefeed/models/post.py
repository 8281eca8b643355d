"""Post model definition for the feed."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from livefeed.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .user import User


class Post(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    A feed entry owned by exactly one user.

    Fields
    ------
    title : str
        Headline, trimmed.
    content : str
        Body text, trimmed.
    image_url : str
        Reference into the blob store.
    creator_id : int
        Owning user. Set once at creation and never reassigned.
    """

    __tablename__ = "posts"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    image_url: Mapped[str] = mapped_column(String(512), nullable=False)
    creator_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )

    creator: Mapped[User] = relationship("User", back_populates="posts")

    __table_args__ = (
        Index("ix_posts_created_at", "created_at"),
        Index("ix_posts_creator_id", "creator_id"),
    )

    @validates("creator_id")
    def _freeze_creator(self, key: str, value: int) -> int:
        """Reject any attempt to hand an existing post to another user."""
        current = self.__dict__.get("creator_id")
        if current is not None and value != current:
            raise ValueError("Post creator is immutable.")
        return value
