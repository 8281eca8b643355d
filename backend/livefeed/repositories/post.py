"""Post repository: the newest-first feed window and image reference lookups."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from sqlalchemy import Select, select
from sqlalchemy.orm import joinedload

from livefeed.models.post import Post
from livefeed.repositories.base import BaseRepository


class PostRepository(BaseRepository[Post]):
    """Persistence-only repository for :class:`Post`."""

    model = Post

    def _default_eagerload(self, stmt: Select[Any]) -> Select[Any]:
        # Every read resolves the creator summary.
        return stmt.options(joinedload(Post.creator))

    def newest_first(self) -> Select[Any]:
        """Base select ordered by ``created_at`` desc with ``id`` desc as tiebreaker."""
        return select(Post).order_by(Post.created_at.desc(), Post.id.desc())

    def list_page(self, *, skip: int, limit: int) -> Sequence[Post]:
        """Return ``limit`` posts after skipping the ``skip`` newest ones."""
        return self.list_window(self.newest_first(), skip=skip, limit=limit)

    def creator_ids_for_image(self, reference: str) -> set[int]:
        """Return the ids of users whose posts point at ``reference``."""
        stmt = select(Post.creator_id).where(Post.image_url == reference)
        return set(self.session.execute(stmt).scalars().all())
