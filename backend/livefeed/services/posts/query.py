from __future__ import annotations

import logging
from typing import Any

from livefeed.repositories.post import PostRepository
from livefeed.services._shared.base import BaseService, ServiceContext
from livefeed.services._shared.dto import PageMeta
from livefeed.services._shared.errors import NotFoundError
from livefeed.services._shared.pagination import page_window
from livefeed.services.auth.guard import AuthContext, require_authenticated

from ._converters import post_to_out
from .dto import PostOut, PostPageOut

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 2


class PostQueryService(BaseService):
    """
    Read-only access to the feed.

    :param page_size: Posts per page; fixed server-side.
    """

    def __init__(self, *, page_size: int = DEFAULT_PAGE_SIZE, ctx: ServiceContext | None = None) -> None:
        super().__init__(ctx=ctx)
        self.page_size = page_size

    def list_posts(self, auth: AuthContext, page: Any = None) -> PostPageOut:
        """
        Return one page of posts, newest first, with the total post count.

        Invalid or missing ``page`` values fall back to page 1.

        :raises Unauthenticated: for anonymous callers.
        """
        require_authenticated(auth)
        window = page_window(page, self.page_size)

        with self.ro_uow() as uow:
            repo: PostRepository = uow.posts
            total = repo.count()
            rows = repo.list_page(skip=window.skip, limit=window.limit)
            items = [post_to_out(row) for row in rows]

        logger.info("Posts listed", extra={"page": window.page, "total": total})
        return PostPageOut(
            items=items,
            meta=PageMeta.of(page=window.page, limit=window.limit, total=total),
        )

    def get_post(self, auth: AuthContext, post_id: int) -> PostOut:
        """
        :raises Unauthenticated: for anonymous callers.
        :raises NotFoundError: when the post does not exist.
        """
        require_authenticated(auth)
        with self.ro_uow() as uow:
            post = uow.posts.get(post_id)
            if post is None:
                raise NotFoundError("Post", post_id)
            logger.info("Post fetched", extra={"post_id": post.id})
            return post_to_out(post)
