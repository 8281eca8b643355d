from __future__ import annotations

import logging

from livefeed.models.post import Post
from livefeed.realtime import events
from livefeed.realtime.hub import FeedHub
from livefeed.repositories.post import PostRepository
from livefeed.services._shared.base import BaseService, ServiceContext
from livefeed.services._shared.errors import InternalError, InvalidInput, NotFoundError
from livefeed.services._shared.ports import BlobStore
from livefeed.services.auth.guard import AuthContext, require_authenticated

from ._converters import post_to_out
from .dto import ImageUpload, PostIn, PostOut
from .validation import is_allowed_image, validate_post_fields

logger = logging.getLogger(__name__)


class PostCommandService(BaseService):
    """
    Orchestrate post mutations enforcing authentication, ownership and input rules.

    Every successful mutation publishes exactly one event to ``hub`` once the
    transaction has committed; a failed mutation publishes nothing.

    :param hub: Fan-out hub receiving create/update/delete events.
    :param blobs: Image storage; deletions through it are best-effort.
    """

    def __init__(self, *, hub: FeedHub, blobs: BlobStore, ctx: ServiceContext | None = None) -> None:
        super().__init__(ctx=ctx)
        self.hub = hub
        self.blobs = blobs

    # ------------------------------ helpers ----------------------------------

    @staticmethod
    def _releasable(repo: PostRepository, reference: str | None, *, post_id: int) -> str | None:
        """Return ``reference`` if no remaining post points at it, else ``None``."""
        if not reference:
            return None
        if repo.creator_ids_for_image(reference):
            logger.info(
                "Image still referenced; keeping it",
                extra={"reference": reference, "post_id": post_id},
            )
            return None
        return reference

    def _discard_blob(self, reference: str, *, post_id: int | None = None) -> None:
        """Delete ``reference`` from the blob store, logging instead of raising.

        The store is an external collaborator and may fail in any way; the
        mutation has already committed, so no failure here reaches the caller.
        """
        try:
            self.blobs.delete(reference)
        except Exception as exc:
            logger.warning(
                "Image cleanup failed",
                extra={"reference": reference, "post_id": post_id, "reason": str(exc)},
                exc_info=True,
            )

    # ------------------------------ commands ---------------------------------

    def create(self, auth: AuthContext, dto: PostIn) -> PostOut:
        """
        Create a post owned by the caller and link it into the caller's posts.

        :raises Unauthenticated: for anonymous callers.
        :raises InvalidInput: when title/content are too short or no image is given.
        :raises NotFoundError: when the token's user no longer exists.
        """
        actor = require_authenticated(auth)
        title, content, image_url = validate_post_fields(
            dto.title, dto.content, dto.image_url, require_image=True
        )

        with self.rw_uow() as uow:
            user = uow.users.get(int(actor.identity))
            if user is None:
                raise NotFoundError("User", actor.identity, "User not found.")

            post = Post(title=title, content=content, image_url=image_url)
            user.posts.append(post)
            uow.posts.flush()
            out = post_to_out(post)

        logger.info("Post created", extra={"post_id": out.id, "user_id": out.creator.id})
        events.publish_created(self.hub, out)
        return out

    def update(self, auth: AuthContext, post_id: int, dto: PostIn) -> PostOut:
        """
        Replace title and content, and the image when a new reference is given.

        A replaced image is deleted from the blob store after commit, unless
        another post still references it.

        :raises Unauthenticated: for anonymous callers.
        :raises InvalidInput: when title/content are too short.
        :raises NotFoundError: when the post does not exist.
        :raises Forbidden: when the caller is not the creator.
        """
        actor = require_authenticated(auth)
        title, content, image_url = validate_post_fields(
            dto.title, dto.content, dto.image_url, require_image=False
        )

        replaced: str | None = None
        with self.rw_uow() as uow:
            repo: PostRepository = uow.posts
            post = repo.get_for_update(post_id)
            if post is None:
                raise NotFoundError("Post", post_id)

            self.ensure_owner(actor.identity, post.creator_id)

            if image_url is not None and image_url != post.image_url:
                replaced = post.image_url
                post.image_url = image_url
            post.title = title
            post.content = content
            repo.flush()
            replaced = self._releasable(repo, replaced, post_id=post.id)
            out = post_to_out(post)

        if replaced:
            self._discard_blob(replaced, post_id=out.id)
        logger.info("Post updated", extra={"post_id": out.id, "user_id": out.creator.id})
        events.publish_updated(self.hub, out)
        return out

    def delete(self, auth: AuthContext, post_id: int) -> None:
        """
        Delete a post and unlink it from its creator.

        The image is removed after commit when no other post references it;
        a failure there is only logged.

        :raises Unauthenticated: for anonymous callers.
        :raises NotFoundError: when the post does not exist.
        :raises Forbidden: when the caller is not the creator.
        """
        actor = require_authenticated(auth)

        with self.rw_uow() as uow:
            repo: PostRepository = uow.posts
            post = repo.get_for_update(post_id)
            if post is None:
                raise NotFoundError("Post", post_id)

            self.ensure_owner(actor.identity, post.creator_id)

            image_url = post.image_url
            post.creator.posts.remove(post)
            repo.delete(post)
            orphan = self._releasable(repo, image_url, post_id=post_id)

        if orphan:
            self._discard_blob(orphan, post_id=post_id)
        logger.info("Post deleted", extra={"post_id": post_id, "user_id": actor.identity})
        events.publish_deleted(self.hub, post_id)

    # ------------------------------ images -----------------------------------

    def store_image(
        self,
        auth: AuthContext,
        upload: ImageUpload | None,
        old_reference: str | None = None,
    ) -> str | None:
        """
        Store an uploaded image and return its reference.

        ``old_reference`` is deleted best-effort, unless a post of another user
        still points at it.

        :returns: The new reference, or ``None`` when no file was supplied.
        :raises Unauthenticated: for anonymous callers.
        :raises InvalidInput: for anything but PNG or JPEG.
        :raises InternalError: when the blob store cannot write the file.
        """
        actor = require_authenticated(auth)
        if upload is None or not upload.filename:
            return None
        if not is_allowed_image(upload.filename, upload.mimetype):
            raise InvalidInput(
                [{"field": "image", "message": "Only PNG and JPEG images are accepted."}]
            )

        try:
            reference = self.blobs.store(upload.stream, upload.filename)
        except OSError as exc:
            logger.error("Image store failed", extra={"user_id": actor.identity}, exc_info=True)
            raise InternalError("Could not store image.") from exc

        if old_reference and old_reference != reference:
            with self.ro_uow() as uow:
                owners = uow.posts.creator_ids_for_image(old_reference)
            if owners - {int(actor.identity)}:
                logger.warning(
                    "Refusing to delete image owned by another user",
                    extra={"reference": old_reference, "user_id": actor.identity},
                )
            else:
                self._discard_blob(old_reference)
        return reference
