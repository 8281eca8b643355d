"""Feed event publishers.

These helpers build the payload and hand it to the hub; they never know
which transport the subscribers are on.

Payload shape::

    {"action": "create" | "update", "post": {...post summary...}}
    {"action": "delete", "post": <post id>}
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING, Any

from livefeed.schemas.post import PostSchema

if TYPE_CHECKING:
    from livefeed.realtime.hub import FeedHub
    from livefeed.services.posts.dto import PostOut

CHANNEL = "posts"


class FeedAction(StrEnum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


def post_event(action: FeedAction, post: PostOut) -> dict[str, Any]:
    """Build a create/update event carrying the post summary."""
    return {"action": action.value, "post": PostSchema().dump(post)}


def delete_event(post_id: int) -> dict[str, Any]:
    return {"action": FeedAction.DELETE.value, "post": post_id}


def publish_created(hub: FeedHub, post: PostOut) -> int:
    return hub.publish(post_event(FeedAction.CREATE, post))


def publish_updated(hub: FeedHub, post: PostOut) -> int:
    return hub.publish(post_event(FeedAction.UPDATE, post))


def publish_deleted(hub: FeedHub, post_id: int) -> int:
    return hub.publish(delete_event(post_id))
