from __future__ import annotations

from livefeed.models.post import Post

from .dto import CreatorOut, PostOut


def post_to_out(row: Post) -> PostOut:
    creator = row.creator
    return PostOut(
        id=row.id,
        title=row.title,
        content=row.content,
        image_url=row.image_url,
        creator=CreatorOut(id=creator.id, name=creator.name),
        created_at=row.created_at,
        updated_at=row.updated_at,
    )
