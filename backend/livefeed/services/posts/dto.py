# comments in English; reST docstrings strict
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import BinaryIO

from livefeed.services._shared.dto import PageMeta


@dataclass(frozen=True, slots=True)
class PostIn:
    """
    Post fields supplied by a caller.

    :param title: Raw title; trimmed before validation, ``None`` when absent.
    :param content: Raw body; trimmed before validation, ``None`` when absent.
    :param image_url: Blob reference. Required on create; on update ``None``
        keeps the current image.
    """

    title: str | None
    content: str | None
    image_url: str | None = None


@dataclass(frozen=True, slots=True)
class ImageUpload:
    """An uploaded file as handed over by the HTTP layer."""

    stream: BinaryIO
    filename: str
    mimetype: str | None = None


@dataclass(frozen=True, slots=True)
class CreatorOut:
    id: int
    name: str


@dataclass(frozen=True, slots=True)
class PostOut:
    id: int
    title: str
    content: str
    image_url: str
    creator: CreatorOut
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True, slots=True)
class PostPageOut:
    """
    One page of the feed.

    :param items: Posts on this page, newest first.
    :param meta: Page number, size and the total post count.
    """

    items: list[PostOut]
    meta: PageMeta
