"""Posts service layer exposing orchestration services and DTOs."""

from __future__ import annotations

from .command import PostCommandService
from .dto import CreatorOut, ImageUpload, PostIn, PostOut, PostPageOut
from .query import PostQueryService

__all__ = [
    "PostCommandService",
    "PostQueryService",
    # DTOs
    "CreatorOut",
    "ImageUpload",
    "PostIn",
    "PostOut",
    "PostPageOut",
]
