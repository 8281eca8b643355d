"""Persistence-only repositories, one per aggregate."""

from .post import PostRepository
from .user import UserRepository

__all__ = ["PostRepository", "UserRepository"]
