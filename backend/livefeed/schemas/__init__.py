"""Marshmallow schemas for request parsing and response serialization."""

from .auth import LoginSchema, SignupSchema, StatusSchema, TokenResponseSchema, UserSchema
from .common import MetaSchema, PageQuerySchema
from .post import CreatorSchema, ImageUploadResponseSchema, PostInputSchema, PostSchema

__all__ = [
    "CreatorSchema",
    "ImageUploadResponseSchema",
    "LoginSchema",
    "MetaSchema",
    "PageQuerySchema",
    "PostInputSchema",
    "PostSchema",
    "SignupSchema",
    "StatusSchema",
    "TokenResponseSchema",
    "UserSchema",
]
