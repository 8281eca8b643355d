"""Post resource schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields


class PostInputSchema(Schema):
    """
    Payload for creating or updating a post.

    ``imageUrl`` is the reference returned by the image upload endpoint. It is
    mandatory on create; on update an absent value keeps the current image.
    Presence and length rules are applied by the post service so every
    violation is reported together.
    """

    class Meta:
        unknown = EXCLUDE

    title = fields.String(load_default=None, allow_none=True)
    content = fields.String(load_default=None, allow_none=True)
    image_url = fields.String(load_default=None, allow_none=True, data_key="imageUrl")


class CreatorSchema(Schema):
    id = fields.Integer(required=True)
    name = fields.String(required=True)


class PostSchema(Schema):
    """Representation of a post with its creator summary."""

    class Meta:
        ordered = True

    id = fields.Integer(required=True)
    title = fields.String(required=True)
    content = fields.String(required=True)
    image_url = fields.String(required=True, data_key="imageUrl")
    creator = fields.Nested(CreatorSchema, required=True)
    created_at = fields.DateTime(required=True, data_key="createdAt")
    updated_at = fields.DateTime(required=True, data_key="updatedAt")


class ImageUploadResponseSchema(Schema):
    message = fields.String(required=True)
    file_path = fields.String(allow_none=True, data_key="filePath")
