"""Common Marshmallow schemas shared across resources."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields


class PageQuerySchema(Schema):
    """``page`` query parameter, kept raw so bad values fall back to page 1."""

    class Meta:
        unknown = EXCLUDE

    page = fields.Raw(load_default=None)


class MetaSchema(Schema):
    """Metadata block for paginated responses."""

    total = fields.Integer(required=True)
    page = fields.Integer(required=True)
    limit = fields.Integer(required=True)
    has_prev = fields.Boolean(required=True)
    has_next = fields.Boolean(required=True)

