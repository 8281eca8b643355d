"""Marshmallow-backed field validation shared by the account and post services.

Services load their inputs through a :class:`TrimmedSchema` subclass with
:func:`load_fields`; marshmallow collects every failing field in one pass and
the messages are flattened into the ``{"field", "message"}`` entries carried
by :class:`InvalidInput`.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from marshmallow import EXCLUDE, Schema, ValidationError, pre_load

from livefeed.services._shared.errors import InvalidInput


def flatten_marshmallow_messages(messages: Any, prefix: str = "") -> list[dict[str, Any]]:
    """
    Turn marshmallow's nested ``{field: [messages]}`` into a flat violation list.

    :param messages: ``ValidationError.messages`` (dict, list or str).
    :param prefix: Dotted path of the enclosing field.
    :returns: One ``{"field", "message"}`` entry per message.
    :rtype: list[dict[str, Any]]
    """
    if isinstance(messages, dict):
        out: list[dict[str, Any]] = []
        for key, value in messages.items():
            path = f"{prefix}.{key}" if prefix else str(key)
            out.extend(flatten_marshmallow_messages(value, path))
        return out
    if isinstance(messages, list | tuple):
        flat: list[dict[str, Any]] = []
        for item in messages:
            flat.extend(flatten_marshmallow_messages(item, prefix))
        return flat
    return [{"field": prefix or "_schema", "message": str(messages)}]


class TrimmedSchema(Schema):
    """
    Base schema that strips surrounding whitespace from string inputs.

    Keys listed in ``keep_whitespace`` (e.g. passwords) are passed through untouched.
    """

    keep_whitespace: frozenset[str] = frozenset()

    class Meta:
        unknown = EXCLUDE

    @pre_load
    def _strip_strings(self, data: Mapping[str, Any], **kwargs: Any) -> dict[str, Any]:
        return {
            key: value.strip() if isinstance(value, str) and key not in self.keep_whitespace else value
            for key, value in data.items()
        }


def load_fields(schema: Schema, data: Mapping[str, Any]) -> dict[str, Any]:
    """
    Load ``data`` through ``schema``, raising every violation at once.

    :returns: The deserialized fields.
    :raises InvalidInput: with one entry per violated rule.
    """
    try:
        return schema.load(data)
    except ValidationError as err:
        raise InvalidInput(flatten_marshmallow_messages(err.messages)) from err
