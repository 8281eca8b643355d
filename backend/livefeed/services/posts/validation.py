"""Field rules for post input."""

from __future__ import annotations

from marshmallow import fields, validate

from livefeed.services._shared.validation import TrimmedSchema, load_fields

MIN_TITLE_LENGTH = 5
MAX_TITLE_LENGTH = 255
MIN_CONTENT_LENGTH = 5
MAX_IMAGE_REF_LENGTH = 512
ALLOWED_IMAGE_EXTENSIONS = frozenset({"png", "jpg", "jpeg"})
ALLOWED_IMAGE_MIMETYPES = frozenset({"image/png", "image/jpg", "image/jpeg"})

NO_IMAGE = "No image provided."


def _text_field(label: str, *, min_length: int, max_length: int | None = None) -> fields.String:
    too_short = f"{label} must be at least {min_length} characters long."
    rules = [validate.Length(min=min_length, error=too_short)]
    if max_length is not None:
        rules.append(
            validate.Length(max=max_length, error=f"{label} must be at most {max_length} characters long.")
        )
    return fields.String(
        required=True,
        validate=rules,
        error_messages={"required": too_short, "null": too_short},
    )


class PostFieldsSchema(TrimmedSchema):
    """Title, content and an optional image reference (updates keep the current image)."""

    title = _text_field("Title", min_length=MIN_TITLE_LENGTH, max_length=MAX_TITLE_LENGTH)
    content = _text_field("Content", min_length=MIN_CONTENT_LENGTH)
    image_url = fields.String(
        data_key="image",
        load_default=None,
        allow_none=True,
        validate=validate.Length(max=MAX_IMAGE_REF_LENGTH),
    )


class NewPostFieldsSchema(PostFieldsSchema):
    """Creation rules: the image reference is mandatory."""

    image_url = fields.String(
        data_key="image",
        required=True,
        validate=[
            validate.Length(min=1, error=NO_IMAGE),
            validate.Length(max=MAX_IMAGE_REF_LENGTH),
        ],
        error_messages={"required": NO_IMAGE, "null": NO_IMAGE},
    )


_update_schema = PostFieldsSchema()
_create_schema = NewPostFieldsSchema()


def validate_post_fields(
    title: object,
    content: object,
    image_url: object = None,
    *,
    require_image: bool,
) -> tuple[str, str, str | None]:
    """
    Trim and check post fields, reporting every violated rule at once.

    :returns: ``(title, content, image_url)`` trimmed; ``image_url`` is
        ``None`` when absent or blank.
    :raises InvalidInput: when any rule fails.
    """
    schema = _create_schema if require_image else _update_schema
    data = load_fields(schema, {"title": title, "content": content, "image": image_url})
    return data["title"], data["content"], data["image_url"] or None


def is_allowed_image(filename: str, mimetype: str | None) -> bool:
    """Accept PNG and JPEG uploads, judged by extension and declared type."""
    ext = filename.rsplit(".", 1)[-1].lower() if "." in filename else ""
    if ext not in ALLOWED_IMAGE_EXTENSIONS:
        return False
    return mimetype is None or mimetype.lower() in ALLOWED_IMAGE_MIMETYPES
