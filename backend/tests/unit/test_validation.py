from __future__ import annotations

import pytest
from livefeed.services._shared.errors import InvalidInput
from livefeed.services._shared.validation import flatten_marshmallow_messages, load_fields
from livefeed.services.auth.validation import SignupFieldsSchema, StatusFieldsSchema
from livefeed.services.posts.validation import is_allowed_image, validate_post_fields


class TestLoadFields:
    def test_reports_every_field_at_once(self):
        with pytest.raises(InvalidInput) as exc_info:
            load_fields(SignupFieldsSchema(), {"email": "nope", "name": " ", "password": None})

        assert [v["field"] for v in exc_info.value.violations] == ["email", "name", "password"]

    def test_trims_and_normalizes(self):
        data = load_fields(
            SignupFieldsSchema(),
            {"email": " Someone@Example.com ", "name": "  Max ", "password": "secret123"},
        )
        assert data == {"email": "someone@example.com", "name": "Max", "password": "secret123"}

    def test_password_whitespace_is_not_trimmed_away(self):
        with pytest.raises(InvalidInput) as exc_info:
            load_fields(
                SignupFieldsSchema(),
                {"email": "a@example.com", "name": "Max", "password": " secret123 "},
            )
        assert [v["field"] for v in exc_info.value.violations] == ["password"]

    def test_blank_status_is_rejected(self):
        with pytest.raises(InvalidInput) as exc_info:
            load_fields(StatusFieldsSchema(), {"status": "   "})
        assert exc_info.value.violations == [{"field": "status", "message": "Status is required."}]


def test_flatten_marshmallow_messages():
    flat = flatten_marshmallow_messages({"title": ["Missing data."], "creator": {"name": ["Bad."]}})
    assert flat == [
        {"field": "title", "message": "Missing data."},
        {"field": "creator.name", "message": "Bad."},
    ]


class TestPostFields:
    def test_exactly_five_characters_after_trim_is_valid(self):
        assert validate_post_fields("  12345 ", "abcde", "img", require_image=True) == (
            "12345",
            "abcde",
            "img",
        )

    def test_missing_image_only_matters_on_create(self):
        assert validate_post_fields("Title", "Content", None, require_image=False)[2] is None
        assert validate_post_fields("Title", "Content", "  ", require_image=False)[2] is None
        with pytest.raises(InvalidInput) as exc_info:
            validate_post_fields("Title", "Content", "  ", require_image=True)
        assert exc_info.value.violations == [{"field": "image", "message": "No image provided."}]

    def test_missing_title_and_short_content_are_both_reported(self):
        with pytest.raises(InvalidInput) as exc_info:
            validate_post_fields(None, "ab", None, require_image=False)

        assert exc_info.value.violations == [
            {"field": "title", "message": "Title must be at least 5 characters long."},
            {"field": "content", "message": "Content must be at least 5 characters long."},
        ]

    def test_title_longer_than_column_is_rejected(self):
        assert validate_post_fields("x" * 255, "Content", None, require_image=False)[0] == "x" * 255
        with pytest.raises(InvalidInput) as exc_info:
            validate_post_fields("x" * 256, "Content", None, require_image=False)
        assert exc_info.value.violations == [
            {"field": "title", "message": "Title must be at most 255 characters long."}
        ]

    def test_non_string_is_rejected(self):
        with pytest.raises(InvalidInput) as exc_info:
            validate_post_fields(12345, "Content", None, require_image=False)
        assert [v["field"] for v in exc_info.value.violations] == ["title"]

    @pytest.mark.parametrize(
        ("filename", "mimetype", "ok"),
        [
            ("a.png", "image/png", True),
            ("a.JPG", "image/jpeg", True),
            ("a.jpeg", None, True),
            ("a.gif", "image/gif", False),
            ("png", "image/png", False),
            ("a.png", "application/octet-stream", False),
        ],
    )
    def test_allowed_images(self, filename, mimetype, ok):
        assert is_allowed_image(filename, mimetype) is ok
