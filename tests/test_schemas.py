"""Unit tests for server.schemas — bookmark validation rules."""

from __future__ import annotations

import pytest

from server.errors import ValidationError
from server.schemas import (
    Bookmark,
    BookmarkSnapshot,
    validate_bookmark_input,
    validate_bookmark_update,
)

VALID = {"url": "https://example.com", "title": "Example"}


def _fields(exc: ValidationError) -> dict[str, str]:
    return {e.field: e.message for e in exc.errors}


class TestBookmarkInput:
    def test_minimal_input(self) -> None:
        data = validate_bookmark_input(VALID)
        assert data.url == "https://example.com"
        assert data.title == "Example"
        assert data.description is None
        assert data.tags is None

    def test_tags_lowercased(self) -> None:
        data = validate_bookmark_input({**VALID, "tags": ["React", "JS", "react"]})
        assert data.tags == ["react", "js", "react"]

    def test_unknown_fields_ignored(self) -> None:
        data = validate_bookmark_input({**VALID, "id": "x", "createdAt": "never"})
        assert "id" not in data.model_dump()

    @pytest.mark.parametrize(
        "url",
        [
            "not-a-url",
            "example.com",
            "",
            "localhost:8000",
            "http://[::1",
            "https://exa mple.com",
            "http://example.com:99999",
            "http://example.com:abc",
            "http://exa<mple.com",
            "http:// ",
        ],
    )
    def test_invalid_url(self, url: str) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_bookmark_input({**VALID, "url": url})
        assert _fields(exc_info.value) == {"url": "Invalid URL format"}

    @pytest.mark.parametrize(
        "url",
        [
            "https://example.com/path with spaces",
            "http://localhost:8000/api",
            "http://[::1]:8080/",
            "ftp://files.example.com",
        ],
    )
    def test_valid_url_kept_verbatim(self, url: str) -> None:
        assert validate_bookmark_input({**VALID, "url": url}).url == url

    @pytest.mark.parametrize(
        ("field", "message"),
        [
            ("url", "Invalid URL format"),
            ("title", "Title is required"),
            ("description", "Description cannot be null"),
            ("tags", "Tags cannot be null"),
        ],
    )
    def test_null_field_rejected(self, field: str, message: str) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_bookmark_input({**VALID, field: None})
        assert _fields(exc_info.value) == {field: message}

    def test_missing_url(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_bookmark_input({"title": "X"})
        assert _fields(exc_info.value)["url"] == "Invalid URL format"

    def test_missing_title(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_bookmark_input({"url": "https://example.com"})
        assert _fields(exc_info.value)["title"] == "Title is required"

    def test_empty_title(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_bookmark_input({**VALID, "title": ""})
        assert _fields(exc_info.value)["title"] == "Title is required"

    def test_title_boundary(self) -> None:
        assert validate_bookmark_input({**VALID, "title": "t" * 200}).title == "t" * 200
        with pytest.raises(ValidationError) as exc_info:
            validate_bookmark_input({**VALID, "title": "t" * 201})
        assert _fields(exc_info.value) == {
            "title": "Title must be 200 characters or less"
        }

    def test_description_boundary(self) -> None:
        validate_bookmark_input({**VALID, "description": "d" * 500})
        with pytest.raises(ValidationError) as exc_info:
            validate_bookmark_input({**VALID, "description": "d" * 501})
        assert _fields(exc_info.value) == {
            "description": "Description must be 500 characters or less"
        }

    def test_tags_boundary(self) -> None:
        validate_bookmark_input({**VALID, "tags": ["a", "b", "c", "d", "e"]})
        with pytest.raises(ValidationError) as exc_info:
            validate_bookmark_input({**VALID, "tags": ["a", "b", "c", "d", "e", "f"]})
        assert _fields(exc_info.value) == {"tags": "Maximum 5 tags allowed"}

    def test_all_violations_collected(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_bookmark_input(
                {
                    "url": "nope",
                    "title": "",
                    "description": "d" * 501,
                    "tags": list("abcdef"),
                }
            )
        assert set(_fields(exc_info.value)) == {"url", "title", "description", "tags"}

    def test_wrong_type_reported_per_field(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_bookmark_input({**VALID, "title": 42, "tags": ["ok", 7]})
        fields = _fields(exc_info.value)
        assert "title" in fields
        assert "tags.1" in fields

    def test_non_object_body(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_bookmark_input(["not", "an", "object"])
        assert list(_fields(exc_info.value)) == ["body"]


class TestUpdateBookmarkInput:
    def test_empty_patch_is_valid(self) -> None:
        assert validate_bookmark_update({}).changes() == {}

    def test_only_present_fields_in_changes(self) -> None:
        patch = validate_bookmark_update({"title": "New"})
        assert patch.changes() == {"title": "New"}

    def test_partial_fields_still_validated(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_bookmark_update({"url": "bad", "tags": list("abcdef")})
        assert _fields(exc_info.value) == {
            "url": "Invalid URL format",
            "tags": "Maximum 5 tags allowed",
        }

    def test_null_title_rejected(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_bookmark_update({"title": None})
        assert _fields(exc_info.value) == {"title": "Title is required"}

    @pytest.mark.parametrize(
        ("field", "message"),
        [
            ("description", "Description cannot be null"),
            ("tags", "Tags cannot be null"),
        ],
    )
    def test_null_optional_field_rejected(self, field: str, message: str) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_bookmark_update({field: None})
        assert _fields(exc_info.value) == {field: message}

    def test_tags_lowercased_in_patch(self) -> None:
        assert validate_bookmark_update({"tags": ["Python"]}).changes() == {
            "tags": ["python"]
        }


class TestBookmarkModel:
    def test_generated_fields(self) -> None:
        bookmark = Bookmark(url="https://example.com", title="Example")
        assert bookmark.id
        assert bookmark.created_at

    def test_ids_are_unique(self) -> None:
        ids = {Bookmark(url="https://a.io", title="A").id for _ in range(100)}
        assert len(ids) == 100

    def test_to_dict_omits_unset_optionals(self) -> None:
        data = Bookmark(id="1", url="https://a.io", title="A", createdAt="t").to_dict()
        assert data == {"id": "1", "url": "https://a.io", "title": "A", "createdAt": "t"}

    def test_snapshot_reads_camel_case(self) -> None:
        raw = '[{"id": "1", "url": "https://a.io", "title": "A", "createdAt": "t"}]'
        snapshot = BookmarkSnapshot.model_validate_json(raw)
        assert snapshot.root[0].created_at == "t"
