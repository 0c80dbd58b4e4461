"""Unit tests for the form helpers in ui.components.bookmark_form."""

from __future__ import annotations

import pytest

from server.errors import ValidationError
from server.schemas import validate_bookmark_input
from ui.components.bookmark_card import format_created
from ui.components.bookmark_form import build_payload, parse_tags, validate_form


class TestParseTags:
    def test_splits_trims_lowercases(self) -> None:
        assert parse_tags(" React, JavaScript ,tutorial") == [
            "react",
            "javascript",
            "tutorial",
        ]

    def test_drops_empty_entries(self) -> None:
        assert parse_tags("a,, ,b,") == ["a", "b"]

    def test_empty_string(self) -> None:
        assert parse_tags("") == []


class TestValidateForm:
    def test_valid(self) -> None:
        assert validate_form("https://example.com", "Example", "", []) == {}

    def test_url_required(self) -> None:
        assert validate_form("", "T", "", [])["url"] == "URL is required"

    def test_url_format(self) -> None:
        assert validate_form("example", "T", "", [])["url"] == "Invalid URL format"

    @pytest.mark.parametrize(
        "url", ["https://exa mple.com", "http://example.com:99999", "http://[::1"]
    )
    def test_url_rejected_like_server(self, url: str) -> None:
        assert validate_form(url, "T", "", [])["url"] == "Invalid URL format"
        with pytest.raises(ValidationError):
            validate_bookmark_input({"url": url, "title": "T"})

    def test_title_rules(self) -> None:
        assert validate_form("https://a.io", "", "", [])["title"] == "Title is required"
        assert "title" not in validate_form("https://a.io", "t" * 200, "", [])
        assert validate_form("https://a.io", "t" * 201, "", [])["title"] == (
            "Title must be 200 characters or less"
        )

    def test_description_limit(self) -> None:
        errors = validate_form("https://a.io", "T", "d" * 501, [])
        assert errors == {"description": "Description must be 500 characters or less"}

    def test_tag_limit(self) -> None:
        assert validate_form("https://a.io", "T", "", list("abcde")) == {}
        assert validate_form("https://a.io", "T", "", list("abcdef")) == {
            "tags": "Maximum 5 tags allowed"
        }


class TestBuildPayload:
    def test_omits_empty_tags_on_create(self) -> None:
        assert build_payload("https://a.io", "A", "", []) == {
            "url": "https://a.io",
            "title": "A",
            "description": "",
        }

    def test_keeps_empty_tags_on_edit(self) -> None:
        payload = build_payload("https://a.io", "A", "", [], keep_empty_tags=True)
        assert payload["tags"] == []

    def test_includes_tags(self) -> None:
        assert build_payload("https://a.io", "A", "d", ["x"])["tags"] == ["x"]


class TestFormatCreated:
    def test_iso_timestamp(self) -> None:
        assert format_created("2024-03-05T10:00:00+00:00") == "Mar 05, 2024"

    def test_zulu_suffix(self) -> None:
        assert format_created("2024-03-05T10:00:00.000Z") == "Mar 05, 2024"

    def test_unparseable_passthrough(self) -> None:
        assert format_created("yesterday") == "yesterday"
