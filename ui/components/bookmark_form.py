"""Add / edit bookmark form with client-side validation."""

from __future__ import annotations

from typing import Any, Callable, Optional

import streamlit as st

from server.schemas import (
    DESCRIPTION_MAX_LENGTH,
    MAX_TAGS,
    TITLE_MAX_LENGTH,
    is_absolute_url,
)


def parse_tags(text: str) -> list[str]:
    """Split a comma-separated tag string into trimmed lowercase tags."""
    tags = [t.strip().lower() for t in text.split(",")]
    return [t for t in tags if t]


def validate_form(
    url: str, title: str, description: str, tags: list[str]
) -> dict[str, str]:
    """Return field -> message for every problem found (empty if valid)."""
    errors: dict[str, str] = {}

    if not url:
        errors["url"] = "URL is required"
    elif not is_absolute_url(url):
        errors["url"] = "Invalid URL format"

    if not title:
        errors["title"] = "Title is required"
    elif len(title) > TITLE_MAX_LENGTH:
        errors["title"] = "Title must be 200 characters or less"

    if description and len(description) > DESCRIPTION_MAX_LENGTH:
        errors["description"] = "Description must be 500 characters or less"

    if len(tags) > MAX_TAGS:
        errors["tags"] = "Maximum 5 tags allowed"

    return errors


def build_payload(
    url: str,
    title: str,
    description: str,
    tags: list[str],
    *,
    keep_empty_tags: bool = False,
) -> dict[str, Any]:
    """Assemble the request body sent to the server.

    An empty tag list is omitted on create; on edit it is sent so that
    clearing every tag actually removes them.
    """
    payload: dict[str, Any] = {"url": url, "title": title, "description": description}
    if tags or keep_empty_tags:
        payload["tags"] = tags
    return payload


def render(
    key: str,
    on_submit: Callable[[dict[str, Any]], None],
    initial: Optional[dict[str, Any]] = None,
    submit_label: str = "Add Bookmark",
) -> None:
    """Render the form; ``on_submit`` errors are shown inline."""
    initial = initial or {}
    is_edit = bool(initial)

    with st.form(key, clear_on_submit=False):
        url = st.text_input(
            "URL *", value=initial.get("url", ""), placeholder="https://example.com"
        )
        title = st.text_input(
            "Title *",
            value=initial.get("title", ""),
            placeholder="Bookmark title",
            max_chars=TITLE_MAX_LENGTH,
        )
        description = st.text_area(
            "Description",
            value=initial.get("description", "") or "",
            placeholder="Optional description",
            max_chars=DESCRIPTION_MAX_LENGTH,
            height=90,
        )
        tags_input = st.text_input(
            "Tags (comma separated, max 5)",
            value=", ".join(initial.get("tags") or []),
            placeholder="react, javascript, tutorial",
        )
        submitted = st.form_submit_button(submit_label, type="primary")

    if not submitted:
        return

    tags = parse_tags(tags_input)
    errors = validate_form(url, title, description, tags)
    if errors:
        for message in errors.values():
            st.error(message)
        return

    with st.spinner("Submitting..."):
        try:
            on_submit(
                build_payload(url, title, description, tags, keep_empty_tags=is_edit)
            )
        except Exception as e:
            st.error(str(e) or "Failed to submit")
