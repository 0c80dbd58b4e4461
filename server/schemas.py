"""Pydantic models and validation rules for bookmarks.

``validate_bookmark_input`` and ``validate_bookmark_update`` are the only
entry points the API layer uses; both translate pydantic failures into
:class:`server.errors.ValidationError` with one ``FieldError`` per violation.
"""

from __future__ import annotations

import re
from datetime import UTC, datetime
from typing import Annotated, Any, Optional
from urllib.parse import urlparse
from uuid import uuid4

import pydantic
from pydantic import AfterValidator, BaseModel, ConfigDict, Field, RootModel, field_validator
from pydantic_core import PydanticCustomError

from server.errors import FieldError, ValidationError

TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 500
MAX_TAGS = 5

# Reported when a required field is absent.
_REQUIRED_MESSAGES: dict[str, str] = {
    "url": "Invalid URL format",
    "title": "Title is required",
}

# Reported when any field is sent as an explicit null.
_NULL_MESSAGES: dict[str, str] = {
    **_REQUIRED_MESSAGES,
    "description": "Description cannot be null",
    "tags": "Tags cannot be null",
}

_WHITESPACE = re.compile(r"\s")
# Code points a URL host may never contain.
_FORBIDDEN_HOST_CHARS = re.compile(r"[\x00-\x1f\x7f <>\\^|%\"`{}#?/@\[\]]")

# ---------------------------------------------------------------------------
# Field rules
# ---------------------------------------------------------------------------


def is_absolute_url(value: str) -> bool:
    """True for a well-formed absolute URL: scheme, valid host, valid port."""
    try:
        parsed = urlparse(value)
        parsed.port  # raises ValueError when non-numeric or out of range
    except ValueError:
        return False
    if not parsed.scheme or not parsed.netloc or not parsed.hostname:
        return False
    if _WHITESPACE.search(parsed.netloc):
        return False
    return not _FORBIDDEN_HOST_CHARS.search(parsed.hostname)


def _check_url(value: str) -> str:
    if not is_absolute_url(value):
        raise PydanticCustomError("url_format", "Invalid URL format")
    return value


def _check_title(value: str) -> str:
    if not value:
        raise PydanticCustomError("title_required", "Title is required")
    if len(value) > TITLE_MAX_LENGTH:
        raise PydanticCustomError(
            "title_length", "Title must be 200 characters or less"
        )
    return value


def _check_description(value: str) -> str:
    if len(value) > DESCRIPTION_MAX_LENGTH:
        raise PydanticCustomError(
            "description_length", "Description must be 500 characters or less"
        )
    return value


def _normalize_tags(value: list[str]) -> list[str]:
    if len(value) > MAX_TAGS:
        raise PydanticCustomError("tags_count", "Maximum 5 tags allowed")
    return [tag.lower() for tag in value]


Url = Annotated[str, AfterValidator(_check_url)]
Title = Annotated[str, AfterValidator(_check_title)]
Description = Annotated[str, AfterValidator(_check_description)]
Tags = Annotated[list[str], AfterValidator(_normalize_tags)]

# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------


class _BookmarkFields(BaseModel):
    """Rejects explicit nulls; optional fields may be omitted, never null."""

    @field_validator("*", mode="before")
    @classmethod
    def _reject_null(cls, value: Any, info: pydantic.ValidationInfo) -> Any:
        if value is None:
            raise PydanticCustomError("null_value", _NULL_MESSAGES[info.field_name])
        return value


class BookmarkInput(_BookmarkFields):
    """Payload accepted when creating a bookmark."""

    url: Url
    title: Title
    description: Optional[Description] = None
    tags: Optional[Tags] = None


class UpdateBookmarkInput(_BookmarkFields):
    """Partial update payload; only fields that were sent are applied."""

    url: Optional[Url] = None
    title: Optional[Title] = None
    description: Optional[Description] = None
    tags: Optional[Tags] = None

    def changes(self) -> dict[str, Any]:
        """Fields present in the payload, keyed by attribute name."""
        return self.model_dump(exclude_unset=True)


class Bookmark(BaseModel):
    """A saved URL with metadata."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=lambda: str(uuid4()))
    url: str
    title: str
    description: Optional[str] = None
    tags: Optional[list[str]] = None
    created_at: str = Field(
        default_factory=lambda: datetime.now(UTC).isoformat(),
        alias="createdAt",
        description="ISO-8601 creation timestamp",
    )

    def to_dict(self) -> dict[str, Any]:
        """Wire representation: camelCase keys, unset optionals omitted."""
        return self.model_dump(by_alias=True, exclude_none=True)


class BookmarkSnapshot(RootModel[list[Bookmark]]):
    """The whole collection as written to disk."""

    root: list[Bookmark] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Validation entry points
# ---------------------------------------------------------------------------


def _to_validation_error(exc: pydantic.ValidationError) -> ValidationError:
    errors: list[FieldError] = []
    for err in exc.errors():
        field = ".".join(str(part) for part in err["loc"]) or "body"
        if err["type"] == "missing" and field in _REQUIRED_MESSAGES:
            message = _REQUIRED_MESSAGES[field]
        else:
            message = err["msg"]
        errors.append(FieldError(field=field, message=message))
    return ValidationError(errors)


def validate_bookmark_input(data: Any) -> BookmarkInput:
    """Validate a create payload, collecting every violation."""
    try:
        return BookmarkInput.model_validate(data)
    except pydantic.ValidationError as exc:
        raise _to_validation_error(exc) from exc


def validate_bookmark_update(data: Any) -> UpdateBookmarkInput:
    """Validate a partial update payload; absent fields are skipped."""
    try:
        return UpdateBookmarkInput.model_validate(data)
    except pydantic.ValidationError as exc:
        raise _to_validation_error(exc) from exc
