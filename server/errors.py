"""Error types shared by the schema, store and API layers."""

from __future__ import annotations

from dataclasses import asdict, dataclass


@dataclass
class FieldError:
    """A single validation failure for one field."""

    field: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


class ValidationError(Exception):
    """Raised when input violates the bookmark schema.

    Carries every violation found, not just the first one.
    """

    def __init__(self, errors: list[FieldError]) -> None:
        self.errors = errors
        super().__init__("; ".join(f"{e.field}: {e.message}" for e in errors))


class NotFoundError(Exception):
    """Raised when a referenced bookmark id does not exist."""

    def __init__(self, bookmark_id: str) -> None:
        self.bookmark_id = bookmark_id
        super().__init__(f"Bookmark not found: {bookmark_id}")


class PersistenceError(Exception):
    """Raised when the snapshot file cannot be read or written."""
