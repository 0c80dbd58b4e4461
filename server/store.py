"""JSON file-backed storage for bookmarks."""

from __future__ import annotations

import logging
import os
import tempfile
from datetime import UTC, datetime
from pathlib import Path
from typing import Optional

from server.errors import PersistenceError
from server.schemas import Bookmark, BookmarkInput, BookmarkSnapshot, UpdateBookmarkInput

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_PATH = Path("bookmarks.json")

_SEED_BOOKMARKS: list[dict] = [
    {
        "id": "1",
        "url": "https://nextjs.org",
        "title": "Next.js - The React Framework",
        "description": (
            "The React Framework for Production - Next.js gives you the best "
            "developer experience"
        ),
        "tags": ["react", "nextjs", "framework"],
    },
    {
        "id": "2",
        "url": "https://www.typescriptlang.org",
        "title": "TypeScript: JavaScript With Syntax For Types",
        "description": "TypeScript extends JavaScript by adding types to the language",
        "tags": ["typescript", "javascript", "programming"],
    },
    {
        "id": "3",
        "url": "https://tailwindcss.com",
        "title": "Tailwind CSS - Rapidly build modern websites",
        "description": "A utility-first CSS framework packed with classes",
        "tags": ["css", "tailwind", "design"],
    },
    {
        "id": "4",
        "url": "https://expressjs.com",
        "title": "Express - Node.js web application framework",
        "description": "Fast, unopinionated, minimalist web framework for Node.js",
        "tags": ["nodejs", "express", "backend"],
    },
    {
        "id": "5",
        "url": "https://github.com/colinhacks/zod",
        "title": "Zod - TypeScript-first schema validation",
        "description": "TypeScript-first schema validation with static type inference",
        "tags": ["typescript", "validation", "zod"],
    },
]


def read_snapshot(path: Path) -> list[Bookmark]:
    """Parse the snapshot file at *path*."""
    try:
        raw = path.read_text(encoding="utf-8")
        return BookmarkSnapshot.model_validate_json(raw).root
    except (OSError, ValueError) as exc:
        raise PersistenceError(f"Cannot read snapshot {path}: {exc}") from exc


def write_snapshot(path: Path, bookmarks: list[Bookmark]) -> None:
    """Replace the snapshot at *path* via a temp file and atomic rename."""
    text = BookmarkSnapshot(bookmarks).model_dump_json(
        indent=2, by_alias=True, exclude_none=True
    )
    tmp_name: Optional[str] = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{path.name}.", suffix=".tmp", dir=str(path.parent)
        )
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(text)
        os.replace(tmp_name, path)
        tmp_name = None
    except OSError as exc:
        raise PersistenceError(f"Cannot write snapshot {path}: {exc}") from exc
    finally:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)


class BookmarkStore:
    """In-memory bookmark collection persisted to a local JSON file.

    The store is the only writer of the snapshot. Every successful
    mutation rewrites the whole file before returning.
    """

    def __init__(
        self, storage_path: Path = DEFAULT_STORAGE_PATH, seed_on_empty: bool = True
    ) -> None:
        self._path = Path(storage_path)
        self._bookmarks: list[Bookmark] = []
        self._load()
        if not self._bookmarks and seed_on_empty:
            self._seed()

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> None:
        """Load bookmarks from disk; any failure leaves the store empty."""
        if not self._path.exists():
            logger.info("No snapshot found at %s — starting fresh", self._path)
            return
        try:
            self._bookmarks = read_snapshot(self._path)
            logger.info(
                "Loaded %d bookmarks from %s", len(self._bookmarks), self._path
            )
        except PersistenceError as exc:
            logger.error("Failed to load bookmarks: %s — starting empty", exc)
            self._bookmarks = []

    def _seed(self) -> None:
        now = datetime.now(UTC).isoformat()
        self._bookmarks = [
            Bookmark(**entry, created_at=now) for entry in _SEED_BOOKMARKS
        ]
        logger.info("Seeded %d example bookmarks", len(self._bookmarks))
        self._persist()

    def _persist(self) -> None:
        """Write current state to disk. Failures are logged, not raised."""
        try:
            write_snapshot(self._path, self._bookmarks)
        except PersistenceError as exc:
            logger.error("Failed to save bookmarks: %s", exc)

    def _index_of(self, bookmark_id: str) -> int:
        for i, bookmark in enumerate(self._bookmarks):
            if bookmark.id == bookmark_id:
                return i
        return -1

    def get_all(self, tag: Optional[str] = None) -> list[Bookmark]:
        """Return every bookmark, or those carrying *tag* (case-insensitive)."""
        if not tag:
            return list(self._bookmarks)
        tag_lower = tag.lower()
        return [
            b
            for b in self._bookmarks
            if b.tags and tag_lower in [t.lower() for t in b.tags]
        ]

    def get_by_id(self, bookmark_id: str) -> Optional[Bookmark]:
        index = self._index_of(bookmark_id)
        return self._bookmarks[index] if index != -1 else None

    def create(self, data: BookmarkInput) -> Bookmark:
        """Create and persist a new bookmark from validated input."""
        bookmark = Bookmark(**data.model_dump(exclude_none=True))
        self._bookmarks.append(bookmark)
        self._persist()
        logger.info("Created bookmark %s — '%s'", bookmark.id, bookmark.title)
        return bookmark

    def update(
        self, bookmark_id: str, patch: UpdateBookmarkInput
    ) -> Optional[Bookmark]:
        """Merge *patch* over an existing bookmark. Returns None if unknown."""
        index = self._index_of(bookmark_id)
        if index == -1:
            return None
        changes = patch.changes()
        changes.pop("id", None)
        changes.pop("created_at", None)
        updated = self._bookmarks[index].model_copy(update=changes)
        self._bookmarks[index] = updated
        self._persist()
        logger.info(
            "Updated bookmark %s — fields=%s", bookmark_id, sorted(changes)
        )
        return updated

    def delete(self, bookmark_id: str) -> bool:
        """Remove a bookmark. Returns False if unknown."""
        index = self._index_of(bookmark_id)
        if index == -1:
            return False
        del self._bookmarks[index]
        self._persist()
        logger.info("Deleted bookmark %s", bookmark_id)
        return True

    @property
    def count(self) -> int:
        """Number of stored bookmarks."""
        return len(self._bookmarks)
