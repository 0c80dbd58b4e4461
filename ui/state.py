"""Page state for the bookmark UI, independent of any widget toolkit."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

import httpx

from ui import api

logger = logging.getLogger(__name__)

Bookmark = dict[str, Any]


def filter_bookmarks(bookmarks: list[Bookmark], query: str) -> list[Bookmark]:
    """Case-insensitive substring match on title or url."""
    if not query:
        return list(bookmarks)
    q = query.lower()
    return [
        b
        for b in bookmarks
        if q in b.get("title", "").lower() or q in b.get("url", "").lower()
    ]


def _message(exc: Exception, fallback: str) -> str:
    return str(exc) or fallback


@dataclass
class BookmarkPageState:
    """Everything the bookmark page shows, plus the actions that change it.

    Tag filtering happens server-side on reload; search filtering is
    applied client-side to whatever list was last loaded.
    """

    bookmarks: list[Bookmark] = field(default_factory=list)
    loading: bool = True
    error: Optional[str] = None
    search_query: str = ""
    active_tag: Optional[str] = None
    editing: Optional[Bookmark] = None
    show_add_form: bool = False
    client: Optional[httpx.AsyncClient] = field(default=None, repr=False)

    @property
    def filtered_bookmarks(self) -> list[Bookmark]:
        return filter_bookmarks(self.bookmarks, self.search_query)

    async def load(self, tag: Optional[str] = None) -> None:
        """Reload the list from the server, optionally filtered by tag."""
        self.loading = True
        self.error = None
        try:
            self.bookmarks = await api.fetch_bookmarks(tag, client=self.client)
        except Exception as exc:
            logger.warning("Loading bookmarks failed: %s", exc)
            self.error = _message(exc, "Failed to load bookmarks")
        finally:
            self.loading = False

    async def reload(self) -> None:
        """Reload respecting the active tag."""
        await self.load(self.active_tag)

    async def click_tag(self, tag: str) -> None:
        """Toggle the tag filter; clicking the active tag clears it."""
        if self.active_tag == tag:
            self.active_tag = None
        else:
            self.active_tag = tag
        self.search_query = ""
        await self.load(self.active_tag)

    def set_search_query(self, query: str) -> None:
        self.search_query = query

    def toggle_add_form(self) -> None:
        self.show_add_form = not self.show_add_form

    def start_editing(self, bookmark: Bookmark) -> None:
        self.editing = bookmark

    def stop_editing(self) -> None:
        self.editing = None

    async def add_bookmark(self, data: dict[str, Any]) -> None:
        """Create a bookmark. Errors propagate so the form can show them."""
        await api.create_bookmark(data, client=self.client)
        await self.reload()
        self.show_add_form = False

    async def edit_bookmark(self, bookmark_id: str, data: dict[str, Any]) -> None:
        """Update a bookmark; failures become the page-level error."""
        try:
            await api.update_bookmark(bookmark_id, data, client=self.client)
            await self.reload()
        except Exception as exc:
            self.error = _message(exc, "Failed to update bookmark")

    async def delete_bookmark(self, bookmark_id: str) -> None:
        """Delete a bookmark; failures become the page-level error."""
        try:
            await api.delete_bookmark(bookmark_id, client=self.client)
            await self.reload()
        except Exception as exc:
            self.error = _message(exc, "Failed to delete bookmark")
