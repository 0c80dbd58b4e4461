"""Async HTTP client for the bookmark server.

Every function returns parsed JSON (or None for delete) and raises
:class:`ApiError` with a user-facing message on a non-2xx response.
Pass ``client`` to reuse a connection (or an in-process transport in tests);
otherwise a client is opened for the single call.
"""

from __future__ import annotations

import os
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional

import httpx

BASE_URL = os.getenv("BOOKMARKS_API_URL", "http://localhost:5000")
_TIMEOUT = None  # requests wait on the server indefinitely


class ApiError(Exception):
    """A failed API call, carrying the message to show the user."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


@asynccontextmanager
async def _session(client: Optional[httpx.AsyncClient]) -> AsyncIterator[httpx.AsyncClient]:
    if client is not None:
        yield client
        return
    async with httpx.AsyncClient(base_url=BASE_URL, timeout=_TIMEOUT) as owned:
        yield owned


def _error_from(resp: httpx.Response, fallback: str) -> ApiError:
    """Build an ApiError from the ``error`` field of a JSON error body."""
    try:
        body = resp.json()
    except ValueError:
        body = None
    message = body.get("error") if isinstance(body, dict) else None
    return ApiError(message or fallback, status_code=resp.status_code)


async def fetch_bookmarks(
    tag: Optional[str] = None, *, client: Optional[httpx.AsyncClient] = None
) -> list[dict[str, Any]]:
    """GET /bookmarks — all bookmarks, or those with ``tag``."""
    params = {"tag": tag} if tag else None
    async with _session(client) as http:
        resp = await http.get("/bookmarks", params=params)
    if not resp.is_success:
        raise ApiError("Failed to fetch bookmarks", status_code=resp.status_code)
    return resp.json()


async def create_bookmark(
    data: dict[str, Any], *, client: Optional[httpx.AsyncClient] = None
) -> dict[str, Any]:
    """POST /bookmarks — create a bookmark."""
    async with _session(client) as http:
        resp = await http.post("/bookmarks", json=data)
    if not resp.is_success:
        raise _error_from(resp, "Failed to create bookmark")
    return resp.json()


async def update_bookmark(
    bookmark_id: str,
    data: dict[str, Any],
    *,
    client: Optional[httpx.AsyncClient] = None,
) -> dict[str, Any]:
    """PUT /bookmarks/{id} — apply a partial update."""
    async with _session(client) as http:
        resp = await http.put(f"/bookmarks/{bookmark_id}", json=data)
    if not resp.is_success:
        raise _error_from(resp, "Failed to update bookmark")
    return resp.json()


async def delete_bookmark(
    bookmark_id: str, *, client: Optional[httpx.AsyncClient] = None
) -> None:
    """DELETE /bookmarks/{id}."""
    async with _session(client) as http:
        resp = await http.delete(f"/bookmarks/{bookmark_id}")
    if not resp.is_success:
        raise _error_from(resp, "Failed to delete bookmark")
