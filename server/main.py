"""FastAPI application for the bookmark server.

Endpoints:
  GET    /bookmarks          — List bookmarks, optionally filtered by ?tag=
  POST   /bookmarks          — Create a bookmark
  PUT    /bookmarks/{id}     — Partially update a bookmark
  DELETE /bookmarks/{id}     — Delete a bookmark
  GET    /health             — Liveness and bookmark count
  GET    /metrics            — Prometheus metrics
"""

from __future__ import annotations

import json
import logging
import time
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import Any, Optional

import uvicorn
from fastapi import APIRouter, Depends, FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from starlette.middleware.base import BaseHTTPMiddleware

from server.config import Settings
from server.errors import FieldError, NotFoundError, ValidationError
from server.metrics import (
    BOOKMARK_OPERATIONS,
    HTTP_DURATION,
    HTTP_REQUESTS,
    STORED_BOOKMARKS,
)
from server.schemas import validate_bookmark_input, validate_bookmark_update
from server.store import BookmarkStore

LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"

logger = logging.getLogger(__name__)

# Endpoints excluded from HTTP metrics
_METRICS_EXCLUDE = {"/metrics", "/openapi.json", "/docs", "/redoc"}


class MetricsMiddleware(BaseHTTPMiddleware):
    """Record HTTP request count and duration for Prometheus."""

    async def dispatch(self, request: Request, call_next):
        """Wrap each request with timing and counting."""
        path = request.url.path
        if path in _METRICS_EXCLUDE:
            return await call_next(request)

        start = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - start

        # Label by route template so ids don't explode cardinality
        route = request.scope.get("route")
        endpoint = getattr(route, "path", path)
        HTTP_REQUESTS.labels(
            method=request.method,
            endpoint=endpoint,
            status_code=response.status_code,
        ).inc()
        HTTP_DURATION.labels(endpoint=endpoint).observe(elapsed)
        return response


class UnexpectedErrorMiddleware(BaseHTTPMiddleware):
    """Turn any unhandled exception into a generic 500 response."""

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception:
            logger.exception("Unhandled error on %s %s", request.method, request.url.path)
            return JSONResponse(
                status_code=500, content={"error": "Internal server error"}
            )


# --- Dependencies ---


def get_store(request: Request) -> BookmarkStore:
    """Return the store owned by the running application."""
    return request.app.state.store


async def _read_json(request: Request) -> Any:
    try:
        return await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise ValidationError(
            [FieldError(field="body", message="Invalid JSON body")]
        ) from None


# --- Endpoints ---

router = APIRouter()


@router.get("/bookmarks")
async def list_bookmarks(
    tag: Optional[str] = None, store: BookmarkStore = Depends(get_store)
) -> list[dict[str, Any]]:
    """List all bookmarks, or only those carrying ``tag``."""
    return [b.to_dict() for b in store.get_all(tag)]


@router.post("/bookmarks", status_code=201)
async def create_bookmark(
    request: Request, store: BookmarkStore = Depends(get_store)
) -> dict[str, Any]:
    """Validate the body and create a bookmark."""
    data = validate_bookmark_input(await _read_json(request))
    bookmark = store.create(data)
    BOOKMARK_OPERATIONS.labels(operation="create", result="ok").inc()
    STORED_BOOKMARKS.set(store.count)
    return bookmark.to_dict()


@router.put("/bookmarks/{bookmark_id}")
async def update_bookmark(
    bookmark_id: str, request: Request, store: BookmarkStore = Depends(get_store)
) -> dict[str, Any]:
    """Validate a partial body and merge it into an existing bookmark."""
    patch = validate_bookmark_update(await _read_json(request))
    bookmark = store.update(bookmark_id, patch)
    if bookmark is None:
        BOOKMARK_OPERATIONS.labels(operation="update", result="not_found").inc()
        raise NotFoundError(bookmark_id)
    BOOKMARK_OPERATIONS.labels(operation="update", result="ok").inc()
    return bookmark.to_dict()


@router.delete("/bookmarks/{bookmark_id}", status_code=204)
async def delete_bookmark(
    bookmark_id: str, store: BookmarkStore = Depends(get_store)
) -> Response:
    """Delete a bookmark."""
    if not store.delete(bookmark_id):
        BOOKMARK_OPERATIONS.labels(operation="delete", result="not_found").inc()
        raise NotFoundError(bookmark_id)
    BOOKMARK_OPERATIONS.labels(operation="delete", result="ok").inc()
    STORED_BOOKMARKS.set(store.count)
    return Response(status_code=204)


@router.get("/health")
async def health(store: BookmarkStore = Depends(get_store)) -> dict[str, Any]:
    """Report server status and the number of stored bookmarks."""
    return {
        "status": "healthy",
        "total_bookmarks": store.count,
        "timestamp": datetime.now(UTC).isoformat(),
    }


@router.get("/metrics")
async def metrics() -> Response:
    """Prometheus metrics endpoint."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)


# --- Error handlers ---


async def _validation_error_handler(_request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={
            "error": "Validation error",
            "details": [e.to_dict() for e in exc.errors],
        },
    )


async def _not_found_handler(_request: Request, exc: NotFoundError) -> JSONResponse:
    logger.info("Bookmark %s not found", exc.bookmark_id)
    return JSONResponse(status_code=404, content={"error": "Bookmark not found"})


# --- Application factory ---


def create_app(store: BookmarkStore, settings: Optional[Settings] = None) -> FastAPI:
    """Build the FastAPI app around an already-constructed store."""
    settings = settings or Settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        STORED_BOOKMARKS.set(store.count)
        logger.info(
            "Serving %d bookmarks from %s on port %d",
            store.count,
            store.path,
            settings.port,
        )
        yield
        logger.info("Bookmark server shut down.")

    app = FastAPI(title="Bookmark Manager", version="1.0.0", lifespan=lifespan)
    app.state.store = store
    app.state.settings = settings

    app.add_exception_handler(ValidationError, _validation_error_handler)
    app.add_exception_handler(NotFoundError, _not_found_handler)

    app.add_middleware(UnexpectedErrorMiddleware)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(router)
    return app


def build_app(settings: Optional[Settings] = None) -> FastAPI:
    """App factory for ``uvicorn server.main:build_app --factory``."""
    settings = settings or Settings()
    store = BookmarkStore(settings.data_file, seed_on_empty=settings.seed_on_empty)
    return create_app(store, settings)


def main() -> None:
    """Process entry point: configure logging, build the store, serve."""
    settings = Settings()
    logging.basicConfig(level=settings.log_level.upper(), format=LOG_FORMAT)
    app = build_app(settings)
    logger.info("Starting bookmark server on port %d ...", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
