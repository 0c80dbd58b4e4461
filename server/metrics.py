"""Prometheus metrics for the bookmark server.

All metric objects are defined here so they can be imported from any module.
"""

from prometheus_client import Counter, Gauge, Histogram

# ---------------------------------------------------------------------------
# HTTP request metrics
# ---------------------------------------------------------------------------

HTTP_REQUESTS = Counter(
    "bookmarks_http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status_code"],
)

HTTP_DURATION = Histogram(
    "bookmarks_http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["endpoint"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 5.0),
)

# ---------------------------------------------------------------------------
# Store metrics
# ---------------------------------------------------------------------------

BOOKMARK_OPERATIONS = Counter(
    "bookmarks_store_operations_total",
    "Bookmark store operations",
    ["operation", "result"],  # create/update/delete, ok/not_found
)

STORED_BOOKMARKS = Gauge(
    "bookmarks_stored",
    "Number of bookmarks currently held by the store",
)
