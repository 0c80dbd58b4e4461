"""Seed a running bookmark server with a handful of extra bookmarks.

Useful for demos and screenshots on top of the built-in example set.
Requires the server to be running (python -m server.main).

Usage:
    python scripts/seed_data.py [--base-url http://localhost:5000]
"""

from __future__ import annotations

import argparse
import sys

import requests

DEFAULT_BASE_URL = "http://localhost:5000"
TIMEOUT = 10

BOOKMARKS: list[dict] = [
    {
        "url": "https://fastapi.tiangolo.com",
        "title": "FastAPI",
        "description": "High performance web framework for building APIs with Python",
        "tags": ["python", "fastapi", "backend"],
    },
    {
        "url": "https://docs.pydantic.dev",
        "title": "Pydantic",
        "description": "Data validation using Python type hints",
        "tags": ["python", "validation"],
    },
    {
        "url": "https://streamlit.io",
        "title": "Streamlit",
        "description": "Turn data scripts into shareable web apps",
        "tags": ["python", "ui"],
    },
    {
        "url": "https://react.dev",
        "title": "React",
        "description": "The library for web and native user interfaces",
        "tags": ["React", "javascript", "frontend"],
    },
    {
        "url": "https://www.python-httpx.org",
        "title": "HTTPX",
        "tags": ["python", "http"],
    },
]


def check_health(base_url: str) -> bool:
    """Verify the server is reachable and healthy."""
    try:
        resp = requests.get(f"{base_url}/health", timeout=TIMEOUT)
        return resp.json().get("status") == "healthy"
    except Exception as e:
        print(f"  Health check failed: {e}")
        return False


def create_bookmark(base_url: str, data: dict) -> dict:
    """POST a single bookmark and return the created record."""
    resp = requests.post(f"{base_url}/bookmarks", json=data, timeout=TIMEOUT)
    resp.raise_for_status()
    return resp.json()


def main() -> None:
    """Create every bookmark in BOOKMARKS sequentially."""
    parser = argparse.ArgumentParser(description="Seed bookmarks")
    parser.add_argument(
        "--base-url",
        default=DEFAULT_BASE_URL,
        help=f"Bookmark API base URL (default: {DEFAULT_BASE_URL})",
    )
    args = parser.parse_args()
    base_url = args.base_url.rstrip("/")

    print(f"\n  Seeding bookmarks via {base_url}")

    if not check_health(base_url):
        print("  FAIL: Server is not healthy. Is it running?")
        sys.exit(1)

    created = 0
    for i, data in enumerate(BOOKMARKS, 1):
        try:
            bookmark = create_bookmark(base_url, data)
            created += 1
            print(f"  [{i}/{len(BOOKMARKS)}] {bookmark['id']}  {bookmark['title']}")
        except requests.HTTPError as e:
            print(f"  [{i}/{len(BOOKMARKS)}] ERROR: {e.response.text}")
        except requests.RequestException as e:
            print(f"  [{i}/{len(BOOKMARKS)}] ERROR: {e}")

    print(f"\n  Done! {created}/{len(BOOKMARKS)} bookmarks created.")
    print("  Open the UI with: streamlit run ui/app.py")


if __name__ == "__main__":
    main()
