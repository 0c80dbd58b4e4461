#!/usr/bin/env python3
"""Local smoke test runner.

Starts the bookmark server against a throwaway data file, exercises every
route over HTTP, and reports results.
"""

import atexit
import os
import signal
import subprocess
import sys
import tempfile
import time
from pathlib import Path

import httpx

PORT = 5055
BASE_URL = f"http://localhost:{PORT}"
STARTUP_TIMEOUT = 20  # seconds to wait for the server

_processes: list[subprocess.Popen] = []


def _cleanup() -> None:
    """Kill all child processes."""
    for proc in _processes:
        try:
            proc.terminate()
        except OSError:
            pass
    time.sleep(1)
    for proc in _processes:
        try:
            proc.kill()
        except OSError:
            pass
    print("\n--- All processes cleaned up ---")


atexit.register(_cleanup)
signal.signal(signal.SIGINT, lambda *_: sys.exit(1))
signal.signal(signal.SIGTERM, lambda *_: sys.exit(1))


def start_server(data_file: Path) -> subprocess.Popen:
    """Start the bookmark server as a background process."""
    env = {**os.environ, "PORT": str(PORT), "DATA_FILE": str(data_file)}
    proc = subprocess.Popen(
        [sys.executable, "-m", "server.main"],
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        env=env,
    )
    _processes.append(proc)
    print(f"  Started bookmark server (PID {proc.pid})")
    return proc


def wait_for_server(timeout: int = STARTUP_TIMEOUT) -> bool:
    """Poll /health until the server answers or timeout is reached."""
    deadline = time.time() + timeout
    while time.time() < deadline:
        try:
            with httpx.Client(timeout=5) as client:
                if client.get(f"{BASE_URL}/health").status_code == 200:
                    print(f"  Server (port {PORT}) is ready")
                    return True
        except (httpx.ConnectError, httpx.ReadTimeout):
            pass
        time.sleep(0.5)
    print(f"  TIMEOUT: server (port {PORT}) did not start in {timeout}s")
    return False


def check(name: str, passed: bool, detail: str = "") -> bool:
    print(f"  [{'PASS' if passed else 'FAIL'}] {name}{'  ' + detail if detail else ''}")
    return passed


def run_checks(client: httpx.Client) -> list[bool]:
    results: list[bool] = []

    resp = client.get("/bookmarks")
    results.append(check("list seeded bookmarks", resp.status_code == 200 and len(resp.json()) == 5))

    resp = client.post("/bookmarks", json={"url": "https://example.com", "title": "Example"})
    created = resp.json()
    results.append(
        check("create bookmark", resp.status_code == 201 and "tags" not in created, created.get("id", ""))
    )

    resp = client.post("/bookmarks", json={"url": "not-a-url", "title": "X"})
    fields = [d["field"] for d in resp.json().get("details", [])]
    results.append(check("reject invalid url", resp.status_code == 400 and "url" in fields))

    resp = client.get("/bookmarks", params={"tag": "React"})
    results.append(check("filter by tag", resp.status_code == 200 and len(resp.json()) == 1))

    resp = client.put(f"/bookmarks/{created['id']}", json={"title": "Renamed"})
    results.append(check("update bookmark", resp.status_code == 200 and resp.json()["title"] == "Renamed"))

    resp = client.delete(f"/bookmarks/{created['id']}")
    results.append(check("delete bookmark", resp.status_code == 204))

    resp = client.delete(f"/bookmarks/{created['id']}")
    results.append(check("delete again is 404", resp.status_code == 404))

    return results


def main() -> int:
    print("=" * 60)
    print("Bookmark Manager — Local Smoke Tests")
    print("=" * 60)

    with tempfile.TemporaryDirectory() as tmp:
        start_server(Path(tmp) / "bookmarks.json")
        if not wait_for_server():
            print("FATAL: server failed to start. Aborting.")
            return 1

        with httpx.Client(base_url=BASE_URL, timeout=10) as client:
            results = run_checks(client)

    print(f"\nSUMMARY: {sum(results)}/{len(results)} checks passed")
    return 0 if all(results) else 1


if __name__ == "__main__":
    sys.exit(main())
