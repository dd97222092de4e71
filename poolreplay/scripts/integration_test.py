"""
Integration test script — hits the table API of a running server and verifies responses.

Usage:
    python -m poolreplay.web.app                      (terminal 1)
    python poolreplay/scripts/integration_test.py     (terminal 2)

BASE_URL and REPLAY_DELAY_MS env vars point it at another server/delay.
"""

import os
import sys
import time
import httpx

BASE = os.getenv("BASE_URL", "http://localhost:3000")
DELAY_S = int(os.getenv("REPLAY_DELAY_MS", "3000")) / 1000.0
TIMEOUT = 10.0
passed = 0
failed = 0


def test(name: str, method: str, path: str, expect_status: int = 200, checks: dict | None = None):
    global passed, failed
    url = f"{BASE}{path}"
    checks = checks or {}
    try:
        if method == "GET":
            r = httpx.get(url, timeout=TIMEOUT)
        else:
            r = httpx.post(url, timeout=TIMEOUT)

        if r.status_code != expect_status:
            print(f"  FAIL  {name} — HTTP {r.status_code}")
            failed += 1
            return None

        data = r.json()
        for key, expected in checks.items():
            actual = data.get(key)
            if callable(expected):
                ok = expected(actual)
            else:
                ok = actual == expected
            if not ok:
                print(f"  FAIL  {name} — {key}: expected {(expected.__doc__ if callable(expected) else expected)!r}, got {actual!r}")
                failed += 1
                return None

        print(f"  OK    {name}")
        passed += 1
        return data

    except httpx.ConnectError:
        print(f"  FAIL  {name} — connection refused (is the server running?)")
        failed += 1
    except Exception as e:
        print(f"  FAIL  {name} — {type(e).__name__}: {e}")
        failed += 1
    return None


def is_set(v):
    """non-null"""
    return v is not None


def main():
    print(f"\nIntegration tests against {BASE}\n")
    print("--- Health ---")
    test("GET /api/health", "GET", "/api/health", checks={"ok": True})

    print("\n--- Tables ---")
    tables = httpx.get(f"{BASE}/api/tables", timeout=TIMEOUT).json()
    print(f"  {len(tables)} tables")
    test("GET /api/tables/1", "GET", "/api/tables/1", checks={"id": 1, "isLive": True})
    test("GET /api/tables/999", "GET", "/api/tables/999", 404, {"error": "Table not found"})
    test("GET /api/tables/abc", "GET", "/api/tables/abc", 404, {"error": "Table not found"})

    print("\n--- Trigger ---")
    issued = int(time.time() * 1000)
    t0 = time.perf_counter()
    test("POST /api/tables/1/trigger", "POST", "/api/tables/1/trigger",
         checks={"status": "processing", "message": "Replay generation started"})
    print(f"  trigger answered in {(time.perf_counter() - t0) * 1000:.0f}ms")
    test("POST /api/tables/999/trigger", "POST", "/api/tables/999/trigger", 404,
         {"error": "Table not found"})

    print(f"\n--- After {DELAY_S:.1f}s delay ---")
    time.sleep(DELAY_S + 0.5)
    test("GET /api/tables/1 (replay ready)", "GET", "/api/tables/1", checks={
        "hasReplay": True,
        "replayUrl": is_set,
        "lastReplayTimestamp": lambda v: v is not None and v >= issued,
    })

    total = passed + failed
    print(f"\n{'='*40}")
    print(f"  {passed}/{total} passed, {failed} failed")
    print(f"{'='*40}\n")

    sys.exit(1 if failed else 0)


if __name__ == "__main__":
    main()
