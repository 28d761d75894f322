#!/usr/bin/env python3
"""Pathcast E2E Smoke Test

Usage:
    python scripts/smoke_test.py [--api-url http://localhost:8000]

Requires: httpx (pip install httpx)
Exercises the health and simulation endpoints of a running server.
"""

import sys
import argparse
import httpx

SAMPLE_PRICES = [100.0, 102.0, 101.0, 105.0, 104.0, 106.5, 103.2, 107.8]


def main():
    parser = argparse.ArgumentParser(description="Pathcast smoke test")
    parser.add_argument("--api-url", default="http://localhost:8000", help="API base URL")
    args = parser.parse_args()

    base = args.api_url
    passed = 0
    failed = 0

    tests = [
        # (name, method, path, body, expected_status, check_fn)
        ("Health check", "GET", "/api/v1/health", None, 200,
         lambda r: r.json()["status"] == "ok"),
        ("Simulate 20 days", "POST", "/api/v1/simulation",
         {"prices": SAMPLE_PRICES, "days": 20, "seed": 1}, 200,
         lambda r: len(r.json()["data"]["data"]) == 21),
        ("Simulate 100 days", "POST", "/api/v1/simulation",
         {"prices": SAMPLE_PRICES, "days": 100}, 200,
         lambda r: r.json()["data"]["stats"]["current"] == SAMPLE_PRICES[-1]),
        ("Empty prices", "POST", "/api/v1/simulation", {"prices": []}, 404, None),
        ("Degenerate prices", "POST", "/api/v1/simulation", {"prices": [1.0, 2.0]}, 422, None),
        ("Disallowed horizon", "POST", "/api/v1/simulation",
         {"prices": SAMPLE_PRICES, "days": 7}, [200, 422], None),
    ]

    client = httpx.Client(base_url=base, timeout=30.0)

    print(f"\n{'='*60}")
    print(f"  Pathcast Smoke Test")
    print(f"  API: {base}")
    print(f"{'='*60}\n")

    for name, method, path, body, expected_status, check_fn in tests:
        if isinstance(expected_status, list):
            acceptable_statuses = expected_status
        else:
            acceptable_statuses = [expected_status]

        try:
            resp = client.request(method, path, json=body)
            status_ok = resp.status_code in acceptable_statuses
            check_ok = True

            if check_fn and status_ok and resp.status_code == 200:
                try:
                    check_ok = check_fn(resp)
                except Exception as e:
                    check_ok = False
                    print(f"  FAIL  {name} (check failed: {e})")
                    failed += 1
                    continue

            if status_ok and check_ok:
                print(f"  PASS  {name} ({resp.status_code})")
                passed += 1
            else:
                print(f"  FAIL  {name} (got {resp.status_code}, expected {acceptable_statuses})")
                failed += 1
        except httpx.ConnectError:
            print(f"  ERROR {name}: Cannot connect to {base}")
            failed += 1
        except Exception as e:
            print(f"  ERROR {name}: {e}")
            failed += 1

    client.close()

    total = passed + failed
    print(f"\n{'='*60}")
    print(f"  Results: {passed}/{total} passed, {failed} failed")
    print(f"{'='*60}\n")

    sys.exit(0 if failed == 0 else 1)


if __name__ == "__main__":
    main()
