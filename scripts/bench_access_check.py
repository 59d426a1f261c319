#!/usr/bin/env python3
"""Benchmark authorization gates: latency (p50, p95, p99) and QPS.

Every request hits the permission, entitlement or team resolution path with
a fresh database read, so this measures the cost of failing closed per call.

Usage:
    export API_URL=http://localhost:8000 KEYCLOAK_URL=http://localhost:8080
    export BENCH_USER=... BENCH_PASSWORD=...
    python scripts/bench_access_check.py [--num-requests 200]

Set BENCH_TOKEN instead of the Keycloak variables when the API runs with
AUTH_DEV_MODE=true (the token is then the user id).
"""
from __future__ import annotations

import argparse
import os
import statistics
import sys
import time

import httpx

ENDPOINTS = {
    "can": ("/v1/me/can", {"action": "create", "subject": "Product"}),
    "entitlements": ("/v1/me/entitlements", {"feature": "api-access"}),
    "products": ("/v1/products", None),
}


def get_token(
    keycloak_url: str,
    realm: str,
    client_id: str,
    client_secret: str,
    username: str,
    password: str,
) -> str:
    url = f"{keycloak_url.rstrip('/')}/realms/{realm}/protocol/openid-connect/token"
    r = httpx.post(
        url,
        data={
            "grant_type": "password",
            "client_id": client_id,
            "client_secret": client_secret,
            "username": username,
            "password": password,
        },
        headers={"Content-Type": "application/x-www-form-urlencoded"},
        timeout=30.0,
    )
    r.raise_for_status()
    return r.json()["access_token"]


def percentiles(latencies: list[float]) -> tuple[float, float, float]:
    n = len(latencies)
    ordered = sorted(latencies)
    p50 = statistics.median(ordered) * 1000
    p95 = ordered[int(n * 0.95) - 1] * 1000 if n >= 20 else p50
    p99 = ordered[int(n * 0.99) - 1] * 1000 if n >= 100 else p95
    return p50, p95, p99


def run(client: httpx.Client, url: str, params, headers: dict, count: int) -> tuple[list[float], int]:
    latencies: list[float] = []
    errors = 0
    for _ in range(count):
        t0 = time.perf_counter()
        r = client.get(url, params=params, headers=headers)
        elapsed = time.perf_counter() - t0
        if r.status_code == 200:
            latencies.append(elapsed)
        else:
            errors += 1
    return latencies, errors


def main() -> int:
    parser = argparse.ArgumentParser(description="Benchmark authorization gates")
    parser.add_argument("--num-requests", type=int, default=100, help="Requests per endpoint")
    parser.add_argument("--team-id", type=str, default=None, help="Value for the X-Team-Id header")
    parser.add_argument("--output", type=str, default="results/bench_access_check.txt", help="Output file path")
    args = parser.parse_args()

    api_url = os.environ.get("API_URL", "http://localhost:8000").rstrip("/")
    token = os.environ.get("BENCH_TOKEN")
    if not token:
        print("Getting token...")
        token = get_token(
            os.environ.get("KEYCLOAK_URL", "http://localhost:8080"),
            os.environ.get("KEYCLOAK_REALM", "tenantgate"),
            os.environ.get("KEYCLOAK_CLIENT_ID", "tenantgate-api"),
            os.environ.get("KEYCLOAK_CLIENT_SECRET", ""),
            os.environ.get("BENCH_USER", "testuser"),
            os.environ.get("BENCH_PASSWORD", "testpass"),
        )
    headers = {"Authorization": f"Bearer {token}"}
    if args.team_id:
        headers["X-Team-Id"] = args.team_id

    lines = [f"Access check benchmark (requests per endpoint={args.num_requests})"]
    failed = False
    with httpx.Client(timeout=30.0) as client:
        for name, (path, params) in ENDPOINTS.items():
            print(f"Running {args.num_requests} requests against {path}...")
            start = time.perf_counter()
            latencies, errors = run(client, f"{api_url}{path}", params, headers, args.num_requests)
            total = time.perf_counter() - start
            if not latencies:
                lines.append(f"  {name}: no successful requests (errors={errors})")
                failed = True
                continue
            p50, p95, p99 = percentiles(latencies)
            lines.append(
                f"  {name}: QPS={len(latencies) / total:.2f} "
                f"p50={p50:.1f} ms p95={p95:.1f} ms p99={p99:.1f} ms errors={errors}"
            )

    summary = "\n".join(lines) + "\n"
    print(summary)

    try:
        os.makedirs(os.path.dirname(args.output) or ".", exist_ok=True)
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(summary)
        print(f"Wrote {args.output}")
    except OSError as e:
        print(f"Could not write {args.output}: {e}", file=sys.stderr)

    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
