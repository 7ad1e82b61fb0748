#!/usr/bin/env python3
"""Create calls concurrently and check that every issued number is unique.

Usage:
  export API_URL=http://localhost:8000 KEYCLOAK_URL=http://localhost:8080
  export KEYCLOAK_REALM=sirtis KEYCLOAK_CLIENT_ID=sirtis-api KEYCLOAK_CLIENT_SECRET=sirtis-api-secret
  export BENCH_USER=callcentre BENCH_PASSWORD=callcentre
  uv run python scripts/bench_create_calls.py [--num-calls 200] [--concurrency 20] [--case-ratio 0.5]

Exit status is 1 if any call or case number was issued twice.
"""
from __future__ import annotations

import argparse
import asyncio
import os
import statistics
import sys
import time
from collections import Counter

import httpx


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


async def create_calls(
    api_url: str,
    headers: dict[str, str],
    num_calls: int,
    concurrency: int,
    case_ratio: float,
) -> tuple[list[dict], list[float], int]:
    sem = asyncio.Semaphore(concurrency)
    created: list[dict] = []
    latencies: list[float] = []
    errors = 0
    case_every = round(1 / case_ratio) if case_ratio > 0 else 0

    async def one(client: httpx.AsyncClient, i: int) -> None:
        nonlocal errors
        body = {
            "caller_name": f"Bench caller {i}",
            "caller_phone": f"+263{i:09d}",
            "purpose": "benchmark",
            "is_case": bool(case_every) and i % case_every == 0,
        }
        async with sem:
            t0 = time.perf_counter()
            r = await client.post(f"{api_url}/v1/call-centre/calls", json=body, headers=headers)
            elapsed = time.perf_counter() - t0
        if r.status_code == 201:
            latencies.append(elapsed)
            created.append(r.json())
        else:
            errors += 1
            print(f"  call {i}: HTTP {r.status_code} {r.text[:200]}", file=sys.stderr)

    async with httpx.AsyncClient(timeout=60.0) as client:
        await asyncio.gather(*(one(client, i) for i in range(num_calls)))
    return created, latencies, errors


def duplicates(values: list[str]) -> list[str]:
    return sorted(v for v, n in Counter(values).items() if n > 1)


def main() -> int:
    parser = argparse.ArgumentParser(description="Concurrent call creation benchmark")
    parser.add_argument("--num-calls", type=int, default=100, help="Number of calls to create")
    parser.add_argument("--concurrency", type=int, default=10, help="Requests in flight")
    parser.add_argument("--case-ratio", type=float, default=0.5, help="Share of calls logged as cases")
    parser.add_argument("--output", type=str, default="/results/bench_create_calls.txt", help="Output file path")
    args = parser.parse_args()

    api_url = os.environ.get("API_URL", "http://localhost:8000").rstrip("/")
    keycloak_url = os.environ.get("KEYCLOAK_URL", "http://localhost:8080")
    realm = os.environ.get("KEYCLOAK_REALM", "sirtis")
    client_id = os.environ.get("KEYCLOAK_CLIENT_ID", "sirtis-api")
    client_secret = os.environ.get("KEYCLOAK_CLIENT_SECRET", "sirtis-api-secret")
    user = os.environ.get("BENCH_USER", "callcentre")
    password = os.environ.get("BENCH_PASSWORD", "callcentre")

    print("Getting token...")
    token = get_token(keycloak_url, realm, client_id, client_secret, user, password)
    headers = {"Authorization": f"Bearer {token}", "Content-Type": "application/json"}

    print(f"Creating {args.num_calls} calls, concurrency {args.concurrency}...")
    start_total = time.perf_counter()
    created, latencies, errors = asyncio.run(
        create_calls(api_url, headers, args.num_calls, args.concurrency, args.case_ratio)
    )
    total_elapsed = time.perf_counter() - start_total

    n = len(latencies)
    if n == 0:
        print("No calls created.")
        return 1

    dup_calls = duplicates([c["call_number"] for c in created])
    dup_cases = duplicates([c["case_number"] for c in created if c.get("case_number")])
    p50 = statistics.median(latencies) * 1000
    p95 = sorted(latencies)[int(n * 0.95) - 1] * 1000 if n >= 20 else p50

    summary = (
        f"Create-call benchmark (n={n}, errors={errors}, concurrency={args.concurrency})\n"
        f"  Throughput: {n / total_elapsed:.2f} calls/s\n"
        f"  Latency: p50={p50:.1f} ms, p95={p95:.1f} ms\n"
        f"  Duplicate call numbers: {len(dup_calls)} {dup_calls[:5]}\n"
        f"  Duplicate case numbers: {len(dup_cases)} {dup_cases[:5]}\n"
    )
    print(summary)

    try:
        os.makedirs(os.path.dirname(args.output) or ".", exist_ok=True)
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(summary)
        print(f"Wrote {args.output}")
    except OSError:
        pass

    return 1 if dup_calls or dup_cases else 0


if __name__ == "__main__":
    sys.exit(main())
