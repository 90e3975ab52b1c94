#!/usr/bin/env python3
"""Live dataset verification script — needs network access.

Usage:
  python scripts/verify_dataset.py

Steps:
  Step 1: Show effective configuration
  Step 2: Fetch the NASA meteorite dataset
  Step 3: Run a few listing queries against the loaded data
"""

import asyncio
import sys

from meteor_api.config import settings
from meteor_api.services.context import MeteorService
from meteor_api.services.query import MeteorQuery


def step_header(n: int, title: str) -> None:
    print(f"\n{'='*60}")
    print(f"  Step {n}: {title}")
    print(f"{'='*60}\n")


def ok(msg: str) -> None:
    print(f"  ✅ {msg}")


def fail(msg: str) -> None:
    print(f"  ❌ {msg}")


def info(msg: str) -> None:
    print(f"  ℹ️  {msg}")


def step1_show_config() -> None:
    step_header(1, "Configuration")
    info(f"Dataset URL: {settings.dataset_url}")
    info(f"Cache TTL: {settings.cache_ttl_seconds}s")
    info(f"Preferred port: {settings.port}")


async def step2_fetch(service: MeteorService) -> bool:
    step_header(2, "Fetch Dataset")
    if not await service.store.load():
        fail("Dataset fetch failed — check network connectivity")
        return False
    ok(f"Loaded {len(service.store)} records")
    years = service.years()
    if years:
        ok(f"{len(years)} distinct years ({years[0]} … {years[-1]})")
    return True


def step3_queries(service: MeteorService) -> bool:
    step_header(3, "Listing Queries")
    cases = [
        {},
        {"year": "2001"},
        {"mass": "10000"},
        {"year": "2001", "limit": "3"},
    ]
    for params in cases:
        page = service.list_meteors(params.items(), MeteorQuery(**params))
        ok(f"{params or 'no filters'} → {len(page.data)} of {page.total}")
    return True


async def main() -> int:
    step1_show_config()
    service = MeteorService.from_settings(settings)
    if not await step2_fetch(service):
        return 1
    step3_queries(service)
    print("\nAll steps passed.")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
