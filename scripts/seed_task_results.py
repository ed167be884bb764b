#!/usr/bin/env python3
"""Seed a local task result store for dashboard development.

Usage:
    python scripts/seed_task_results.py --date 2024-05-01

This script:
1. Creates the task_results table in a local SQLite database
2. Inserts synthetic task results for the given day
3. Prints the environment needed to serve reports from it
"""

from __future__ import annotations

import argparse
import random
import sys
import uuid
from datetime import date, datetime, time, timedelta, timezone
from pathlib import Path

# Add src to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from outcome_reporter.config import DEFAULT_REQUESTER  # noqa: E402
from outcome_reporter.db.schema import TaskResult  # noqa: E402
from outcome_reporter.db.session import init_db, session_scope  # noqa: E402

# Constants
DEMO_DB_PATH = PROJECT_ROOT / "data" / "task_results.db"

DEMO_MODULES = ["retrieval", "graphsync", "http", "bitswap"]
DEMO_CLIENTS = ["f01234", "f05678"]
DEMO_PROVIDERS = ["f0100", "f0200", "f0300"]


def build_results(day: date, count: int, rng: random.Random) -> list[TaskResult]:
    """Build synthetic task results spread over one UTC day."""
    start = datetime.combine(day, time.min, tzinfo=timezone.utc)
    results = []
    for _ in range(count):
        success = rng.random() < 0.8
        results.append(
            TaskResult(
                task_id=uuid.uuid4().hex,
                requester=DEFAULT_REQUESTER,
                module=rng.choice(DEMO_MODULES),
                client=rng.choice(DEMO_CLIENTS),
                provider=rng.choice(DEMO_PROVIDERS),
                created_at=start + timedelta(seconds=rng.randrange(86400)),
                success=success,
                ttfb=round(rng.lognormvariate(5.5, 0.6), 1) if success else None,
            )
        )
    return results


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--date", default=date.today().isoformat(), help="Day to seed (YYYY-MM-DD)")
    parser.add_argument("--count", type=int, default=500, help="Number of task results")
    parser.add_argument("--seed", type=int, default=42, help="Random seed")
    args = parser.parse_args()

    DEMO_DB_PATH.parent.mkdir(parents=True, exist_ok=True)
    database_url = f"sqlite:///{DEMO_DB_PATH}"
    init_db(database_url)

    results = build_results(date.fromisoformat(args.date), args.count, random.Random(args.seed))
    with session_scope(database_url) as session:
        session.add_all(results)
        session.commit()

    print(f"Seeded {len(results)} task results for {args.date} into {DEMO_DB_PATH}")
    print(f"  export REPORTER_DATABASE_URL={database_url}")
    print("  export REPORTER_TOKEN=<any secret>")
    return 0


if __name__ == "__main__":
    sys.exit(main())
