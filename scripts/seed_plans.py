"""
Insert the default membership plans when the plans table is empty.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from storefront.db import DbClient, PlanRecord
from storefront.dependencies import get_db_client

logger = logging.getLogger(__name__)

DEFAULT_PLANS = (
    {"plan_name": "Monthly", "price": 29.99, "duration": "monthly", "description": "Billed every month"},
    {"plan_name": "Yearly", "price": 299.0, "duration": "yearly", "description": "Billed once a year"},
)


def seed_plans(db: DbClient, *, force: bool = False) -> int:
    if db.list_plans() and not force:
        logger.info("Plans already present, nothing to do")
        return 0
    for plan in DEFAULT_PLANS:
        db.add_plan(PlanRecord(**plan))
    return len(DEFAULT_PLANS)


def main() -> int:
    parser = argparse.ArgumentParser(description="Seed default membership plans")
    parser.add_argument(
        "--force",
        action="store_true",
        help="Insert the defaults even if plans already exist",
    )
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s:%(message)s")
    inserted = seed_plans(get_db_client(), force=args.force)
    logger.info("Inserted %d plans", inserted)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
