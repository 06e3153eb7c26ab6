#!/usr/bin/env python3
"""
Rebuild the variant cache of every plate of a restaurant.

Run after changing the variant generation rules, or to repair menus
written by clients that stored stale variants.

Usage:
    python backend/scripts/regenerate_variants.py --restaurant-id <id>
    python backend/scripts/regenerate_variants.py --restaurant-id <id> --menu-id <id>

Environment Variables:
    REPOSITORY_BACKEND: inmemory | mongodb (mongodb for real data)
    MONGODB_URI: MongoDB connection string
    MONGODB_DATABASE: Database name (default: plateful)
    LOG_LEVEL: Log level (default: INFO)
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

import structlog
from dotenv import load_dotenv

from application.menu.commands import RegenerateVariantsCommand, RegenerateVariantsCommandHandler
from infrastructure.config import get_log_level
from infrastructure.context import create_context

logger = structlog.get_logger(__name__)

# Load environment variables from .env file
env_path = Path(__file__).parent.parent / ".env"
if env_path.exists():
    load_dotenv(env_path)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Rebuild plate variant caches")
    parser.add_argument("--restaurant-id", required=True, help="Restaurant whose menus are rebuilt")
    parser.add_argument("--menu-id", default=None, help="Only rebuild this menu")
    return parser.parse_args(argv)


async def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    logger.info("variant_regeneration_started", restaurant_id=args.restaurant_id, menu_id=args.menu_id)

    context = create_context()
    handler = RegenerateVariantsCommandHandler(
        store=context.store,
        repository=context.menus,
        event_bus=context.event_bus,
    )
    result = await handler.handle(
        RegenerateVariantsCommand(restaurant_id=args.restaurant_id, menu_id=args.menu_id)
    )

    if not result.success or result.data is None:
        logger.error("variant_regeneration_failed", error=result.error, error_code=result.error_code)
        return 1

    logger.info(
        "variant_regeneration_completed",
        menus=result.data.menus,
        plates=result.data.plates,
        variants=result.data.variants,
    )
    return 0


if __name__ == "__main__":
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, get_log_level(), logging.INFO)
        ),
    )

    exit_code = asyncio.run(main())
    sys.exit(exit_code)
