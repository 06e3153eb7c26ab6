#!/usr/bin/env python3
"""
Create the MongoDB collections and indexes used by the document store.

Collections:
- menus: restaurant menus with embedded plates and variant caches
- restaurants: restaurant directory (existence checks only)
- subscriptions: subscriptions with embedded schedule and billing
- subscription_deliveries: delivery history
- shoppingCarts: customer carts (at most one active)
- activeCarts: pointer to the active cart, keyed by customer id
- orders: checked-out carts

Usage:
    python backend/scripts/setup_mongodb_indexes.py

Environment Variables:
    MONGODB_URI: MongoDB connection string (required)
    MONGODB_DATABASE: Database name (default: plateful)
"""

import asyncio
import sys
from pathlib import Path
from typing import Any, Dict, List

import structlog
from dotenv import load_dotenv
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo.errors import CollectionInvalid

from infrastructure.config import get_mongodb_database, get_mongodb_uri

logger = structlog.get_logger(__name__)

env_path = Path(__file__).parent.parent / ".env"
if env_path.exists():
    load_dotenv(env_path)

COLLECTIONS = [
    "menus",
    "restaurants",
    "subscriptions",
    "subscription_deliveries",
    "shoppingCarts",
    "activeCarts",
    "orders",
]

# collection → [(index name, keys)]
INDEXES: Dict[str, List[Any]] = {
    "menus": [
        ("idx_restaurant", [("restaurantId", 1)]),
        ("idx_restaurant_active", [("restaurantId", 1), ("active", 1)]),
    ],
    "subscriptions": [
        ("idx_customer", [("customerId", 1)]),
        ("idx_restaurant_status", [("restaurantId", 1), ("status", 1)]),
    ],
    "subscription_deliveries": [
        ("idx_subscription_date", [("subscriptionId", 1), ("deliveryDate", -1)]),
    ],
    "shoppingCarts": [
        ("idx_customer_active", [("customerId", 1), ("active", 1)]),
    ],
    "orders": [
        ("idx_customer_created", [("customerId", 1), ("createdAt", -1)]),
        ("idx_restaurant_status", [("restaurantId", 1), ("status", 1)]),
    ],
}


async def create_collections(db: AsyncIOMotorDatabase[Dict[str, Any]]) -> None:
    for collection_name in COLLECTIONS:
        try:
            await db.create_collection(collection_name)
            logger.info("collection_created", collection=collection_name)
        except CollectionInvalid:
            logger.info("collection_exists", collection=collection_name)


async def create_indexes(db: AsyncIOMotorDatabase[Dict[str, Any]]) -> None:
    # Document stores filter on camelCase fields; "_id" is indexed by MongoDB
    for collection_name, indexes in INDEXES.items():
        for index_name, keys in indexes:
            await db[collection_name].create_index(keys, name=index_name)
            logger.info("index_created", collection=collection_name, index=index_name)


async def verify_indexes(db: AsyncIOMotorDatabase[Dict[str, Any]]) -> bool:
    """Check every expected index exists; log the missing ones."""
    complete = True
    for collection_name, indexes in INDEXES.items():
        existing = await db[collection_name].index_information()
        for index_name, _ in indexes:
            if index_name not in existing:
                logger.error("index_missing", collection=collection_name, index=index_name)
                complete = False
    return complete


async def main() -> int:
    uri = get_mongodb_uri()
    if not uri:
        logger.error("mongodb_uri_missing", hint="Set MONGODB_URI in .env")
        return 1

    database_name = get_mongodb_database()
    client: AsyncIOMotorClient[Dict[str, Any]] = AsyncIOMotorClient(uri)
    db = client[database_name]

    try:
        await client.admin.command("ping")
        logger.info("mongodb_connected", database=database_name)

        await create_collections(db)
        await create_indexes(db)

        if not await verify_indexes(db):
            return 1

        logger.info("mongodb_setup_completed", database=database_name)
        return 0
    except Exception as e:
        logger.error("mongodb_setup_failed", error=str(e))
        return 1
    finally:
        client.close()


if __name__ == "__main__":
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
    )

    exit_code = asyncio.run(main())
    sys.exit(exit_code)
