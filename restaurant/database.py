"""
Database configuration for MongoDB persistence.

Uses Motor (async MongoDB driver) for async operations.
"""

import logging
import uuid

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection, AsyncIOMotorDatabase

from restaurant.settings import app_settings

logger = logging.getLogger(__name__)

# MongoDB connection
_client: AsyncIOMotorClient | None = None
_db: AsyncIOMotorDatabase | None = None

# Collection names
MENU_COLLECTION = "menu_items"
ORDERS_COLLECTION = "orders"
USERS_COLLECTION = "users"
COMPANIES_COLLECTION = "companies"


def new_id() -> str:
    """Generate a new document identifier."""
    return uuid.uuid4().hex


async def connect_db(mongo_url: str | None = None, db_name: str | None = None) -> AsyncIOMotorDatabase:
    """Initialize MongoDB connection."""
    global _client, _db

    mongo_url = mongo_url or app_settings.mongodb_url
    db_name = db_name or app_settings.mongodb_database

    logger.info(f"Connecting to MongoDB: {mongo_url.split('@')[-1]} / {db_name}")

    # tz_aware keeps created_at/updated_at comparable with datetime.now(UTC)
    _client = AsyncIOMotorClient(mongo_url, tz_aware=True)
    _db = _client[db_name]

    # Verify connection
    try:
        await _client.admin.command("ping")
        logger.info("✅ MongoDB connection established")
    except Exception as e:
        logger.error(f"❌ Failed to connect to MongoDB: {e}")
        raise

    return _db


async def close_db() -> None:
    """Close MongoDB connection."""
    global _client, _db

    if _client:
        _client.close()
        _client = None
        _db = None
        logger.info("MongoDB connection closed")


def get_database() -> AsyncIOMotorDatabase:
    """Get the database instance."""
    if _db is None:
        raise RuntimeError("Database not initialized. Call connect_db() first.")
    return _db


def get_collection(name: str) -> AsyncIOMotorCollection:
    """Get a collection by name."""
    return get_database()[name]


async def init_indexes() -> None:
    """Create database indexes for lookups and uniqueness guarantees."""
    db = get_database()

    menu_col = db[MENU_COLLECTION]
    await menu_col.create_index("id", unique=True)
    await menu_col.create_index("category")
    await menu_col.create_index("active")

    orders_col = db[ORDERS_COLLECTION]
    await orders_col.create_index("id", unique=True)
    await orders_col.create_index("user_id")
    await orders_col.create_index("company_id")
    await orders_col.create_index("parent_order")
    await orders_col.create_index("created_at")

    users_col = db[USERS_COLLECTION]
    await users_col.create_index("id", unique=True)
    await users_col.create_index("email", unique=True)
    await users_col.create_index("company_id")

    companies_col = db[COMPANIES_COLLECTION]
    await companies_col.create_index("id", unique=True)
    await companies_col.create_index("name", unique=True)

    logger.info("✅ Database indexes created")
