"""MongoDB client, database handle and indexes."""

import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from devconnector.config import settings

logger = logging.getLogger(__name__)

USERS_COLLECTION = "users"
PROFILES_COLLECTION = "profiles"

# Single process-wide client; motor pools connections internally
client: Optional[AsyncIOMotorClient] = None


async def ensure_indexes(db: AsyncIOMotorDatabase) -> None:
    """Create the indexes the data model relies on."""
    # Unique email per user
    await db[USERS_COLLECTION].create_index("email", unique=True)
    # At most one profile per user
    await db[PROFILES_COLLECTION].create_index("user", unique=True)
    logger.info("MongoDB indexes ensured")


async def connect_db() -> AsyncIOMotorClient:
    """
    Connect to MongoDB and prepare the collections.

    The process cannot serve requests without the database, so any failure
    here terminates it with exit status 1.
    """
    global client

    try:
        client = AsyncIOMotorClient(
            settings.MONGO_URI,
            maxPoolSize=settings.MONGODB_MAX_POOL_SIZE,
            serverSelectionTimeoutMS=settings.MONGODB_SERVER_SELECTION_TIMEOUT_MS,
        )
        # Fail fast if the server is unreachable
        await client.admin.command("ping")
        await ensure_indexes(client[settings.MONGODB_DATABASE])
    except Exception as e:
        logger.critical(
            f"Failed to connect database. Process exits. Error occurred: {e}"
        )
        raise SystemExit(1)

    logger.info(f"Connected to database: {settings.MONGODB_DATABASE}")
    return client


def get_database() -> AsyncIOMotorDatabase:
    """Return the application database; only valid after ``connect_db``."""
    if client is None:
        raise RuntimeError("Database is not connected")
    return client[settings.MONGODB_DATABASE]


def close_db() -> None:
    """Close the MongoDB client."""
    global client

    if client is not None:
        client.close()  # Motor client's close() is not async
        client = None
        logger.info("Database connection closed")
