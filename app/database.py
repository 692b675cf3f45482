"""MongoDB connection management."""

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from app.config import settings
from app.models import COLLECTION_INDEXES

# Global client instance
_client: AsyncIOMotorClient | None = None


def get_client() -> AsyncIOMotorClient:
    """Get or create the MongoDB client."""
    global _client

    if _client is None:
        _client = AsyncIOMotorClient(
            settings.mongodb_url,
            appname=settings.app_name,
            serverSelectionTimeoutMS=5000,
            tz_aware=True,
        )

    return _client


def get_database() -> AsyncIOMotorDatabase:
    """Get the application database."""
    return get_client()[settings.mongodb_database]


async def get_db() -> AsyncIOMotorDatabase:
    """Dependency for getting the application database."""
    return get_database()


async def ensure_indexes(db: AsyncIOMotorDatabase) -> None:
    """Create the indexes every collection relies on."""
    for collection_name, indexes in COLLECTION_INDEXES.items():
        if indexes:
            await db[collection_name].create_indexes(indexes)


async def check_database_connection() -> bool:
    """Check if database connection is healthy."""
    try:
        await get_client().admin.command("ping")
        return True
    except Exception:
        return False


def close_database_connection() -> None:
    """Close the MongoDB client."""
    global _client

    if _client is not None:
        _client.close()
        _client = None
