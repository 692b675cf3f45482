"""Script to initialize the database."""

import asyncio
from datetime import UTC, datetime

from app.database import close_database_connection, ensure_indexes, get_database
from app.models import SPECIALIZATIONS
from app.search.lexicon import DEFAULT_LEXICON


async def init_db() -> None:
    """Create indexes and seed one specialization per canonical search label."""
    db = get_database()
    try:
        await ensure_indexes(db)
        print("✓ Indexes created")

        seeded = 0
        for label in DEFAULT_LEXICON.labels():
            result = await db[SPECIALIZATIONS].update_one(
                {"name": label},
                {
                    "$setOnInsert": {
                        "description": None,
                        "createdAt": datetime.now(UTC),
                    }
                },
                upsert=True,
            )
            if result.upserted_id is not None:
                seeded += 1

        print(f"✓ Seeded {seeded} specializations")
        print("✓ Database initialized successfully!")
    finally:
        close_database_connection()


if __name__ == "__main__":
    asyncio.run(init_db())
