"""
Database registry management.
Records every database this service owns in system_db on startup.
"""
from datetime import datetime, timezone
from motor.motor_asyncio import AsyncIOMotorClient

from marketplace.database.databases import marketplace_db, system_db

# All database manifests
ALL_DB_MANIFESTS = [
    marketplace_db.DB_MANIFEST,
    system_db.DB_MANIFEST,
]


async def sync_registry(client: AsyncIOMotorClient) -> None:
    """
    Synchronize the database registry on application startup.
    Ensures all databases are registered in system_db.db_registry.
    """
    sys_db = client[system_db.DB_NAME]
    registry_collection = sys_db[system_db.Collections.DB_REGISTRY]

    now = datetime.now(timezone.utc)
    for manifest in ALL_DB_MANIFESTS:
        await registry_collection.update_one(
            {"_id": manifest["db_name"]},
            {
                "$set": {
                    "purpose": manifest["purpose"],
                    "collections": manifest["collections"],
                    "access_level": manifest["access_level"],
                    "schema_version": "1.0",
                    "updated_at": now,
                },
                "$setOnInsert": {
                    "created_at": now,
                },
            },
            upsert=True,
        )


async def create_indexes(client: AsyncIOMotorClient) -> None:
    """Create necessary indexes for all databases."""
    await marketplace_db.create_marketplace_indexes(client[marketplace_db.DB_NAME])
