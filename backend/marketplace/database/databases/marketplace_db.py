"""
Marketplace database configuration.
Stores accounts (users and clients), admin assignments, the audit trail and
contact form submissions.
"""
from motor.motor_asyncio import AsyncIOMotorDatabase

from marketplace.config import get_settings

DB_NAME = get_settings().database_name


class Collections:
    """Collection names in the marketplace database."""
    USERS = "users"            # User and Client documents, discriminated by `kind`
    ADMINS = "admins"
    AUDIT_LOGS = "auditlogs"
    CONTACTS = "contacts"

    # Index definitions for each collection
    INDEXES = {
        "users": [
            {"keys": [("email", 1)], "unique": True},
            {"keys": [("kind", 1)]},
        ],
        "admins": [
            {"keys": [("user", 1)], "unique": True},
        ],
        "auditlogs": [
            {"keys": [("timestamp", -1)]},
            {"keys": [("targetUser", 1)]},
        ],
        "contacts": [
            {"keys": [("createdAt", -1)]},
        ],
    }


async def create_marketplace_indexes(db: AsyncIOMotorDatabase) -> None:
    """Create indexes for marketplace collections."""
    for collection_name, indexes in Collections.INDEXES.items():
        collection = db[collection_name]
        for index_def in indexes:
            keys = index_def["keys"]
            kwargs = {k: v for k, v in index_def.items() if k != "keys"}
            await collection.create_index(keys, **kwargs)


# Manifest for registry
DB_MANIFEST = {
    "db_name": DB_NAME,
    "purpose": "Marketplace accounts, listings, admin assignments and audit trail",
    "collections": [
        Collections.USERS,
        Collections.ADMINS,
        Collections.AUDIT_LOGS,
        Collections.CONTACTS,
    ],
    "access_level": "restricted",
}
