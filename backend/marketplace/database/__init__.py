"""
Database module - MongoDB connection and database definitions.
"""
from marketplace.database.connections import (
    get_mongo_client,
    close_connections,
    get_database,
    get_marketplace_db,
)
from marketplace.database.databases import marketplace_db, system_db

__all__ = [
    "get_mongo_client",
    "close_connections",
    "get_database",
    "get_marketplace_db",
    "marketplace_db",
    "system_db",
]
