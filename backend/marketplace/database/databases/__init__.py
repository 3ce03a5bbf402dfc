"""
Database definitions and collection constants.
"""
from marketplace.database.databases import marketplace_db, system_db

__all__ = ["marketplace_db", "system_db"]
