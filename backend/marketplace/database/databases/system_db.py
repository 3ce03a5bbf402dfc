"""
System database configuration.
Registry of the databases this service owns.
"""
from marketplace.config import get_settings

DB_NAME = get_settings().system_database_name


class Collections:
    """Collection names in the system database."""
    DB_REGISTRY = "db_registry"


# Manifest for registry
DB_MANIFEST = {
    "db_name": DB_NAME,
    "purpose": "Database registry",
    "collections": [Collections.DB_REGISTRY],
    "access_level": "system",
}
