"""
Database package - Infrastructure Layer

This package contains the MongoDB client used by the repositories.
"""

from devices_api.infrastructure.database.mongo_database import (
    DocumentNotFoundError,
    MongoDatabase,
)

__all__ = ["MongoDatabase", "DocumentNotFoundError"]
