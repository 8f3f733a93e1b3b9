"""
MongoDB Database - Infrastructure Layer

This module provides a thin asyncio wrapper over pymongo's
AsyncMongoClient. Every call is awaitable, so an operation is abandoned
as soon as the awaiting task is cancelled, and the client-side
``timeoutMS`` bounds each operation.
"""

from typing import Any, Dict, List, Optional

import pymongo
from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import OperationFailure

from devices_api.shared import get_logger

logger = get_logger(__name__)

DEVICES_COLLECTION = "devices"


class DocumentNotFoundError(Exception):
    """Raised when a write matched no document."""

    def __init__(self, collection_name: str, query: Dict[str, Any]):
        self.collection_name = collection_name
        self.query = query
        super().__init__(f"Document not found in {collection_name}")


class MongoDatabase:
    """MongoDB database client."""

    def __init__(self, mongo_uri: str, db_name: str, timeout_ms: int = 5000):
        """
        Initialize the MongoDB database client.

        The client connects lazily on the first operation.

        Args:
            mongo_uri: MongoDB connection URI
            db_name: Name of the database to use
            timeout_ms: Client-side deadline for each operation
        """
        self.client: AsyncMongoClient = AsyncMongoClient(
            mongo_uri,
            timeoutMS=timeout_ms,
            tz_aware=True,
        )
        self.db: AsyncDatabase = self.client[db_name]

    @property
    def name(self) -> str:
        return self.db.name

    async def find_one(
        self, collection_name: str, query: Dict[str, Any]
    ) -> Optional[Dict[str, Any]]:
        """
        Find a single document in a collection.

        Returns:
            The document without its ``_id``, or None
        """
        return await self.db[collection_name].find_one(query, {"_id": 0})

    async def find_many(
        self,
        collection_name: str,
        query: Dict[str, Any],
        sort_by: Optional[str] = None,
        sort_direction: int = pymongo.ASCENDING,
    ) -> List[Dict[str, Any]]:
        """
        Find every document matching ``query``.

        Args:
            collection_name: Name of the collection
            query: Exact-match filter
            sort_by: Field to sort by
            sort_direction: pymongo.ASCENDING or pymongo.DESCENDING

        Returns:
            List of documents without their ``_id``
        """
        cursor = self.db[collection_name].find(query, {"_id": 0})
        if sort_by:
            cursor = cursor.sort(sort_by, sort_direction)
        return await cursor.to_list()

    async def insert_one(
        self, collection_name: str, document: Dict[str, Any]
    ) -> Dict[str, Any]:
        """
        Insert a document into a collection.

        Raises:
            pymongo.errors.DuplicateKeyError: If a unique index rejects it
        """
        # insert_one adds ``_id`` to the mapping it is given
        await self.db[collection_name].insert_one(dict(document))
        return document

    async def update_one(
        self,
        collection_name: str,
        query: Dict[str, Any],
        values: Dict[str, Any],
    ) -> None:
        """
        Set ``values`` on the single document matching ``query``.

        Raises:
            DocumentNotFoundError: If no document matches
        """
        result = await self.db[collection_name].update_one(query, {"$set": values})
        if result.matched_count == 0:
            raise DocumentNotFoundError(collection_name, query)

    async def delete_one(self, collection_name: str, query: Dict[str, Any]) -> None:
        """
        Delete the single document matching ``query``.

        Raises:
            DocumentNotFoundError: If no document matches
        """
        result = await self.db[collection_name].delete_one(query)
        if result.deleted_count == 0:
            raise DocumentNotFoundError(collection_name, query)

    async def ping(self) -> None:
        await self.client.admin.command("ping")

    async def create_indexes(self) -> None:
        """
        Create the indexes used by the device repository.

        Called during application startup. Existing indexes with the same
        definition are left alone.
        """
        collection = self.db[DEVICES_COLLECTION]
        try:
            await collection.create_index("id", name="device_id_idx", unique=True)
            await collection.create_index("brand", name="brand_idx")
            await collection.create_index("state", name="state_idx")
            await collection.create_index("created_at", name="created_at_idx")
        except OperationFailure as exc:
            logger.warning(
                "mongo.indexes.failed",
                collection=DEVICES_COLLECTION,
                error=str(exc),
            )

    async def close(self) -> None:
        """Close the database connection."""
        await self.client.close()
