"""
MongoDB Connection Handle

Responsibilities:
- Lazily create one MongoClient on first use and reuse it for the process lifetime
- Hand out the knowledge base collection
- Ensure the createdAt index exists on first connect

The handle is constructed by the application bootstrap and injected into the
repository; there is no module-level connection cache.
"""

import logging
import threading
from typing import Any, Callable, Optional

from pymongo import DESCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from app.config import Settings
from app.services.errors import StoreUnavailableFailure

logger = logging.getLogger(__name__)


class MongoStore:
    """Connect-once handle to the knowledge base collection."""

    def __init__(
        self,
        uri: str,
        db_name: str,
        collection_name: str = "knowledge_base",
        timeout_ms: int = 5000,
        client_factory: Callable[..., Any] = MongoClient,
    ):
        """
        Args:
            uri: MongoDB connection string
            db_name: Database name
            collection_name: Collection holding knowledge base entries
            timeout_ms: Server selection timeout in milliseconds
            client_factory: Callable building the client (MongoClient by default)
        """
        self.uri = uri
        self.db_name = db_name
        self.collection_name = collection_name
        self.timeout_ms = timeout_ms
        self._client_factory = client_factory
        self._client = None
        self._collection: Optional[Collection] = None
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> "MongoStore":
        return cls(
            uri=settings.mongodb_uri,
            db_name=settings.mongodb_db,
            collection_name=settings.mongodb_collection,
            timeout_ms=settings.mongodb_timeout_ms,
            **kwargs,
        )

    @property
    def is_connected(self) -> bool:
        return self._collection is not None

    def collection(self) -> Collection:
        """
        Return the knowledge base collection, connecting on first call.

        A failed attempt leaves the handle unconnected so the next call retries.

        Raises:
            StoreUnavailableFailure: If the connection cannot be established
        """
        if self._collection is not None:
            return self._collection

        with self._lock:
            if self._collection is not None:
                return self._collection

            client = None
            try:
                logger.info(f"Connecting to MongoDB database '{self.db_name}'")
                client = self._client_factory(
                    self.uri,
                    serverSelectionTimeoutMS=self.timeout_ms,
                    tz_aware=True,
                )
                collection = client[self.db_name][self.collection_name]
                collection.create_index([("createdAt", DESCENDING)])
            except PyMongoError as e:
                logger.error(f"Failed to connect to MongoDB: {e}")
                if client is not None:
                    client.close()
                raise StoreUnavailableFailure(
                    f"Knowledge base store unavailable: {e}"
                ) from e

            self._client = client
            self._collection = collection
            logger.info(
                f"Connected to MongoDB collection "
                f"'{self.db_name}.{self.collection_name}'"
            )
            return self._collection

    def close(self) -> None:
        """Close the underlying client, if one was created."""
        with self._lock:
            if self._client is not None:
                self._client.close()
                logger.info("MongoDB connection closed")
            self._client = None
            self._collection = None
