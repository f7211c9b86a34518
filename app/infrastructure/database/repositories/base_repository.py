"""Base repository class with common MongoDB patterns."""

from typing import Optional

from motor.core import AgnosticCollection

from app.core.logging import get_logger
from app.infrastructure.database.mongodb import MongoDB, mongodb

logger = get_logger(__name__)


class BaseRepository:
    """Base MongoDB repository resolving its collection lazily."""

    def __init__(
        self,
        collection_name: str,
        collection: Optional[AgnosticCollection] = None,
        database: MongoDB = mongodb,
    ):
        """Initialize base repository.

        Args:
            collection_name: MongoDB collection name
            collection: Pre-built collection, bypassing the database lookup
            database: Database manager used to resolve the collection on first use
        """
        self.collection_name = collection_name
        self._collection = collection
        self._database = database
        logger.debug(
            f"{self.__class__.__name__} initialized for collection: {collection_name}"
        )

    @property
    def collection(self) -> AgnosticCollection:
        """Get MongoDB collection."""
        if self._collection is None:
            db = self._database.get_database()
            self._collection = db[self.collection_name]
        return self._collection
