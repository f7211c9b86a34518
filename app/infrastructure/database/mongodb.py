"""MongoDB database configuration and client setup."""

from typing import Optional
from urllib.parse import quote_plus, urlparse, urlunparse

from motor.core import AgnosticDatabase
from motor.motor_asyncio import AsyncIOMotorClient

from app.core.config.settings import settings
from app.core.initializer import ComponentInitializer
from app.core.logging import get_logger

logger = get_logger(__name__)


def build_connection_uri(
    mongo_uri: str, username: Optional[str] = None, password: Optional[str] = None
) -> str:
    """Insert credentials into a MongoDB URI when both are provided."""
    if not (username and password):
        return mongo_uri

    parsed = urlparse(mongo_uri)
    netloc = f"{quote_plus(username)}:{quote_plus(password)}@{parsed.hostname}"
    if parsed.port:
        netloc += f":{parsed.port}"

    return urlunparse(
        (
            parsed.scheme,
            netloc,
            parsed.path,
            parsed.params,
            parsed.query,
            parsed.fragment,
        )
    )


class MongoDB:
    """MongoDB database client manager."""

    def __init__(self):
        self.client: Optional[AsyncIOMotorClient] = None
        self.database: Optional[AgnosticDatabase] = None

    async def connect(self) -> None:
        """Connect to MongoDB database."""
        try:
            connection_uri = build_connection_uri(
                settings.mongo_uri,
                settings.mongodb_username,
                settings.mongodb_password,
            )

            self.client = AsyncIOMotorClient(
                connection_uri,
                maxPoolSize=10,
                minPoolSize=1,
                serverSelectionTimeoutMS=5000,
                tz_aware=True,
            )
            self.database = self.client[settings.mongodb_name]

            # Test connection
            await self.client.admin.command("ping")
            logger.info(f"Connected to MongoDB database '{settings.mongodb_name}'")

        except Exception as e:
            logger.error(f"Failed to connect to MongoDB: {e}")
            raise

    async def disconnect(self) -> None:
        """Disconnect from MongoDB database."""
        if self.client:
            self.client.close()
            self.client = None
            self.database = None
            logger.info("Disconnected from MongoDB")

    def get_database(self) -> AgnosticDatabase:
        """Get database instance."""
        if self.database is None:
            raise RuntimeError("Database not initialized. Call connect() first.")
        return self.database


class MongoDBInitializer(ComponentInitializer):
    """MongoDB component initializer."""

    def __init__(self, mongodb: MongoDB):
        self._mongodb = mongodb

    @property
    def name(self) -> str:
        return "MongoDB"

    async def initialize(self) -> None:
        await self._mongodb.connect()

    async def cleanup(self) -> None:
        await self._mongodb.disconnect()


# Global database instance
mongodb = MongoDB()
mongodb_initializer = MongoDBInitializer(mongodb)
