"""Database initialization service for indexes and setup."""

from app.core.config.settings import settings
from app.core.initializer import ComponentInitializer
from app.core.logging import get_logger
from app.infrastructure.database.mongodb import MongoDB, mongodb

logger = get_logger(__name__)


class DatabaseInitService:
    """Service for database initialization and index management."""

    def __init__(self, db: MongoDB = mongodb):
        self.db = db

    async def initialize_indexes(self) -> None:
        """Initialize all database indexes."""
        logger.info("Starting database index initialization...")

        try:
            await self._create_product_indexes()
            logger.info("Database indexes initialized successfully")
        except Exception as e:
            logger.error(f"Failed to initialize database indexes: {e}")
            raise

    async def _create_product_indexes(self) -> None:
        """Create indexes for products collection."""
        logger.debug("Creating products collection indexes...")
        collection = self.db.get_database()[settings.products_collection]

        # Listing order
        await collection.create_index("created_date")
        logger.debug("Created index on created_date")

        await collection.create_index("name")
        logger.debug("Created index on name")

        # Purchase filter matches on status and stock
        await collection.create_index([("status", 1), ("stock_quantity", 1)])
        logger.debug("Created compound index on status and stock_quantity")

        logger.debug("Products collection indexes created successfully")


class DatabaseInitializer(ComponentInitializer):
    """Database initialization component initializer."""

    def __init__(self, db_init_service: DatabaseInitService):
        self._db_init_service = db_init_service

    @property
    def name(self) -> str:
        return "Database Indexes"

    async def initialize(self) -> None:
        """Initialize database indexes."""
        await self._db_init_service.initialize_indexes()

    async def cleanup(self) -> None:
        """Cleanup database - no action needed for indexes."""
        pass


# Global database initialization service
db_init_service = DatabaseInitService()
db_init_initializer = DatabaseInitializer(db_init_service)
