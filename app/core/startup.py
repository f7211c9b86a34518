"""Application startup and initialization service."""

from typing import Optional, Sequence

from app.core.config.settings import settings
from app.core.initializer import ApplicationInitializer, ComponentInitializer
from app.core.logging import get_logger
from app.infrastructure.database.db_init import db_init_initializer
from app.infrastructure.database.mongodb import mongodb_initializer

logger = get_logger(__name__)


class AppStartupService:
    """Service for application startup initialization."""

    def __init__(
        self, initializers: Optional[Sequence[ComponentInitializer]] = None
    ):
        self._initializer = ApplicationInitializer()
        if initializers is None:
            # Dependency order: the connection must exist before index creation
            initializers = (mongodb_initializer, db_init_initializer)
        for initializer in initializers:
            self._initializer.register_initializer(initializer)

    async def initialize_application(self) -> None:
        """Initialize the application on startup."""
        logger.info(f"=== {settings.app_name} v{settings.app_version} ===")
        logger.info("-> Starting application initialization")

        try:
            await self._initializer.initialize_all()
            logger.info("Application initialized successfully <-")
        except Exception as e:
            logger.error(f"Failed to initialize application: {e}")
            raise

    async def shutdown_application(self) -> None:
        """Shutdown the application gracefully."""
        logger.info("Starting application shutdown...")
        await self._initializer.cleanup_all()
        logger.info("Application shutdown completed successfully")
