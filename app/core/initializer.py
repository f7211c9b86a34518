"""Centralized application component initializer."""

from abc import ABC, abstractmethod
from typing import List

from app.core.logging import get_logger

logger = get_logger(__name__)


class ComponentInitializer(ABC):
    """Abstract base class for component initializers."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Component name for logging."""

    @abstractmethod
    async def initialize(self) -> None:
        """Initialize the component."""

    @abstractmethod
    async def cleanup(self) -> None:
        """Cleanup the component."""


class ApplicationInitializer:
    """Runs component initializers in registration order and cleans up in reverse."""

    def __init__(self):
        self._initializers: List[ComponentInitializer] = []
        self._initialized_components: List[ComponentInitializer] = []

    @property
    def initialized_components(self) -> List[str]:
        """Names of the components currently initialized."""
        return [c.name for c in self._initialized_components]

    def register_initializer(self, initializer: ComponentInitializer) -> None:
        """Register a component initializer, ignoring repeats."""
        if initializer not in self._initializers:
            self._initializers.append(initializer)

    async def initialize_all(self) -> None:
        """Initialize all registered components in order.

        On failure the components already initialized are rolled back and the
        original error is re-raised.
        """
        logger.info("Starting application component initialization...")

        for initializer in self._initializers:
            try:
                logger.info(f"Initializing {initializer.name}...")
                await initializer.initialize()
                self._initialized_components.append(initializer)
            except Exception as e:
                logger.error(f"Failed to initialize {initializer.name}: {e}")
                await self._cleanup_initialized()
                raise

        logger.info("All application components initialized successfully")

    async def cleanup_all(self) -> None:
        """Cleanup all initialized components in reverse order."""
        logger.info("Starting application component cleanup...")
        await self._cleanup_initialized()
        logger.info("Application component cleanup completed")

    async def _cleanup_initialized(self) -> None:
        # A failing cleanup must not stop the remaining ones
        for initializer in reversed(self._initialized_components):
            try:
                logger.info(f"Cleaning up {initializer.name}...")
                await initializer.cleanup()
            except Exception as e:
                logger.error(f"Error cleaning up {initializer.name}: {e}")

        self._initialized_components.clear()
