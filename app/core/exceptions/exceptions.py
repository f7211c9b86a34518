"""Core exceptions module."""

from typing import Any, Dict, Optional


class BaseCustomException(Exception):
    """Base custom exception class."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        api_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.api_code = api_code or status_code
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(BaseCustomException):
    """Validation error exception."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, status_code=400, api_code=400, details=details)


class NotFoundError(BaseCustomException):
    """Resource not found exception."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, status_code=404, api_code=404, details=details)


class OutOfStockError(ValidationError):
    """Purchase attempted on a product marked out of stock."""

    def __init__(self, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__("Product is currently out of stock.", details=details)


class InsufficientStockError(ValidationError):
    """Requested quantity exceeds the available stock."""

    def __init__(
        self, requested: int, available: int, details: Optional[Dict[str, Any]] = None
    ) -> None:
        self.requested = requested
        self.available = available
        super().__init__(
            f"Requested quantity ({requested}) exceeds available stock ({available}).",
            details=details,
        )


class RepositoryError(BaseCustomException):
    """Persistence layer failure."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, status_code=500, api_code=500, details=details)
