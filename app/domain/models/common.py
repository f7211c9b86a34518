"""
Common model components and shared types for the domain layer.
Provides the base schema every API-facing model inherits from.
"""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def utc_now() -> datetime:
    """Current UTC time as a timezone-aware datetime."""
    return datetime.now(timezone.utc)


# Base Schema with standardized configuration for all models
class Schema(BaseModel):
    """
    Base schema with standardized configuration for all domain models.

    Field names stay snake_case in Python and in MongoDB documents, while
    the JSON representation uses camelCase aliases. Both spellings are
    accepted on input.
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )
