"""API response envelope helpers for service-level endpoints."""

from typing import Any, Dict

from pydantic import BaseModel


def serialize_response_data(data: Any) -> Any:
    """Recursively serialize response data, converting Pydantic models to dicts."""
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json", by_alias=True)
    elif isinstance(data, dict):
        return {k: serialize_response_data(v) for k, v in data.items()}
    elif isinstance(data, list):
        return [serialize_response_data(item) for item in data]
    else:
        return data


class APIResponseHelper:
    """Helper class for creating the ``{code, msg, data}`` envelope."""

    SUCCESS = 200
    SUCCESS_MSG = "Success"

    @classmethod
    def success(
        cls, data: Any = None, msg: str = SUCCESS_MSG, code: int = SUCCESS
    ) -> Dict[str, Any]:
        """Create a success response."""
        return {"code": code, "msg": msg, "data": serialize_response_data(data)}


# Convenience alias
ResponseHelper = APIResponseHelper
