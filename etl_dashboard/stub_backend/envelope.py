"""Helpers for rendering stub backend responses in the client's envelope."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel

from etl_dashboard.models.responses import ApiResponse, PaginatedResponse


def wire(value: Any) -> Any:
    """Dump models (or lists of models) to camelCase JSON-ready data."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True, exclude_none=True)
    if isinstance(value, list):
        return [wire(item) for item in value]
    return value


def ok(data: Any = None, message: str | None = None) -> dict:
    return ApiResponse(success=True, data=wire(data), message=message).model_dump()


def paginated(items: list, *, total: int, page: int, limit: int) -> dict:
    return PaginatedResponse(
        data=wire(items), total=total, page=page, limit=limit
    ).model_dump(exclude_none=True)
