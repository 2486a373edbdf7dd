"""Response envelope models.

Every backend response is wrapped in one of two envelopes:

- ``{ data: T, success: bool, message?: str }`` for single resources and plain lists
- ``{ data: T[], total: int, page: int, limit: int }`` for paged lists

``data`` is only meaningful when ``success`` is true. A paged envelope has no
``success`` field on the wire; receiving one at all means the read succeeded.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar, Union

from pydantic import BaseModel, Field, model_validator

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """JSON envelope for all backend responses."""

    success: bool
    data: T | None = None
    message: str | None = None

    @property
    def ok(self) -> bool:
        return self.success

    @classmethod
    def failure(cls, message: str) -> ApiResponse[Any]:
        """Build the synthetic envelope returned for any failed call."""
        return ApiResponse[Any](success=False, data=None, message=message)


class PaginatedResponse(BaseModel, Generic[T]):
    """JSON envelope for paged list endpoints (``page`` is 1-indexed)."""

    success: bool = True
    data: list[T] = Field(default_factory=list)
    message: str | None = None
    total: int = Field(ge=0)
    page: int = Field(ge=1)
    limit: int = Field(ge=1)

    @property
    def ok(self) -> bool:
        return self.success

    @model_validator(mode="after")
    def _page_fits_limit(self) -> PaginatedResponse[T]:
        if len(self.data) > self.limit:
            raise ValueError(
                f"page holds {len(self.data)} items but limit is {self.limit}"
            )
        return self


Envelope = Union[ApiResponse[Any], PaginatedResponse[Any]]
