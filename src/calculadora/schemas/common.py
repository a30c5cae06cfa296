import math
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_serializer

T = TypeVar("T")

# page * limit must stay within a 64-bit database offset
MAX_PAGE = 1_000_000


class Pagination(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    page: int
    limit: int
    total: int
    total_pages: int = Field(alias="totalPages")

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "Pagination":
        return cls(
            page=page,
            limit=limit,
            total=total,
            total_pages=math.ceil(total / limit) if limit else 0,
        )


class Envelope(BaseModel, Generic[T]):
    """Uniform response body: {success, data?, message?, errors?, pagination?}."""

    success: bool = True
    data: T | None = None
    message: str | None = None
    errors: list[dict[str, Any]] | None = None
    pagination: Pagination | None = None

    @model_serializer(mode="wrap")
    def _drop_unset_sections(self, handler):
        return {key: value for key, value in handler(self).items() if value is not None}
