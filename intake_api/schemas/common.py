# intake_api/schemas/common.py
from __future__ import annotations

from typing import Any, Dict, Generic, List, TypeVar

from fastapi import Query
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from intake_api.core.config import settings

T = TypeVar("T")


class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PaginationParams:
    def __init__(
        self,
        page: int = Query(1, ge=1, description="Page number"),
        limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size, description="Page size"),
    ):
        self.page = page
        self.limit = limit

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit


class PaginatedResponse(CamelModel, Generic[T]):
    items: List[T]
    page: int
    limit: int
    total: int
    pages: int

    @classmethod
    def build(cls, items: List[Any], total: int, pagination: PaginationParams) -> "PaginatedResponse":
        return cls(
            items=items,
            page=pagination.page,
            limit=pagination.limit,
            total=total,
            pages=(total + pagination.limit - 1) // pagination.limit,
        )


class ErrorResponse(BaseModel):
    code: str
    message: str
    details: Dict[str, Any] = Field(default_factory=dict)
