"""Pagination and list query schemas."""

import math
from typing import Literal, Optional

from pydantic import BaseModel, Field


class TripListQuery(BaseModel):
    """Filtering, sorting and paging options for listing trips."""

    page: int = Field(default=1, ge=1)
    per_page: int = Field(default=20, ge=1, le=100)
    sort_order: Literal["asc", "desc"] = "asc"
    destination: Optional[str] = Field(default=None, description="Case-insensitive substring match")


class Pagination(BaseModel):
    """Pagination metadata returned alongside list results."""

    current_page: int
    total_pages: int
    total_count: int
    per_page: int

    @classmethod
    def build(cls, page: int, per_page: int, total_count: int) -> "Pagination":
        return cls(
            current_page=page,
            total_pages=max(1, math.ceil(total_count / per_page)),
            total_count=total_count,
            per_page=per_page,
        )
