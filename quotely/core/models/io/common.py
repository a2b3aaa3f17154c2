"""Schema models shared by every API response."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from quotely.core.models.domain.models import Page


class ErrorResponse(BaseModel):
    """Body of every error response."""

    error: str = Field(description="Machine-readable error kind", examples=["NotFound"])
    message: str = Field(description="Human-readable explanation", examples=["Content item 42 not found"])


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str


class Pagination(BaseModel):
    """Paging metadata attached to listings."""

    page: int = Field(description="1-based page number")
    limit: int = Field(description="Effective page size")
    total: int = Field(description="Number of matching records")
    pages: int = Field(description="Number of pages")

    @classmethod
    def from_page(cls, page: Page[Any]) -> "Pagination":
        return cls(page=page.page, limit=page.page_size, total=page.total_count, pages=page.total_pages)
