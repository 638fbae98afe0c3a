# app/utils/pagination.py
"""Pagination utilities for consistent API responses."""
from typing import Any, Dict
from pydantic import BaseModel, Field
from fastapi import Query
from math import ceil

from ..core.config import settings


class PaginationParams(BaseModel):
    """Standard pagination parameters."""
    page: int = Field(0, ge=0, description="Page number (starts from 0)")
    size: int = Field(settings.default_page_size, ge=1, le=settings.max_page_size, description="Items per page")


class Paginator:
    """Pagination utility class."""

    @staticmethod
    def get_pagination_params(
        page: int = Query(0, ge=0, description="Page number"),
        size: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size, description="Items per page")
    ) -> PaginationParams:
        """FastAPI dependency for pagination parameters."""
        return PaginationParams(page=page, size=size)

    @staticmethod
    def calculate_offset(page: int, size: int) -> int:
        """Calculate offset for database queries, pages are zero-based."""
        return page * size

    @staticmethod
    def create_meta(page: int, size: int, total: int) -> Dict[str, Any]:
        """Create pagination metadata."""
        total_pages = ceil(total / size) if size > 0 else 0
        return {
            "page": page,
            "size": size,
            "total": total,
            "total_pages": total_pages,
            "has_next": page + 1 < total_pages,
            "has_previous": page > 0,
        }
