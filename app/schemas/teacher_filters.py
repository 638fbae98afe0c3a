# app/schemas/teacher_filters.py
"""Filter object for teacher listings, every field is optional."""
from typing import Literal, Optional
from pydantic import BaseModel, Field

from ..core.config import settings

# Teacher columns a listing may be sorted by
SortField = Literal["id", "uuid", "is_active", "created_at"]


class TeacherFilters(BaseModel):
    uuid: Optional[str] = Field(default=None, description="Case-insensitive substring of the teacher uuid")
    user_vat: Optional[str] = Field(default=None, description="Exact VAT of the linked user")
    user_amka: Optional[str] = Field(default=None, description="Exact AMKA of the linked personal info")
    active: Optional[bool] = Field(default=None, description="Linked user's active flag")

    page: int = Field(default=0, ge=0, description="Page number (starts from 0)")
    page_size: int = Field(default=settings.default_page_size, ge=1, le=settings.max_page_size)
    sort_by: SortField = "id"
    sort_direction: Literal["ASC", "DESC"] = "ASC"
