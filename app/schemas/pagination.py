from typing import List, TypeVar, Generic
from pydantic import BaseModel

T = TypeVar('T')

class PaginatedResponse(BaseModel, Generic[T]):
    """One page of results, counts are computed against the filtered query."""
    items: List[T]
    total: int
    page: int
    size: int
    has_next: bool
    has_previous: bool
    total_pages: int
