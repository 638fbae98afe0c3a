# app/services/base_service.py
"""Base service with common read operations."""
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import ColumnElement, select, func, true
from typing import Type, Any, Optional, Sequence, Tuple, TypeVar, Generic

from ..utils.pagination import Paginator

# Define generic type
T = TypeVar('T')

class BaseService(Generic[T]):
    def __init__(self, model: Type[T], db: AsyncSession):
        self.model = model
        self.db = db

    async def get_by_field(self, field: str, value: Any) -> Optional[T]:
        stmt = select(self.model).where(getattr(self.model, field) == value)
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def count(self, predicate: Optional[ColumnElement[bool]] = None) -> int:
        stmt = select(func.count()).select_from(self.model).where(predicate if predicate is not None else true())
        result = await self.db.execute(stmt)
        return result.scalar_one()

    async def get_paginated(
        self,
        page: int = 0,
        size: int = 20,
        predicate: Optional[ColumnElement[bool]] = None,
        order_by: str = "id",
        sort: str = "asc",
    ) -> Tuple[Sequence[T], int]:
        """Get one page of rows matching ``predicate`` and the total matching count"""
        if predicate is None:
            predicate = true()

        total = await self.count(predicate)

        order_field = getattr(self.model, order_by)
        ordering = [order_field.desc() if sort.lower() == "desc" else order_field.asc()]
        if order_by != "id":
            # Tie-breaker keeps pages stable across requests
            ordering.append(self.model.id.asc())

        stmt = (
            select(self.model)
            .where(predicate)
            .order_by(*ordering)
            .offset(Paginator.calculate_offset(page, size))
            .limit(size)
        )
        result = await self.db.execute(stmt)
        return result.scalars().all(), total
