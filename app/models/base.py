from datetime import datetime, timezone

from sqlalchemy.orm import as_declarative, declared_attr
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import DateTime, Integer


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@as_declarative()
class Base:
    __abstract__ = True  # Prevents creating a table for the base class

    @declared_attr
    def __tablename__(cls) -> str:
        return cls.__name__.lower()

    # Surrogate key, also the default sort key for paged listings
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # Python-side defaults so the values are known after flush without a reload
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
