import enum
from typing import Optional

from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import Boolean, Enum, String, UniqueConstraint, true
from .base import Base


class Role(str, enum.Enum):
    ADMIN = "ADMIN"
    TEACHER = "TEACHER"


class User(Base):
    __tablename__ = "users"
    __table_args__ = (
        UniqueConstraint("username", name="uq_users_username"),
        UniqueConstraint("vat", name="uq_users_vat"),
    )

    username: Mapped[str] = mapped_column(String(50), nullable=False)
    vat: Mapped[str] = mapped_column(String(20), nullable=False)
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    firstname: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    lastname: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    role: Mapped[Role] = mapped_column(Enum(Role, name="role"), nullable=False, default=Role.TEACHER)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, server_default=true())
