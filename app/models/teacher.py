import uuid

from sqlalchemy import Boolean, ForeignKey, Integer, String, true
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates
from .base import Base
from .user import User
from .personal_info import PersonalInfo


def generate_uuid() -> str:
    return str(uuid.uuid4())


class Teacher(Base):
    """Aggregate root, owns exactly one User and one PersonalInfo.

    Inserting a Teacher cascades to both; PersonalInfo is deleted when detached.
    """
    __tablename__ = "teachers"

    uuid: Mapped[str] = mapped_column(String(36), unique=True, nullable=False, default=generate_uuid, index=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, server_default=true())

    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), unique=True, nullable=False)
    personal_info_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("personal_info.id"), unique=True, nullable=False
    )

    user: Mapped[User] = relationship(User, cascade="all", lazy="selectin")
    personal_info: Mapped[PersonalInfo] = relationship(
        PersonalInfo, cascade="all, delete-orphan", single_parent=True, lazy="selectin"
    )

    @validates("uuid")
    def validate_uuid(self, key, value):
        # Assigned once, never reassigned
        if self.uuid is not None and value != self.uuid:
            raise ValueError("Teacher uuid is immutable once assigned")
        return value

    def __repr__(self):
        return f"<Teacher(uuid={self.uuid}, is_active={self.is_active})>"
