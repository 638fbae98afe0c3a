from typing import Optional

from sqlalchemy import ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from .base import Base
from .attachment import Attachment


class PersonalInfo(Base):
    __tablename__ = "personal_info"
    __table_args__ = (
        UniqueConstraint("amka", name="uq_personal_info_amka"),
        UniqueConstraint("identity_number", name="uq_personal_info_identity_number"),
    )

    amka: Mapped[str] = mapped_column(String(20), nullable=False)
    identity_number: Mapped[str] = mapped_column(String(20), nullable=False)
    place_of_birth: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    municipality_of_registration: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    amka_file_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("attachments.id"), nullable=True, unique=True
    )
    amka_file: Mapped[Optional[Attachment]] = relationship(
        Attachment, cascade="all, delete-orphan", single_parent=True, lazy="selectin"
    )
