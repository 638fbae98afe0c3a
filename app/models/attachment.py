from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String
from .base import Base


class Attachment(Base):
    """Metadata of an uploaded file, the bytes live at ``file_path`` outside the database."""
    __tablename__ = "attachments"

    filename: Mapped[str] = mapped_column(String(255), nullable=True)
    saved_name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    file_path: Mapped[str] = mapped_column(String(500), nullable=False)
    content_type: Mapped[str] = mapped_column(String(100), nullable=True)
    extension: Mapped[str] = mapped_column(String(20), nullable=False, default="")

    def __repr__(self):
        return f"<Attachment(saved_name={self.saved_name}, filename={self.filename})>"
