# app/services/attachment_storage.py
"""Local-directory storage for uploaded documents."""
import asyncio
import logging
import uuid
from pathlib import Path
from typing import Optional

from fastapi import UploadFile

from ..core.config import settings
from ..core.exceptions import AppObjectInvalidArgumentException, StorageFailureException
from ..models.attachment import Attachment

logger = logging.getLogger(__name__)


def get_file_extension(filename: Optional[str]) -> str:
    """Last ``.`` suffix of ``filename`` including the dot, or an empty string"""
    if filename and "." in filename:
        return filename[filename.rindex("."):]
    return ""


class AttachmentStorage:
    """Writes attachment bytes under ``upload_directory`` and returns their metadata.

    The original filename is never used on disk, files are stored under a
    random uuid keeping only the extension.
    """

    def __init__(self, upload_directory: str, max_bytes: Optional[int] = None):
        self.upload_directory = Path(upload_directory)
        self.max_bytes = max_bytes if max_bytes is not None else settings.max_upload_bytes

    async def read_upload(self, upload: UploadFile) -> bytes:
        """Read an upload, refusing anything larger than ``max_bytes``"""
        if upload.size is not None and upload.size > self.max_bytes:
            raise self._too_large(upload.filename)

        # One byte past the limit is enough to detect an oversized body
        content = await upload.read(self.max_bytes + 1)
        if len(content) > self.max_bytes:
            raise self._too_large(upload.filename)
        return content

    def _too_large(self, filename: Optional[str]) -> AppObjectInvalidArgumentException:
        logger.warning(f"Rejected upload {filename}: larger than {self.max_bytes} bytes")
        return AppObjectInvalidArgumentException("File", f"File {filename} exceeds the {self.max_bytes} byte limit")

    async def save(self, original_filename: Optional[str], content: bytes, content_type: Optional[str]) -> Attachment:
        extension = get_file_extension(original_filename)
        saved_name = f"{uuid.uuid4()}{extension}"
        file_path = self.upload_directory / saved_name

        try:
            await asyncio.to_thread(self._write, file_path, content)
        except OSError as e:
            logger.error(f"Attachment write failed for {original_filename}: {e}")
            raise StorageFailureException(f"Could not store file {original_filename}") from e

        return Attachment(
            filename=original_filename,
            saved_name=saved_name,
            file_path=str(file_path),
            content_type=content_type,
            extension=extension,
        )

    async def delete(self, file_path: str) -> None:
        """Remove a stored file, used to undo a write when the insert is rolled back"""
        try:
            await asyncio.to_thread(Path(file_path).unlink, missing_ok=True)
        except OSError as e:
            logger.error(f"Could not remove attachment {file_path}: {e}")

    @staticmethod
    def _write(file_path: Path, content: bytes) -> None:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_bytes(content)


def get_attachment_storage() -> AttachmentStorage:
    """FastAPI dependency, overridable in tests"""
    return AttachmentStorage(settings.upload_directory)
