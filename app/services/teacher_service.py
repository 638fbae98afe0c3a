# app/services/teacher_service.py
from typing import Optional
import logging
import re

from fastapi import UploadFile
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from .attachment_storage import AttachmentStorage
from .base_service import BaseService
from .teacher_specification import build_teacher_predicate
from ..core.exceptions import (
    AppException,
    AppObjectAlreadyExists,
    AppObjectInvalidArgumentException,
    AppObjectNotFoundException,
    StorageFailureException,
)
from ..core.security import hash_password
from ..models.attachment import Attachment
from ..models.personal_info import PersonalInfo
from ..models.teacher import Teacher, generate_uuid
from ..models.user import User
from ..schemas.pagination import PaginatedResponse
from ..schemas.teacher_filters import TeacherFilters
from ..schemas.teacher_schemas import TeacherInsert, TeacherReadOnly
from ..utils.pagination import Paginator

logger = logging.getLogger(__name__)

# Driver messages for unique violations: SQLite, then PostgreSQL
UNIQUE_VIOLATION_MARKERS = ("UNIQUE constraint failed", "duplicate key value violates unique constraint")

# Unique constraint names (PostgreSQL) and table.column (SQLite) mapped to the field kind.
# Names must match whole, "personal_info.amka" is not "personal_info.amka_file_id".
UNIQUE_VIOLATION_KINDS = tuple(
    (re.compile(rf"(?<![\w.])(?:{constraint}|{re.escape(column)})(?!\w)"), kind)
    for constraint, column, kind in (
        ("uq_users_vat", "users.vat", "VAT"),
        ("uq_personal_info_amka", "personal_info.amka", "AMKA"),
        ("uq_users_username", "users.username", "Username"),
        ("uq_personal_info_identity_number", "personal_info.identity_number", "Identity"),
    )
)


class TeacherService(BaseService[Teacher]):
    def __init__(self, db: AsyncSession, storage: Optional[AttachmentStorage] = None):
        super().__init__(Teacher, db)
        self.storage = storage

    async def save_teacher(self, teacher_in: TeacherInsert, amka_file: Optional[UploadFile] = None) -> TeacherReadOnly:
        """Check the four unique fields, then insert Teacher, User and PersonalInfo as one unit.

        Raises AppObjectAlreadyExists for a taken VAT, AMKA, username or identity
        number, whether caught by the lookups or by the database constraints.
        Nothing is left behind on failure, including a written attachment.
        """
        self._require_identifiers(teacher_in)
        user_in = teacher_in.user
        personal_info_in = teacher_in.personal_info
        attachment: Optional[Attachment] = None

        try:
            if await self._exists(User.vat, user_in.vat):
                raise AppObjectAlreadyExists("VAT", f"User with VAT {user_in.vat} already exists")

            if await self._exists(PersonalInfo.amka, personal_info_in.amka):
                raise AppObjectAlreadyExists("AMKA", f"Personal info with AMKA {personal_info_in.amka} already exists")

            if await self._exists(User.username, user_in.username):
                raise AppObjectAlreadyExists("Username", f"User with username {user_in.username} already exists")

            if await self._exists(PersonalInfo.identity_number, personal_info_in.identity_number):
                raise AppObjectAlreadyExists(
                    "Identity", f"Personal info with identity number {personal_info_in.identity_number} already exists"
                )

            if amka_file is not None:
                attachment = await self._store_amka_file(amka_file)

            teacher = self.build_teacher(teacher_in, attachment)
            self.db.add(teacher)
            await self.db.commit()
        except IntegrityError as e:
            await self._abort(attachment)
            raise self._integrity_error_to_exception(e) from e
        except SQLAlchemyError as e:
            await self._abort(attachment)
            logger.error(f"Could not save teacher with amka={personal_info_in.amka}: {e}")
            raise StorageFailureException("Could not save teacher") from e
        except Exception:
            await self._abort(attachment)
            raise

        logger.info("Teacher with amka=%s saved.", personal_info_in.amka)
        if attachment is not None:
            logger.info("Attachment for teacher with amka=%s saved", personal_info_in.amka)
        return TeacherReadOnly.model_validate(teacher)

    @staticmethod
    def build_teacher(teacher_in: TeacherInsert, amka_file: Optional[Attachment] = None) -> Teacher:
        """Build the full User + PersonalInfo + Teacher graph before any storage call"""
        is_active = True if teacher_in.is_active is None else teacher_in.is_active
        user_in = teacher_in.user
        personal_info_in = teacher_in.personal_info

        user = User(
            username=user_in.username,
            password=hash_password(user_in.password),
            firstname=user_in.firstname,
            lastname=user_in.lastname,
            vat=user_in.vat,
            role=user_in.role,
            is_active=is_active,
        )
        personal_info = PersonalInfo(
            amka=personal_info_in.amka,
            identity_number=personal_info_in.identity_number,
            place_of_birth=personal_info_in.place_of_birth,
            municipality_of_registration=personal_info_in.municipality_of_registration,
            amka_file=amka_file,
        )
        return Teacher(uuid=generate_uuid(), is_active=is_active, user=user, personal_info=personal_info)

    async def get_paginated_teachers(self, page: int, size: int) -> PaginatedResponse[TeacherReadOnly]:
        """Page of all teachers sorted by id, the same query as an empty filter"""
        return await self.get_teachers_filtered_paginated(TeacherFilters(page=page, page_size=size))

    async def get_teachers_filtered_paginated(self, filters: TeacherFilters) -> PaginatedResponse[TeacherReadOnly]:
        teachers, total = await self.get_paginated(
            page=filters.page,
            size=filters.page_size,
            predicate=build_teacher_predicate(filters),
            order_by=filters.sort_by,
            sort=filters.sort_direction,
        )
        return PaginatedResponse[TeacherReadOnly](
            items=[TeacherReadOnly.model_validate(teacher) for teacher in teachers],
            **Paginator.create_meta(filters.page, filters.page_size, total),
        )

    async def get_teacher_by_uuid(self, uuid: str) -> TeacherReadOnly:
        return TeacherReadOnly.model_validate(await self._get_teacher_or_raise(uuid))

    async def get_amka_file(self, uuid: str) -> Attachment:
        """Metadata needed to serve the teacher's stored AMKA document"""
        teacher = await self._get_teacher_or_raise(uuid)
        attachment = teacher.personal_info.amka_file
        if attachment is None:
            raise AppObjectNotFoundException("File", f"Teacher with uuid {uuid} has no AMKA file")
        return attachment

    async def _get_teacher_or_raise(self, uuid: str) -> Teacher:
        teacher = await self.get_by_field("uuid", uuid)
        if teacher is None:
            raise AppObjectNotFoundException("Teacher", f"Teacher with uuid {uuid} not found")
        return teacher

    async def _exists(self, column, value: str) -> bool:
        result = await self.db.execute(select(column).where(column == value).limit(1))
        return result.first() is not None

    async def _store_amka_file(self, amka_file: UploadFile) -> Optional[Attachment]:
        if self.storage is None:
            raise StorageFailureException("No attachment storage configured")
        content = await self.storage.read_upload(amka_file)
        if not content:
            return None
        return await self.storage.save(amka_file.filename, content, amka_file.content_type)

    async def _abort(self, attachment: Optional[Attachment]) -> None:
        await self.db.rollback()
        if attachment is not None and self.storage is not None:
            await self.storage.delete(attachment.file_path)

    @staticmethod
    def _require_identifiers(teacher_in: TeacherInsert) -> None:
        required = {
            "VAT": teacher_in.user.vat,
            "Username": teacher_in.user.username,
            "AMKA": teacher_in.personal_info.amka,
            "Identity": teacher_in.personal_info.identity_number,
        }
        for kind, value in required.items():
            if value is None or not str(value).strip():
                raise AppObjectInvalidArgumentException(kind, f"{kind} is required")

    @staticmethod
    def _integrity_error_to_exception(error: IntegrityError) -> AppException:
        """AlreadyExists for a violated unique identifier, StorageFailure for anything else"""
        message = str(error.orig)
        if any(marker in message for marker in UNIQUE_VIOLATION_MARKERS):
            for pattern, kind in UNIQUE_VIOLATION_KINDS:
                if pattern.search(message):
                    logger.warning(f"Unique constraint violation on {kind} while saving teacher")
                    return AppObjectAlreadyExists(kind, f"{kind} already exists")
        logger.error(f"Integrity error while saving teacher: {message}")
        return StorageFailureException("Could not save teacher")
