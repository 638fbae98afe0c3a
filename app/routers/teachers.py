# app/routers/teachers.py
"""Teacher registration and listing endpoints."""
from typing import Optional
import logging

from fastapi import APIRouter, Body, Depends, File, Form, Request, UploadFile, status
from fastapi.responses import FileResponse, JSONResponse
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.error_handlers import format_validation_errors
from ..core.exceptions import ValidationFailedException
from ..core.security import get_current_user
from ..models.user import User
from ..schemas.pagination import PaginatedResponse
from ..schemas.teacher_filters import TeacherFilters
from ..schemas.teacher_schemas import TeacherInsert, TeacherReadOnly
from ..services.attachment_storage import AttachmentStorage, get_attachment_storage
from ..services.teacher_service import TeacherService
from ..utils.pagination import PaginationParams, Paginator

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/teachers", tags=["Teachers"])


def get_teacher_service(
    db: AsyncSession = Depends(get_db),
    storage: AttachmentStorage = Depends(get_attachment_storage),
) -> TeacherService:
    return TeacherService(db, storage)


@router.post("", response_model=TeacherReadOnly, status_code=status.HTTP_201_CREATED)
async def save_teacher(
    request: Request,
    teacher: str = Form(..., description="TeacherInsert as a JSON document"),
    amka_file: Optional[UploadFile] = File(None),
    service: TeacherService = Depends(get_teacher_service),
):
    """Register a teacher from a multipart request (JSON part plus optional AMKA file)"""
    try:
        teacher_in = TeacherInsert.model_validate_json(teacher)
    except ValidationError as e:
        raise ValidationFailedException(format_validation_errors(e.errors()))

    saved = await service.save_teacher(teacher_in, amka_file)
    location = str(request.url_for("get_teacher", uuid=saved.uuid))
    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content=saved.model_dump(mode="json"),
        headers={"Location": location},
    )


@router.get("", response_model=PaginatedResponse[TeacherReadOnly])
async def get_paginated_teachers(
    pagination: PaginationParams = Depends(Paginator.get_pagination_params),
    service: TeacherService = Depends(get_teacher_service),
    current_user: User = Depends(get_current_user),
):
    """Page of teachers without any filters"""
    return await service.get_paginated_teachers(pagination.page, pagination.size)


@router.post("/filtered", response_model=PaginatedResponse[TeacherReadOnly])
async def get_filtered_and_paginated_teachers(
    filters: Optional[TeacherFilters] = Body(None),
    service: TeacherService = Depends(get_teacher_service),
    current_user: User = Depends(get_current_user),
):
    """Filtered and paginated teachers, a missing body means no filtering"""
    if filters is None:
        filters = TeacherFilters()
    return await service.get_teachers_filtered_paginated(filters)


@router.get("/{uuid}", response_model=TeacherReadOnly)
async def get_teacher(
    uuid: str,
    service: TeacherService = Depends(get_teacher_service),
    current_user: User = Depends(get_current_user),
):
    return await service.get_teacher_by_uuid(uuid)


@router.get("/{uuid}/amka-file")
async def download_amka_file(
    uuid: str,
    service: TeacherService = Depends(get_teacher_service),
    current_user: User = Depends(get_current_user),
):
    attachment = await service.get_amka_file(uuid)
    return FileResponse(
        attachment.file_path,
        media_type=attachment.content_type or "application/octet-stream",
        filename=attachment.filename or attachment.saved_name,
    )
