from .base_service import BaseService
from .attachment_storage import AttachmentStorage
from .auth_service import AuthenticationService
from .teacher_service import TeacherService
