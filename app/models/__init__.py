# app/models/__init__.py
"""Import all models here, needed for Alembic migrations and create_all."""
from .base import Base

from .user import User, Role
from .attachment import Attachment
from .personal_info import PersonalInfo
from .teacher import Teacher

# This ensures all models are loaded when importing models
