# app/schemas/teacher_schemas.py
"""Pydantic schemas for the Teacher aggregate (User + PersonalInfo + Teacher)."""
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..models.user import Role


class UserInsert(BaseModel):
    username: str = Field(..., min_length=2, max_length=50, description="Login username")
    password: str = Field(..., min_length=8, max_length=72, description="Plain password, stored hashed")
    firstname: Optional[str] = Field(default=None, max_length=100)
    lastname: Optional[str] = Field(default=None, max_length=100)
    vat: str = Field(..., min_length=9, max_length=20, description="Tax identification number")
    role: Role = Field(default=Role.TEACHER)

    @field_validator('username', 'vat')
    @classmethod
    def strip_identifiers(cls, v):
        v = v.strip()
        if not v:
            raise ValueError('must not be blank')
        return v


class PersonalInfoInsert(BaseModel):
    amka: str = Field(..., min_length=11, max_length=20, description="Social insurance number")
    identity_number: str = Field(..., min_length=1, max_length=20, description="Identity document number")
    place_of_birth: Optional[str] = Field(default=None, max_length=100)
    municipality_of_registration: Optional[str] = Field(default=None, max_length=100)

    @field_validator('amka', 'identity_number')
    @classmethod
    def strip_identifiers(cls, v):
        v = v.strip()
        if not v:
            raise ValueError('must not be blank')
        return v


class TeacherInsert(BaseModel):
    """Teacher creation request, carries the linked user and personal info"""
    is_active: Optional[bool] = Field(default=True, description="Active status")
    user: UserInsert
    personal_info: PersonalInfoInsert


class AttachmentReadOnly(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    filename: Optional[str] = None
    content_type: Optional[str] = None
    extension: str = ""


class UserReadOnly(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    firstname: Optional[str] = None
    lastname: Optional[str] = None
    vat: str
    role: Role
    is_active: bool


class PersonalInfoReadOnly(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    amka: str
    identity_number: str
    place_of_birth: Optional[str] = None
    municipality_of_registration: Optional[str] = None
    amka_file: Optional[AttachmentReadOnly] = None


class TeacherReadOnly(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    uuid: str
    is_active: bool
    user: UserReadOnly
    personal_info: PersonalInfoReadOnly
