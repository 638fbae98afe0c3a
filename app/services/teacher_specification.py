# app/services/teacher_specification.py
"""Compile a TeacherFilters object into a single SQLAlchemy predicate.

Each filter field becomes an optional predicate; absent or blank fields yield
``None`` and are left out, so an empty filter compiles to ``true()``. Fields
that live on the linked User or PersonalInfo are matched through a
relationship ``has()`` lookup.
"""
from typing import List, Optional

from sqlalchemy import ColumnElement, and_, func, true

from ..models.personal_info import PersonalInfo
from ..models.teacher import Teacher
from ..models.user import User
from ..schemas.teacher_filters import TeacherFilters


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def teacher_uuid_contains(value: Optional[str]) -> Optional[ColumnElement[bool]]:
    """Case-insensitive, unanchored match on the teacher uuid."""
    if _is_blank(value):
        return None
    return func.upper(Teacher.uuid).contains(value.strip().upper(), autoescape=True)


def teacher_user_vat_is(vat: Optional[str]) -> Optional[ColumnElement[bool]]:
    if _is_blank(vat):
        return None
    return Teacher.user.has(User.vat == vat.strip())


def teacher_personal_info_amka_is(amka: Optional[str]) -> Optional[ColumnElement[bool]]:
    if _is_blank(amka):
        return None
    return Teacher.personal_info.has(PersonalInfo.amka == amka.strip())


def teacher_user_is_active(is_active: Optional[bool]) -> Optional[ColumnElement[bool]]:
    if is_active is None:
        return None
    return Teacher.user.has(User.is_active == is_active)


def build_teacher_predicate(filters: Optional[TeacherFilters]) -> ColumnElement[bool]:
    """AND together every present filter, ``true()`` when nothing is set."""
    if filters is None:
        return true()

    predicates: List[ColumnElement[bool]] = [
        predicate
        for predicate in (
            teacher_uuid_contains(filters.uuid),
            teacher_user_vat_is(filters.user_vat),
            teacher_personal_info_amka_is(filters.user_amka),
            teacher_user_is_active(filters.active),
        )
        if predicate is not None
    ]
    if not predicates:
        return true()
    return and_(*predicates)
