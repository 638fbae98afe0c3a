import os

# Settings are read at import time, configure them before the app is imported
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from typing import Optional

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.core.database import get_db
from app.core.security import hash_password
from app.main import app
from app.models import Base, PersonalInfo, Role, Teacher, User
from app.schemas.teacher_schemas import TeacherInsert
from app.services.attachment_storage import AttachmentStorage, get_attachment_storage


def teacher_payload(n: int = 1, is_active: Optional[bool] = True) -> dict:
    """Valid creation request whose unique fields are derived from ``n``"""
    return {
        "is_active": is_active,
        "user": {
            "username": f"teacher{n}",
            "password": "Passw0rd!",
            "firstname": "Maria",
            "lastname": f"Papadopoulou{n}",
            "vat": f"{100000000 + n}",
        },
        "personal_info": {
            "amka": f"{10000000000 + n}",
            "identity_number": f"AK{100000 + n}",
            "place_of_birth": "Athens",
            "municipality_of_registration": "Athens",
        },
    }


def teacher_insert(n: int = 1, **kwargs) -> TeacherInsert:
    return TeacherInsert.model_validate(teacher_payload(n, **kwargs))


def make_teacher(n: int, uuid: Optional[str] = None, user_active: bool = True) -> Teacher:
    """Teacher graph built directly, bypassing the service and password hashing"""
    teacher = Teacher(
        is_active=True,
        user=User(
            username=f"seeded{n}",
            password="not-a-real-hash",
            vat=f"{200000000 + n}",
            role=Role.TEACHER,
            is_active=user_active,
        ),
        personal_info=PersonalInfo(
            amka=f"{20000000000 + n}",
            identity_number=f"ID{200000 + n}",
            amka_file=None,
        ),
    )
    if uuid is not None:
        teacher.uuid = uuid
    return teacher


async def count_rows(session: AsyncSession, model) -> int:
    result = await session.execute(select(func.count()).select_from(model))
    return result.scalar_one()


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession, autoflush=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def upload_dir(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture
def storage(upload_dir):
    return AttachmentStorage(str(upload_dir))


@pytest.fixture
async def client(session_factory, storage):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_attachment_storage] = lambda: storage
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
async def admin_user(db):
    user = User(
        username="admin",
        password=hash_password("AdminPass1"),
        firstname="Admin",
        lastname="User",
        vat="999999999",
        role=Role.ADMIN,
        is_active=True,
    )
    db.add(user)
    await db.commit()
    return user


@pytest.fixture
async def auth_headers(client, admin_user):
    response = await client.post(
        "/api/auth/authenticate", json={"username": "admin", "password": "AdminPass1"}
    )
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}
