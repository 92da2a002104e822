"""Shared fixtures: in-memory database, API client and record factories."""
import os

# Settings are read at import time, so the environment must be set first
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["JWT_SECRET_KEY"] = "test-secret-key"
os.environ["ENVIRONMENT"] = "test"

from uuid import uuid4

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from schoolhub.core.database import get_db
from schoolhub.core.security import create_access_token, hash_password
from schoolhub.main import app
from schoolhub.models import Base, ClassModel, Department, Staff, Student

PASSWORD = "secret123"
PASSWORD_HASH = hash_password(PASSWORD)
ACADEMIC_YEAR = "2026-27"


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
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


def auth_headers(user) -> dict:
    token = create_access_token(user.id, user.role, user.email)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def make_staff(db):
    async def _make(role="Teacher", department_id=None, assigned_subjects=None, email=None, name=None):
        staff = Staff(
            name=name or f"{role} {uuid4().hex[:6]}",
            email=email or f"{role.lower()}.{uuid4().hex[:8]}@school.edu",
            password_hash=PASSWORD_HASH,
            role=role,
            status="Active",
            department_id=department_id,
            assigned_subjects=assigned_subjects or [],
        )
        db.add(staff)
        await db.commit()
        return staff
    return _make


@pytest.fixture
def make_student(db):
    async def _make(class_name="10", section="A", roll_number=None, email=None, name=None):
        student = Student(
            name=name or f"Student {uuid4().hex[:6]}",
            email=email or f"student.{uuid4().hex[:8]}@school.edu",
            password_hash=PASSWORD_HASH,
            role="Student",
            status="Active",
            roll_number=roll_number or uuid4().hex[:6],
            class_name=class_name,
            section=section,
            academic_year=ACADEMIC_YEAR,
        )
        db.add(student)
        await db.commit()
        return student
    return _make


@pytest.fixture
def make_department(db):
    async def _make(head=None, name=None, code=None):
        department = Department(
            name=name or f"Department {uuid4().hex[:6]}",
            code=code or uuid4().hex[:6].upper(),
            head_of_department_id=head.id if head else None,
        )
        db.add(department)
        await db.commit()
        return department
    return _make


@pytest.fixture
def make_class(db):
    async def _make(class_name="10", section="A", coordinator=None):
        class_obj = ClassModel(
            class_name=class_name,
            section=section,
            academic_year=ACADEMIC_YEAR,
            capacity=40,
            coordinator_id=coordinator.id if coordinator else None,
            is_active=True,
        )
        db.add(class_obj)
        await db.commit()
        return class_obj
    return _make


@pytest.fixture
async def class_teacher(make_staff):
    return await make_staff(
        role="Teacher",
        assigned_subjects=[{"class_name": "10", "section": "A", "subject": "Mathematics"}],
    )


@pytest.fixture
async def principal(make_staff):
    return await make_staff(role="Principal")
