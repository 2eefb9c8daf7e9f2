"""
Stride - Test Configuration and Fixtures
"""
import os
from datetime import date
from typing import AsyncGenerator
import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import NullPool
from faker import Faker

# Set testing environment (before any stride import reads settings)
os.environ['ENVIRONMENT'] = 'testing'
os.environ['DATABASE_URL'] = 'sqlite+aiosqlite:///./test_stride.db'
os.environ['JWT_SECRET_KEY'] = 'test-jwt-secret-key-for-testing'
os.environ['ADMIN_EMAIL'] = 'admin@stride.test'
os.environ['CACHE_ENABLED'] = 'false'
os.environ['RATE_LIMIT_ENABLED'] = 'false'
os.environ['LOG_FILE'] = ''

from stride.main import app
from stride.core.config import settings
from stride.core.database import Base, get_db
from stride.core.security import create_access_token
from stride.models.academic import Branch, Semester, Subject, EvaluationComponent
from stride.models.holiday import Holiday

fake = Faker()

# Test database setup
TEST_DATABASE_URL = 'sqlite+aiosqlite:///./test_stride.db'
test_engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=NullPool)
TestSessionLocal = async_sessionmaker(
    bind=test_engine,
    class_=AsyncSession,
    expire_on_commit=False
)


@pytest.fixture(scope='function')
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a fresh database session for each test"""
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with TestSessionLocal() as session:
        yield session
        await session.rollback()

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with database override"""
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url='http://test') as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def student_email() -> str:
    return f"24bce{fake.random_int(min=100, max=999)}@nirmauni.ac.in"


@pytest.fixture
def auth_headers(student_email: str) -> dict:
    """Bearer token for a regular student"""
    token = create_access_token(student_email)
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
def admin_auth_headers() -> dict:
    """Bearer token for the configured admin account"""
    token = create_access_token(settings.ADMIN_EMAIL)
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
async def cse_semester(db_session: AsyncSession) -> Semester:
    """Computer Science semester 4 with two graded subjects"""
    branch = Branch(name="Computer Science Engineering", slug="computer-science-engineering")
    semester = Semester(branch=branch, number=4)
    semester.subjects = [
        Subject(
            code="2CS401",
            name="Database Management Systems",
            credits=4,
            components=[
                EvaluationComponent(type="CE", weight=20, max_marks=50, position=0),
                EvaluationComponent(type="LPW", weight=40, max_marks=50, position=1),
                EvaluationComponent(type="SEE", weight=40, max_marks=100, position=2),
            ],
        ),
        Subject(
            code="2CS402",
            name="Operating Systems",
            credits=4,
            components=[
                EvaluationComponent(type="CE", weight=40, max_marks=50, position=0),
                EvaluationComponent(type="SEE", weight=60, max_marks=100, position=1),
            ],
        ),
        Subject(code="2HS401", name="Seminar", credits=0, components=[]),
    ]
    db_session.add(branch)
    await db_session.flush()
    return semester


@pytest.fixture
async def holidays(db_session: AsyncSession) -> list:
    """Tuesday and Thursday holidays in March 2026 plus a weekend one"""
    rows = [
        Holiday(name="Holi", date=date(2026, 3, 3)),
        Holiday(name="Ram Navami", date=date(2026, 3, 26)),
        Holiday(name=fake.word().title(), date=date(2026, 3, 14), is_floating=True),
    ]
    db_session.add_all(rows)
    await db_session.flush()
    return rows
