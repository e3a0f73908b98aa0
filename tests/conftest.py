"""
Shared fixtures.

Every test gets a fresh in-memory SQLite database (aiosqlite + StaticPool),
so tests never see each other's rows. Settings are pinned here, before the
application modules are imported, because they are read at import time.
"""

import os

os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["IDENTITY_TOKEN_SECRET"] = "test-identity-secret"
os.environ["PLATFORM_API_KEY"] = "test-platform-key"

from datetime import datetime, timedelta, timezone  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from main import app  # noqa: E402
from ridsport.core.security import create_identity_token  # noqa: E402
from ridsport.db.session import build_engine, build_sessionmaker, get_db  # noqa: E402
from ridsport.models import Base  # noqa: E402
from ridsport.models.enums import LessonType, UserRole  # noqa: E402
from ridsport.schemas.lesson import LessonCreate  # noqa: E402
from ridsport.schemas.tenant import TenantCreate  # noqa: E402
from ridsport.services.lesson_service import LessonService  # noqa: E402
from ridsport.services.tenant_service import TenantService  # noqa: E402
from ridsport.services.user_service import UserService  # noqa: E402

PLATFORM_HEADERS = {"X-Platform-Key": "test-platform-key"}


@pytest_asyncio.fixture
async def engine():
    engine = build_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db(engine):
    session_factory = build_sessionmaker(engine)
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(engine):
    session_factory = build_sessionmaker(engine)

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


def auth_headers(external_identity_id: str, email: str) -> dict:
    token = create_identity_token(external_identity_id, email)
    return {"Authorization": f"Bearer {token}"}


def hours_from_now(hours: float) -> datetime:
    return datetime.now(timezone.utc) + timedelta(hours=hours)


@pytest.fixture
def make_tenant(db):
    async def _make(subdomain: str = "solbacken", name: str = "Stall Solbacken"):
        return await TenantService.create_tenant(
            db, TenantCreate(name=name, subdomain=subdomain)
        )

    return _make


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    async def _make(tenant, role: UserRole = UserRole.rider, email: str = None, name: str = "Alva"):
        counter["n"] += 1
        n = counter["n"]
        return await UserService.register_user(
            db,
            tenant_id=tenant.id,
            external_identity_id=f"ext-{n}",
            email=email or f"user{n}@example.se",
            name=name,
            role=role,
        )

    return _make


@pytest.fixture
def make_lesson(db):
    async def _make(
        tenant,
        trainer,
        start_in_hours: float = 24,
        duration_hours: float = 1,
        title: str = "Hoppning nivå 2",
        max_participants: int = 4,
    ):
        start = hours_from_now(start_in_hours)
        return await LessonService.create_lesson(
            db,
            tenant_id=tenant.id,
            trainer_id=trainer.id,
            data=LessonCreate(
                title=title,
                lesson_type=LessonType.show_jumping,
                start_time=start,
                end_time=start + timedelta(hours=duration_hours),
                max_participants=max_participants,
            ),
        )

    return _make
