import os
import sys
import tempfile
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

sys.path.append(str(Path(__file__).parents[1] / "src"))

ENV_TEST_PATH = Path(__file__).parents[1] / ".env.test"


def _load_env_file(path: Path) -> None:
    if not path.exists():
        return
    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        os.environ.setdefault(key, value)


_load_env_file(ENV_TEST_PATH)

# The classifier opens several sessions at once, so tests need a file-backed
# database rather than an in-memory one.
_DEFAULT_TEST_DB = Path(tempfile.gettempdir()) / f"finance_tracker_test_{os.getpid()}.db"
TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", f"sqlite+aiosqlite:///{_DEFAULT_TEST_DB}")

# Settings are read at import time; provide what the app requires.
os.environ.setdefault("DATABASE_URL", TEST_DATABASE_URL)
os.environ.setdefault("JWT_SECRET", "test-secret-key-not-for-production")

from finance_tracker.db.session import get_db, get_session_factory  # noqa: E402
from finance_tracker.main import app  # noqa: E402

_connect_args = {"timeout": 30} if TEST_DATABASE_URL.startswith("sqlite") else {}
test_engine = create_async_engine(TEST_DATABASE_URL, echo=False, connect_args=_connect_args)
TestSessionLocal = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture(scope="function")
async def setup_database():
    """Create tables for tests that need the database, and drop them after.

    This fixture is intentionally NOT autouse so pure unit tests (e.g. the
    lexicon) run without touching a database.
    """
    from finance_tracker.models.base import Base

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await test_engine.dispose()


@pytest.fixture
async def db_session(setup_database):
    """Provide test database session with fresh connection per test."""
    async with TestSessionLocal() as session:
        yield session
        await session.rollback()


@pytest.fixture
def session_factory(setup_database):
    """Session factory bound to the test database."""
    return TestSessionLocal


async def _create_user(db_session: AsyncSession, email: str, full_name: str):
    from finance_tracker.core.security import hash_password
    from finance_tracker.models.user import User
    from finance_tracker.repositories.user import UserRepository

    repo = UserRepository(db_session)
    return await repo.create(
        User(
            email=email,
            password_hash=hash_password("password123"),
            full_name=full_name,
        )
    )


@pytest.fixture
async def test_user(db_session: AsyncSession):
    """Create a test user for authentication tests."""
    return await _create_user(db_session, "testuser@example.com", "Test User")


@pytest.fixture
async def other_user(db_session: AsyncSession):
    """A second user, for ownership checks."""
    return await _create_user(db_session, "other@example.com", "Other User")


@pytest.fixture
async def auth_headers(test_user):
    """Provide authentication headers with valid JWT token."""
    from finance_tracker.core.security import create_access_token

    token = create_access_token(user_id=test_user.id)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def client(db_session: AsyncSession):
    """Provide test client with database overrides."""
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: TestSessionLocal

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
