from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from finance_tracker.config import settings


def _connect_args(url: str) -> dict:
    # SQLite serializes writers; give concurrent classifier sessions time to wait.
    if url.startswith("sqlite"):
        return {"timeout": 30}
    return {}


# Do not log SQL statement parameters outside development (descriptions and
# amounts are personal data).
async_engine = create_async_engine(
    settings.database_url,
    echo=(settings.db_echo if settings.app_env.lower() == "development" else False),
    connect_args=_connect_args(settings.database_url),
)

AsyncSessionLocal = async_sessionmaker(
    async_engine, class_=AsyncSession, expire_on_commit=False
)


async def get_db() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Session factory for work that fans out over several concurrent sessions."""
    return AsyncSessionLocal
