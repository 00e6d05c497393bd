import logging

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from hilltop.config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()

Base = declarative_base()


def normalize_database_url(url: str) -> str:
    """Swap sync driver prefixes for their async counterparts."""
    if url.startswith("sqlite:///"):
        return url.replace("sqlite:///", "sqlite+aiosqlite:///", 1)
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql+asyncpg://", 1)
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return url


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(url: str, echo: bool = False, **kwargs) -> AsyncEngine:
    url = normalize_database_url(url)
    backend = make_url(url).get_backend_name()

    if backend != "sqlite" and "poolclass" not in kwargs:
        kwargs.setdefault("pool_size", settings.DB_POOL_SIZE)
        kwargs.setdefault("pool_timeout", settings.DB_POOL_TIMEOUT)

    engine = create_async_engine(url, echo=echo, future=True, **kwargs)

    # SQLite ignores REFERENCES clauses unless asked per connection.
    if backend == "sqlite":
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

    return engine


def build_sessionmaker(engine: AsyncEngine):
    return sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False
    )


engine = build_engine(settings.DATABASE_URL, echo=settings.DEBUG and settings.LOG_LEVEL == "DEBUG")

AsyncSessionLocal = build_sessionmaker(engine)


async def init_db(target: AsyncEngine = engine):
    # Models must be imported so their tables are registered on Base.metadata.
    from hilltop.database.models import contact, resource  # noqa: F401

    async with target.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables created/verified")
