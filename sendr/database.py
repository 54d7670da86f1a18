# sendr/database.py

from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession, AsyncEngine
from sqlalchemy.orm import declarative_base
from sendr.core.config import get_settings

settings = get_settings()


def build_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """Create the async engine; pool sizing only applies to server databases."""
    kwargs = {"echo": echo, "future": True}
    if not database_url.startswith("sqlite"):
        kwargs.update(
            pool_size=10,
            max_overflow=20,
            pool_timeout=30,
            pool_recycle=1800,
            pool_pre_ping=True,
        )
    return create_async_engine(database_url, **kwargs)


def build_sessionmaker(bind: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(bind, class_=AsyncSession, expire_on_commit=False)


database_url = settings.async_database_url
if not database_url:
    raise ValueError("DATABASE_URL is not set in environment variables")

engine = build_engine(database_url, echo=settings.DATABASE_ECHO)

async_session = build_sessionmaker(engine)

Base = declarative_base()


async def create_tables(bind: AsyncEngine = None) -> None:
    """Create any missing tables for the registered models."""
    import sendr.models  # noqa: F401  registers the models on Base.metadata

    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

