"""Async SQLAlchemy engine and session management."""

from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from staffsphere.config import settings

# Async engine for the SQL record store and app settings
engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.ENVIRONMENT == "development" and settings.LOG_LEVEL == "debug",
    pool_pre_ping=True,
)


def make_session_factory(bind: AsyncEngine) -> async_sessionmaker:
    """Build an async session factory bound to *bind*."""
    return async_sessionmaker(bind, expire_on_commit=False)


# Default session factory
async_session_factory = make_session_factory(engine)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
    pass


async def create_tables(bind: AsyncEngine) -> None:
    """Create every table registered on ``Base.metadata`` (idempotent)."""
    # Import models so their tables are registered
    import staffsphere.common.models  # noqa: F401
    import staffsphere.store.models  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
