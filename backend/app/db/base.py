"""Async engine, session factory and declarative base."""

from functools import lru_cache

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from app.core.config import settings

# Bounds of the Integer and BigInteger column types (signed 32 and 64 bit)
INT_MAX = 2**31 - 1
BIGINT_MAX = 2**63 - 1


class Base(DeclarativeBase):
    pass


@lru_cache
def get_engine() -> AsyncEngine:
    return create_async_engine(settings.DATABASE_URL, echo=settings.DB_ECHO, pool_pre_ping=True)


@lru_cache
def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Session factory handed to the query services.

    Services open one session per statement they run concurrently, so they take the
    factory rather than a single session.
    """
    return async_sessionmaker(get_engine(), expire_on_commit=False)


async def init_models(engine: AsyncEngine) -> None:
    # Import models so their tables are registered on Base.metadata
    import app.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
