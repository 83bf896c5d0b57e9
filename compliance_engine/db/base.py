"""Async SQLAlchemy engine, session factory, declarative Base, and FastAPI dependency.

The scheduler and the orchestrator open their own short sessions from
``async_session_factory``; only HTTP handlers use ``get_db``.
"""


from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from compliance_engine.core.config import settings


def build_engine(url: str, **kwargs) -> AsyncEngine:
    """Create an async engine; SQLite gets the cross-thread flag aiosqlite needs."""
    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    else:
        kwargs.setdefault("pool_pre_ping", True)
    return create_async_engine(url, **kwargs)


def build_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=bind,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


engine = build_engine(settings.database_url)
async_session_factory = build_session_factory(engine)


class Base(DeclarativeBase):
    """All ORM models inherit from this base."""


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield an async database session; roll back on error."""
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
