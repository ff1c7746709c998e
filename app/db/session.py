# app/db/session.py
"""
Database engine, session factory and transaction helpers.

Repository writes go through :func:`persist`. Outside a transaction scope
each write commits on its own; inside :func:`transaction_scope` writes are
only flushed and the scope commits or rolls back once at the end.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.config import settings

logger = logging.getLogger(__name__)

ATOMIC_SCOPE_KEY = "atomic_scope"


class Database:
    """Owns the async engine and hands out sessions."""

    def __init__(self, url: str):
        self.url = url
        self.engine: Optional[AsyncEngine] = None
        self.session_factory: Optional[sessionmaker] = None

    async def connect(self) -> None:
        if self.engine is not None:
            return

        engine_kwargs = {"echo": settings.DB_ECHO, "pool_pre_ping": True}
        if not self.url.startswith("sqlite"):
            engine_kwargs.update(
                pool_size=settings.DB_POOL_SIZE,
                max_overflow=settings.DB_MAX_OVERFLOW,
                pool_recycle=settings.DB_POOL_RECYCLE,
                pool_timeout=settings.DB_POOL_TIMEOUT,
            )

        self.engine = create_async_engine(self.url, **engine_kwargs)
        self.session_factory = sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            autoflush=False,
            expire_on_commit=False,
        )
        logger.info("Database engine created")

    async def disconnect(self) -> None:
        if self.engine is None:
            return
        await self.engine.dispose()
        self.engine = None
        self.session_factory = None
        logger.info("Database engine disposed")


db = Database(settings.DATABASE_URL)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding one session per request."""
    if db.session_factory is None:
        await db.connect()
    async with db.session_factory() as session:
        yield session


def in_transaction_scope(session: Optional[AsyncSession]) -> bool:
    return session is not None and bool(session.info.get(ATOMIC_SCOPE_KEY))


async def persist(session: AsyncSession) -> None:
    """Make pending changes durable, or just visible when inside a scope."""
    if in_transaction_scope(session):
        await session.flush()
    else:
        await session.commit()


@asynccontextmanager
async def transaction_scope(
    session: Optional[AsyncSession], *, atomic: bool = True
) -> AsyncGenerator[Optional[AsyncSession], None]:
    """
    Run a whole service call as one unit of work.

    With ``atomic=False`` (or when already inside a scope) this is a no-op and
    every repository write keeps committing on its own.
    """
    if not atomic or session is None or in_transaction_scope(session):
        yield session
        return

    session.info[ATOMIC_SCOPE_KEY] = True
    try:
        yield session
    except Exception:
        await session.rollback()
        logger.warning("Transaction scope rolled back")
        raise
    else:
        await session.commit()
    finally:
        session.info.pop(ATOMIC_SCOPE_KEY, None)
