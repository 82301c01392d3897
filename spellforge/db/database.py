"""
Engine and sessions for the short-link store.

Only ``/api/share``, ``/s/{id}``, ``/ready`` and the purge job touch the
database. The codec and rules engine are pure.
"""

from collections.abc import AsyncGenerator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from spellforge.config import settings
from spellforge.models.db import Base

engine = create_async_engine(settings.database_url, echo=settings.debug, pool_pre_ping=True)

async_session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Request-scoped session. Commits after the handler, rolls back on database errors."""
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except SQLAlchemyError:
            await session.rollback()
            raise


async def init_db() -> None:
    """Create the share_links table if missing. Runs at application startup."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
