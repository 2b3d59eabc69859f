"""
Async engine and sessions.
Requests get one session each through `get_db`; scripts use `session_scope()`.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from portfolio_api.config import get_settings

settings = get_settings()


def _engine_options(url: str) -> dict:
    options = {"echo": settings.debug}
    # Pool sizing only applies to server databases; SQLite keeps the driver's default pool
    if not url.startswith("sqlite"):
        options.update(pool_pre_ping=True, pool_size=10, max_overflow=20)
    return options


engine = create_async_engine(settings.database_url, **_engine_options(settings.database_url))

async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


@asynccontextmanager
async def session_scope() -> AsyncGenerator[AsyncSession, None]:
    """Unit of work: commit if the block succeeds, roll back if it raises."""
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with session_scope() as session:
        yield session


DbSession = Annotated[AsyncSession, Depends(get_db)]
