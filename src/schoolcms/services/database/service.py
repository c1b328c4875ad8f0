"""
DatabaseService - async SQLAlchemy engine and session management.

Provides connection management for the relational store:
- PostgreSQL through asyncpg in production
- SQLite through aiosqlite for local development and tests

The service is constructed once by the app factory (or CLI) and handed to
every store, so tests can point the whole application at a throwaway
database.
"""

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from .tables import Base


class DatabaseService:
    """Owns the async engine and hands out sessions."""

    def __init__(self, url: str, echo: bool = False):
        """
        Initialize the database service.

        Args:
            url: SQLAlchemy async URL (postgresql+asyncpg://... or sqlite+aiosqlite://...)
            echo: Log every SQL statement
        """
        self.url = url
        self.engine: AsyncEngine = create_async_engine(url, echo=echo)
        self.session_factory = async_sessionmaker(self.engine, expire_on_commit=False)

    @classmethod
    def from_settings(cls, database_settings=None) -> "DatabaseService":
        if database_settings is None:
            from ...settings import settings

            database_settings = settings.database
        return cls(database_settings.url, echo=database_settings.echo)

    def session(self) -> AsyncSession:
        """New session; use as ``async with db.session() as session``."""
        return self.session_factory()

    async def create_all(self) -> None:
        """Create any missing tables."""
        logger.info(f"Creating tables on {self.engine.url.render_as_string(hide_password=True)}")
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def drop_all(self) -> None:
        logger.warning(f"Dropping all tables on {self.engine.url.render_as_string(hide_password=True)}")
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def dispose(self) -> None:
        """Close pooled connections."""
        await self.engine.dispose()
        logger.info("Database connections closed")
