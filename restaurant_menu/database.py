"""
Database Connection Module
Handles the SQLAlchemy async engine behind an explicitly constructed handle.

The application creates one Database at startup, connects it in the
lifespan handler and disconnects it on shutdown. Route handlers reach it
through request.app.state, scripts construct their own.
"""

import logging
from typing import AsyncIterator, Optional

from fastapi import Request
from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)


# Base class for all our models
class Base(DeclarativeBase):
    pass


class Database:
    """
    Owns the async engine and session factory for one database URL.

    Usage:
        database = Database("sqlite+aiosqlite:///./restaurant_menu.db")
        await database.connect()
        async with database.session() as session:
            ...
        await database.disconnect()
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        self.echo = echo
        self._engine: Optional[AsyncEngine] = None
        self._session_maker: Optional[async_sessionmaker[AsyncSession]] = None

    @property
    def is_connected(self) -> bool:
        return self._engine is not None

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise RuntimeError("Database is not connected; call connect() first")
        return self._engine

    async def connect(self, create_tables: bool = True) -> None:
        """Create the engine and (optionally) all tables."""
        if self._engine is not None:
            return

        if self.is_sqlite:
            # In-memory SQLite must share one connection across sessions
            options = {"poolclass": StaticPool, "connect_args": {"check_same_thread": False}}
        else:
            options = {"pool_size": 5, "max_overflow": 10}

        self._engine = create_async_engine(self.url, echo=self.echo, **options)

        if self.is_sqlite:
            event.listen(self._engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

        # Objects remain accessible after commit
        self._session_maker = async_sessionmaker(
            bind=self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

        if create_tables:
            await self.create_all()

        logger.info(f"Database connected ({self._engine.url.get_backend_name()})")

    async def disconnect(self) -> None:
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        self._session_maker = None
        logger.info("Database disconnected")

    async def create_all(self) -> None:
        """Create all tables. Called once at application startup."""
        # Registers the mapped classes on Base.metadata
        from restaurant_menu import models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def drop_all(self) -> None:
        from restaurant_menu import models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    def session(self) -> AsyncSession:
        if self._session_maker is None:
            raise RuntimeError("Database is not connected; call connect() first")
        return self._session_maker()

    async def ping(self) -> bool:
        """Run a trivial query; used by the health check."""
        try:
            async with self.session() as session:
                await session.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"Database health check failed: {e}")
            return False


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """
    Dependency injection for FastAPI routes.
    Yields a database session and ensures cleanup.
    """
    database: Database = request.app.state.database
    async with database.session() as session:
        try:
            yield session
        finally:
            await session.close()
