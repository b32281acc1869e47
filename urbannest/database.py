"""
Database connection and session management.
Wraps the async SQLAlchemy engine in an explicitly constructed Database object
whose lifecycle is tied to application startup and shutdown.
"""

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.pool import StaticPool
from sqlalchemy import text, event, DateTime, Uuid
from fastapi import Request
from urbannest.config import Settings
import logging
import uuid
from datetime import datetime, timezone
from typing import AsyncGenerator, Dict, Any

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    """Timezone-aware current time used for all timestamp columns."""
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """
    Base class for all database models.
    Includes common fields: id, created_at, updated_at.
    """

    # Primary key with UUID
    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        index=True
    )

    # Timestamps come from the application clock so ordering is stable
    # to the microsecond on every backend
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
        index=True
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        nullable=False
    )

    def __repr__(self) -> str:
        """String representation of the model."""
        return f"<{self.__class__.__name__}(id={self.id})>"


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite ignores ON DELETE CASCADE unless enabled per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """
    Owns the async engine and session factory for one running application.
    Created in the lifespan handler (or by tests) and disposed on shutdown.
    """

    def __init__(
        self,
        url: str,
        echo: bool = False,
        pool_size: int = 10,
        max_overflow: int = 20,
        pool_timeout: int = 30,
        statement_timeout: float = 30.0,
    ):
        self.url = url

        if url.startswith("sqlite"):
            engine_kwargs: Dict[str, Any] = {
                "connect_args": {"check_same_thread": False},
            }
            if ":memory:" in url or url.endswith("://"):
                engine_kwargs["poolclass"] = StaticPool
        else:
            engine_kwargs = {
                "pool_size": pool_size,
                "max_overflow": max_overflow,
                "pool_pre_ping": True,
                "pool_recycle": 3600,
                "pool_timeout": pool_timeout,
                "connect_args": {
                    "command_timeout": statement_timeout,
                    "server_settings": {
                        "application_name": "urbannest_api",
                    },
                },
            }

        self.engine = create_async_engine(url, echo=echo, **engine_kwargs)

        if url.startswith("sqlite"):
            event.listen(self.engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        """Build a Database from application settings."""
        return cls(
            settings.database_url,
            echo=settings.debug,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
            pool_timeout=settings.database_pool_timeout,
            statement_timeout=settings.database_statement_timeout,
        )

    async def ping(self) -> bool:
        """
        Test database connectivity.
        Returns True if connection is successful, False otherwise.
        """
        try:
            async with self.session_factory() as session:
                result = await session.execute(text("SELECT 1"))
                result.scalar()
                return True
        except Exception as e:
            logger.error(f"Database connection failed: {e}")
            return False

    async def create_tables(self) -> None:
        """Create all database tables."""
        # Import models so every table is registered on the metadata
        import urbannest.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created successfully")

    async def drop_tables(self) -> None:
        """Drop all database tables. Used by tests."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
        logger.info("Database tables dropped successfully")

    async def dispose(self) -> None:
        """Close all pooled connections."""
        await self.engine.dispose()
        logger.info("Database connections closed")


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency to get a database session bound to the application's Database.
    Yields an async session and rolls back if the request fails.
    """
    database: Database = request.app.state.db

    async with database.session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
