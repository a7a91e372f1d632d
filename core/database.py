"""
Database engine and session management with SQLAlchemy async
"""

from typing import Optional
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool
from core.config import settings
from core.exceptions import DatabaseConnectionError
from models import Base, SNAPSHOT_SCHEMAS
import logging

logger = logging.getLogger(__name__)


def build_engine(database_url: Optional[str] = None, **kwargs) -> AsyncEngine:
    """Create the async engine for one process run."""
    kwargs.setdefault("poolclass", NullPool)
    return create_async_engine(
        database_url or settings.DATABASE_URL,
        echo=False,
        future=True,
        **kwargs
    )


def build_session_maker(engine: AsyncEngine) -> async_sessionmaker:
    """Create session factory"""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False
    )


async def verify_connection(engine: AsyncEngine) -> None:
    """
    Check that the store is reachable before any upstream call is made.

    Raises:
        DatabaseConnectionError: If a connection cannot be opened
    """
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        raise DatabaseConnectionError(
            "Failed to connect to database",
            context={"database": _redact(str(engine.url))},
            original_exception=e
        )


def _redact(url: str) -> str:
    return url.split("@")[1] if "@" in url else url


async def init_database(engine: AsyncEngine) -> None:
    """Create the snapshot schemas and tables (existing ones are kept)."""
    async with engine.begin() as conn:
        if engine.dialect.name == "postgresql":
            for schema in SNAPSHOT_SCHEMAS:
                logger.info(f"Creating schema {schema}")
                await conn.execute(text(f'CREATE SCHEMA IF NOT EXISTS "{schema}"'))

        logger.info("Creating tables...")
        await conn.run_sync(Base.metadata.create_all)
        logger.info("Tables created successfully.")
