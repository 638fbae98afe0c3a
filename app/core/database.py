# app/core/database.py
"""Database connection and session management using SQLAlchemy."""
from typing import AsyncGenerator
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy import text
import logging

from .config import settings

logger = logging.getLogger(__name__)


def build_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """Create the async engine, with pool tuning only for PostgreSQL."""
    if database_url.startswith("postgresql"):
        return create_async_engine(
            database_url,
            pool_size=10,
            max_overflow=20,
            pool_timeout=30,
            pool_recycle=1800,
            pool_pre_ping=True,
            echo=echo,
            connect_args={
                "command_timeout": 60,
                "server_settings": {
                    "application_name": "eduapp_api",
                    "idle_in_transaction_session_timeout": "60s",
                    "lock_timeout": "30s",
                }
            }
        )
    return create_async_engine(database_url, echo=echo)


engine = build_engine(settings.database_url, echo=(settings.environment == 'development'))

# Regular session factory for API requests
AsyncSessionLocal = async_sessionmaker(
    engine,
    expire_on_commit=False,
    class_=AsyncSession,
    autoflush=False,  # Manual control over flushing
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Get database session for API requests with proper error handling"""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception as e:
            logger.error(f"Database session error: {e}")
            await session.rollback()
            raise
        finally:
            await session.close()


async def create_tables(bind: AsyncEngine = engine) -> None:
    """Create all tables, used for local development and tests (migrations use Alembic)."""
    from ..models import Base

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def health_check_db() -> bool:
    """True when a SELECT 1 round trip succeeds"""
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
            return True
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        return False


async def close_db_connections():
    """Properly close all database connections"""
    await engine.dispose()
    logger.info("Database connections closed")
