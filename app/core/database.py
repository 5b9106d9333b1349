# app/core/database.py
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import NullPool
from .config import settings
import logging
from typing import AsyncGenerator

logger = logging.getLogger(__name__)

engine_kwargs = {
    "echo": False,
    "future": True,
}

if settings.is_sqlite:
    # aiosqlite connections are bound to the loop that opened them
    engine_kwargs["poolclass"] = NullPool
else:
    engine_kwargs.update({
        "pool_size": 5,
        "max_overflow": 5,
        "pool_timeout": 30,       # Seconds to wait for a free connection
        "pool_pre_ping": True,    # Check connection before using
        "pool_recycle": 300,      # Recycle connections after 5 minutes
    })

# Disable prepared statements for Supabase/PgBouncer compatibility
if settings.is_supabase:
    engine_kwargs["connect_args"] = {
        "statement_cache_size": 0,
        "prepared_statement_cache_size": 0,
        "timeout": 10,  # seconds for asyncpg connect
    }
    logger.info("Configured engine for Supabase/PgBouncer (prepared statements disabled, connect timeout set)")

engine = create_async_engine(
    settings.DATABASE_URL,
    **engine_kwargs
)

# AsyncSession factory using async_sessionmaker
AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    expire_on_commit=False,
    class_=AsyncSession,
)

# Base class for all models
Base = declarative_base()

# Dependency to get DB session with proper exception handling
async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    session = AsyncSessionLocal()
    try:
        yield session
    except Exception as e:
        logger.error(f"Database session error: {str(e)}")
        await session.rollback()
        raise
    finally:
        await session.close()
        logger.debug("Database session closed")
