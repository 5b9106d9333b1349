"""
Database utilities for connection management and error handling
"""
import asyncio
import functools
import logging
from typing import Callable, Any, TypeVar, cast, Awaitable

from sqlalchemy.exc import DBAPIError, OperationalError

from app.core.database import Base, engine

logger = logging.getLogger(__name__)

T = TypeVar('T')

CONNECTION_ERROR_NAMES = (
    "ConnectionError",
    "ConnectionDoesNotExistError",
    "ConnectionRefusedError",
    "CannotConnectNowError",
    "TimeoutError",
)


def is_connection_error(exc: BaseException) -> bool:
    """True when the exception means the database could not be reached."""
    if isinstance(exc, (OperationalError, OSError)):
        return True
    if isinstance(exc, DBAPIError) and exc.connection_invalidated:
        return True
    error_name = type(exc).__name__
    return any(name in error_name for name in CONNECTION_ERROR_NAMES)


def with_db_retry(
    max_retries: int = 3,
    retry_delay: float = 0.5
) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """
    Decorator that retries database operations on connection errors.

    Args:
        max_retries: Maximum number of retries before giving up
        retry_delay: Base delay between retries in seconds (doubled each attempt)

    Returns:
        Decorated function with retry logic
    """
    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            retries = 0
            while True:
                try:
                    return await func(*args, **kwargs)
                except Exception as e:
                    if not is_connection_error(e):
                        raise
                    retries += 1
                    if retries > max_retries:
                        logger.error(f"Database operation failed after {max_retries} retries: {e}")
                        raise
                    delay = retry_delay * (2 ** (retries - 1))
                    logger.warning(
                        f"Database connection error: {str(e)}. "
                        f"Retrying in {delay:.2f}s... (Attempt {retries}/{max_retries})"
                    )
                    await asyncio.sleep(delay)

        return cast(Callable[..., Awaitable[T]], wrapper)

    return decorator


async def create_db_and_tables() -> None:
    # Importing the models registers their tables on Base.metadata
    from app.models import goal, investment, notification, transaction  # noqa: F401
    from app.core import auth  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
