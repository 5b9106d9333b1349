# app/api/deps.py
import logging
from typing import Optional
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
import jwt
import uuid

from app.core.database import get_async_session
from app.core.auth import User, TOKEN_AUDIENCE
from app.core.config import settings
from app.core.readiness import Readiness

logger = logging.getLogger(__name__)

optional_security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_readiness(request: Request) -> Readiness:
    return request.app.state.readiness


async def require_ready(request: Request, readiness: Readiness = Depends(get_readiness)) -> None:
    """Reject business requests until the database has been initialised."""
    if not readiness.database_connected:
        logger.warning(f"Database not connected, blocking request to {request.url.path}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database connection not established. Please try again later.",
        )


def _extract_token(request: Request, credentials: Optional[HTTPAuthorizationCredentials]) -> Optional[str]:
    # Authorization header first, then the access_token cookie
    if credentials and credentials.credentials:
        return credentials.credentials
    token = request.cookies.get("access_token")
    if token and token.startswith("Bearer "):
        token = token[7:]
    return token or None


async def get_current_user(
    request: Request,
    db: AsyncSession = Depends(get_async_session),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(optional_security)
) -> User:
    """
    Resolve the authenticated user from a bearer token (header or cookie).

    Every owner-scoped query in the routes filters on the id of the user
    returned here.
    """
    token = _extract_token(request, credentials)
    if not token:
        raise _unauthorized("Not authenticated")

    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
            audience=TOKEN_AUDIENCE,
        )
    except jwt.ExpiredSignatureError:
        raise _unauthorized("Token has expired")
    except jwt.InvalidTokenError:
        raise _unauthorized("Invalid token")

    user_id_str = payload.get("sub")
    if not user_id_str:
        raise _unauthorized("Invalid token: missing user ID")

    try:
        user_id = uuid.UUID(user_id_str)
    except ValueError:
        raise _unauthorized("Invalid user ID format in token")

    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalars().first()

    if not user:
        raise _unauthorized("User not found")
    if not user.is_active:
        raise _unauthorized("Inactive user")

    return user
