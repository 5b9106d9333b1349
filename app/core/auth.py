# app/core/auth.py

import uuid
import logging
from datetime import datetime
from typing import Optional, Union

from fastapi import Depends, Request
from fastapi_users import FastAPIUsers, BaseUserManager, UUIDIDMixin
from fastapi_users.exceptions import InvalidPasswordException
from fastapi_users.authentication import (
    AuthenticationBackend,
    BearerTransport,
    JWTStrategy,
)
from fastapi_users.db import SQLAlchemyUserDatabase
from fastapi_users import schemas

from sqlalchemy import Column, String, Boolean, DateTime, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.ext.asyncio import AsyncSession

from .database import Base, get_async_session
from .config import settings

logger = logging.getLogger(__name__)

TOKEN_AUDIENCE = ["fastapi-users:auth"]

# 1. User DB model
class User(Base):
    __tablename__ = "users"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    email = Column(String(length=320), unique=True, index=True, nullable=False)
    hashed_password = Column(String(length=1024), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    is_superuser = Column(Boolean, default=False, nullable=False)
    is_verified = Column(Boolean, default=False, nullable=False)

    # Profile fields
    name = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    profile_image = Column(String, nullable=True)
    theme_mode = Column(String, nullable=True, default="light")
    currency = Column(String(length=3), nullable=False, default="INR")
    created_at = Column(DateTime, default=datetime.utcnow)

    transactions = relationship("Transaction", back_populates="user", cascade="all, delete-orphan")
    goals = relationship("Goal", back_populates="user", cascade="all, delete-orphan")
    investments = relationship("Investment", back_populates="user", cascade="all, delete-orphan")
    notifications = relationship("Notification", back_populates="user", cascade="all, delete-orphan")

# 2. Pydantic schemas
class UserRead(schemas.BaseUser[uuid.UUID]):
    name: Optional[str] = None
    phone: Optional[str] = None
    profile_image: Optional[str] = None
    theme_mode: Optional[str] = None
    currency: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class UserCreate(schemas.BaseUserCreate):
    name: str

class UserUpdate(schemas.BaseUserUpdate):
    name: Optional[str] = None

# 3. User Manager
class UserManager(UUIDIDMixin, BaseUserManager[User, uuid.UUID]):
    reset_password_token_secret = settings.SECRET_KEY
    verification_token_secret = settings.SECRET_KEY

    async def validate_password(self, password: str, user: Union[UserCreate, User]) -> None:
        if len(password) < settings.PASSWORD_MIN_LENGTH:
            raise InvalidPasswordException(
                reason=f"Password must be at least {settings.PASSWORD_MIN_LENGTH} characters"
            )
        if user.email and user.email.lower() in password.lower():
            raise InvalidPasswordException(reason="Password should not contain e-mail")

    async def on_after_register(self, user: User, request: Optional[Request] = None):
        logger.info(f"User {user.email} has registered.")
        # Local import: the notification crud module pulls in the ORM models
        from app.utils.notifications import notify_welcome

        await notify_welcome(self.user_db.session, user)

    async def on_after_login(self, user: User, request: Optional[Request] = None, response=None):
        logger.info(f"User {user.email} logged in.")

    async def on_after_update(self, user: User, update_dict: dict, request: Optional[Request] = None):
        if "password" in update_dict:
            logger.info(f"Password changed for user {user.email}")

# 4. User Database
async def get_user_db(session: AsyncSession = Depends(get_async_session)):
    yield SQLAlchemyUserDatabase(session, User)

# 5. User Manager dependency
async def get_user_manager(user_db: SQLAlchemyUserDatabase = Depends(get_user_db)):
    yield UserManager(user_db)

# 6. Authentication
bearer_transport = BearerTransport(tokenUrl="/api/v1/auth/jwt/login")

def get_jwt_strategy() -> JWTStrategy:
    return JWTStrategy(
        secret=settings.SECRET_KEY,
        lifetime_seconds=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        token_audience=TOKEN_AUDIENCE,
        algorithm=settings.ALGORITHM,
    )

auth_backend = AuthenticationBackend(
    name="jwt",
    transport=bearer_transport,
    get_strategy=get_jwt_strategy,
)

# 7. FastAPI Users instance
fastapi_users = FastAPIUsers[User, uuid.UUID](get_user_manager, [auth_backend])

__all__ = [
    "fastapi_users",
    "auth_backend",
    "get_user_db",
    "get_user_manager",
    "User",
    "UserRead",
    "UserCreate",
    "UserUpdate",
    "UserManager",
    "TOKEN_AUDIENCE",
]
