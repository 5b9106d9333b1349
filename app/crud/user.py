# app/crud/user.py
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.auth import User
from app.schemas.user import ProfileUpdate

# Profile columns a user may change on their own account
UPDATABLE_PROFILE_FIELDS = frozenset({"name", "phone", "profile_image", "theme_mode", "currency"})

async def update_profile(user: User, profile_in: ProfileUpdate, db: AsyncSession) -> User:
    for field, value in profile_in.model_dump(exclude_unset=True).items():
        if field not in UPDATABLE_PROFILE_FIELDS:
            continue
        if field in ("name", "currency") and not value:
            continue
        setattr(user, field, value)
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user
