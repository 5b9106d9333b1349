# app/api/v1/routes/users.py
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi_users.exceptions import InvalidPasswordException
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import get_user_manager, User, UserManager, UserRead, UserUpdate
from app.core.config import settings
from app.core.database import get_async_session
from app.crud.goal import seed_goals_for_user
from app.crud.transaction import count_transactions_for_user, seed_transactions_for_user
from app.crud.user import update_profile
from app.schemas.user import PasswordChange, ProfileUpdate
from app.api.deps import get_current_user

router = APIRouter(prefix="/users", tags=["User Management"])
logger = logging.getLogger(__name__)

@router.get("/me", response_model=UserRead)
async def read_own_profile(user: User = Depends(get_current_user)):
    """Get current user's profile"""
    return user

@router.patch("/me", response_model=UserRead)
async def update_own_profile(
    profile_in: ProfileUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
):
    """Update name, phone, profile image, theme mode or currency"""
    if not profile_in.model_dump(exclude_unset=True):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No fields provided for update"
        )
    if profile_in.currency is not None:
        profile_in.currency = profile_in.currency.upper()
        if profile_in.currency not in settings.SUPPORTED_CURRENCIES:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Unsupported currency: {profile_in.currency}"
            )
    return await update_profile(user, profile_in, db)

@router.put("/me/password")
async def change_password(
    payload: PasswordChange,
    user: User = Depends(get_current_user),
    user_manager: UserManager = Depends(get_user_manager),
):
    """Change password after checking the current one"""
    verified, _ = user_manager.password_helper.verify_and_update(payload.current_password, user.hashed_password)
    if not verified:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Current password is incorrect")

    same, _ = user_manager.password_helper.verify_and_update(payload.new_password, user.hashed_password)
    if same:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="New password must be different from current password"
        )

    try:
        await user_manager.update(UserUpdate(password=payload.new_password), user, safe=True)
    except InvalidPasswordException as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.reason)

    return {"message": "Password updated successfully"}

@router.post("/me/seed-data")
async def seed_sample_data(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
):
    """Create sample transactions and goals, once, for an account without transactions"""
    if await count_transactions_for_user(user.id, db) > 0:
        return {"message": "Data already exists"}

    transactions = await seed_transactions_for_user(user.id, db, replace_existing=False)
    goals = await seed_goals_for_user(user.id, db, replace_existing=False)
    logger.info(f"Seeded sample data for user {user.id}")
    return {
        "message": "Sample data created successfully",
        "transactions": len(transactions),
        "goals": len(goals),
    }
