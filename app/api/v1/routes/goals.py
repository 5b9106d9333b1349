# app/api/v1/routes/goals.py
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
import uuid

from app.schemas.goal import GoalAddFunds, GoalCreate, GoalRead, GoalUpdate
from app.crud.goal import (
    add_funds_to_goal,
    create_goal_for_user,
    delete_goal,
    get_goal_by_id,
    get_goals_for_user,
    seed_goals_for_user,
    update_goal,
)
from app.core.database import get_async_session
from app.core.auth import User
from app.utils.goal_progress import InvalidAmount
from app.utils.notifications import notify_goal_completed
from app.api.deps import get_current_user

router = APIRouter(prefix="/goals", tags=["Goals"])
logger = logging.getLogger(__name__)

@router.get("", response_model=List[GoalRead])
async def read_goals(
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    return await get_goals_for_user(user.id, db)

@router.post("", response_model=GoalRead, status_code=status.HTTP_201_CREATED)
async def create_goal(
    goal_in: GoalCreate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    return await create_goal_for_user(user.id, goal_in, db)

@router.post("/seed")
async def seed_goals(
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    """Replace the user's goals with sample goals"""
    created = await seed_goals_for_user(user.id, db)
    return {"message": "Sample goals seeded successfully", "count": len(created)}

@router.put("/{goal_id}", response_model=GoalRead)
async def update_goal_endpoint(
    goal_id: uuid.UUID,
    goal_in: GoalUpdate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    """Edit a goal. Setting status here is the only way to cancel or reopen one."""
    goal = await get_goal_by_id(goal_id, user.id, db)
    if not goal:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Goal not found")
    return await update_goal(goal, goal_in, db)

@router.delete("/{goal_id}")
async def delete_goal_endpoint(
    goal_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    goal = await get_goal_by_id(goal_id, user.id, db)
    if not goal:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Goal not found")
    await delete_goal(goal, db)
    return {"message": "Goal deleted"}

@router.put("/{goal_id}/add-funds", response_model=GoalRead)
async def add_funds_endpoint(
    goal_id: uuid.UUID,
    funds: GoalAddFunds,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    """
    Deposit money into a goal.

    - **amount**: strictly positive amount to add

    The goal is marked completed once the saved amount reaches the target.
    """
    try:
        outcome = await add_funds_to_goal(goal_id, user.id, funds.amount, db)
    except InvalidAmount as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    if outcome is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Goal not found")

    goal, applied = outcome
    if applied.just_completed:
        await notify_goal_completed(db, goal)
    return goal
