# app/crud/goal.py
import logging
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import delete, desc, update
from app.models.goal import Goal, GoalStatus
from app.utils.goal_progress import FundsApplied, InvalidAmount, add_funds
from typing import List, Optional, Tuple
from datetime import datetime, timedelta
import uuid
from app.schemas.goal import GoalCreate, GoalUpdate

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = frozenset({
    "name", "target_amount", "current_amount", "deadline",
    "category", "icon", "color", "status",
})
NON_NULLABLE_FIELDS = frozenset(UPDATABLE_FIELDS - {"icon", "color"})

ADD_FUNDS_ATTEMPTS = 3

async def get_goals_for_user(user_id: uuid.UUID, db: AsyncSession) -> List[Goal]:
    result = await db.execute(
        select(Goal).where(Goal.user_id == user_id).order_by(desc(Goal.created_at))
    )
    return result.scalars().all()

async def get_goal_by_id(goal_id: uuid.UUID, user_id: uuid.UUID, db: AsyncSession) -> Optional[Goal]:
    result = await db.execute(
        select(Goal).where(Goal.id == goal_id, Goal.user_id == user_id)
    )
    return result.scalar_one_or_none()

async def create_goal_for_user(user_id: uuid.UUID, goal_in: GoalCreate, db: AsyncSession) -> Goal:
    new_goal = Goal(**goal_in.model_dump(exclude_none=True), user_id=user_id)
    db.add(new_goal)
    await db.commit()
    await db.refresh(new_goal)
    return new_goal

async def update_goal(goal: Goal, goal_in: GoalUpdate, db: AsyncSession) -> Goal:
    for field, value in goal_in.model_dump(exclude_unset=True).items():
        if field not in UPDATABLE_FIELDS:
            continue
        if value is None and field in NON_NULLABLE_FIELDS:
            continue
        setattr(goal, field, value)
    db.add(goal)
    await db.commit()
    await db.refresh(goal)
    return goal

async def delete_goal(goal: Goal, db: AsyncSession) -> None:
    await db.delete(goal)
    await db.commit()

async def add_funds_to_goal(
    goal_id: uuid.UUID,
    user_id: uuid.UUID,
    amount: float,
    db: AsyncSession,
) -> Optional[Tuple[Goal, FundsApplied]]:
    """
    Deposit into a goal with a compare-and-set write.

    The row is only updated while its current_amount still equals the value
    the new total was computed from; a concurrent deposit makes the update
    miss and the goal is re-read. Returns None when the goal does not exist
    for this user. Raises InvalidAmount before anything is read.
    """
    if amount is None or not amount > 0:
        raise InvalidAmount("Amount must be a positive number")

    for attempt in range(1, ADD_FUNDS_ATTEMPTS + 1):
        goal = await get_goal_by_id(goal_id, user_id, db)
        if goal is None:
            return None

        applied = add_funds(goal, amount)
        result = await db.execute(
            update(Goal)
            .where(
                Goal.id == goal_id,
                Goal.user_id == user_id,
                Goal.current_amount == applied.previous_amount,
            )
            .values(
                current_amount=applied.goal.current_amount,
                status=applied.goal.status,
            )
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 1:
            await db.commit()
            await db.refresh(goal)
            return goal, applied

        await db.rollback()
        logger.warning(f"Concurrent update on goal {goal_id}, retrying ({attempt}/{ADD_FUNDS_ATTEMPTS})")

    raise RuntimeError(f"Could not add funds to goal {goal_id} after {ADD_FUNDS_ATTEMPTS} attempts")


SAMPLE_GOALS = [
    {"name": "Emergency Fund", "target_amount": 100000.0, "current_amount": 45000.0, "category": "Savings", "icon": "MdShield", "color": "#13ec5b", "days": 365},
    {"name": "Vacation", "target_amount": 50000.0, "current_amount": 20000.0, "category": "Travel", "icon": "MdFlight", "color": "#3b82f6", "days": 180},
    {"name": "New Car", "target_amount": 500000.0, "current_amount": 120000.0, "category": "Vehicle", "icon": "MdDirectionsCar", "color": "#f97316", "days": 730},
    {"name": "Home Down Payment", "target_amount": 1000000.0, "current_amount": 300000.0, "category": "Housing", "icon": "MdHome", "color": "#8b5cf6", "days": 1095},
]

async def seed_goals_for_user(
    user_id: uuid.UUID,
    db: AsyncSession,
    replace_existing: bool = True,
) -> List[Goal]:
    if replace_existing:
        await db.execute(delete(Goal).where(Goal.user_id == user_id))
    now = datetime.utcnow()
    new_goals = []
    for sample in SAMPLE_GOALS:
        fields = {k: v for k, v in sample.items() if k != "days"}
        new_goals.append(Goal(
            **fields,
            deadline=now + timedelta(days=sample["days"]),
            status=GoalStatus.active,
            user_id=user_id,
        ))
    db.add_all(new_goals)
    await db.commit()
    return new_goals
