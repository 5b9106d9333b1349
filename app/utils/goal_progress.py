# app/utils/goal_progress.py
from dataclasses import dataclass, replace
from typing import Any, Optional

from app.models.goal import GoalStatus


class InvalidAmount(ValueError):
    """Raised when funds added to a goal are missing or not positive."""


@dataclass(frozen=True)
class GoalSnapshot:
    target_amount: float
    current_amount: float
    status: GoalStatus

    @classmethod
    def from_goal(cls, goal: Any) -> "GoalSnapshot":
        return cls(
            target_amount=goal.target_amount,
            current_amount=goal.current_amount or 0.0,
            status=GoalStatus(goal.status),
        )


@dataclass(frozen=True)
class FundsApplied:
    goal: GoalSnapshot
    # Amount the update was computed from; the write is only valid while
    # the stored amount still equals it.
    previous_amount: float
    just_completed: bool


def add_funds(goal: Any, amount: Optional[float]) -> FundsApplied:
    """
    Apply a deposit to a goal.

    Only an active goal moves to completed, and only once the new amount
    reaches the target. Cancelled and completed goals keep their status.
    Calling twice deposits twice.
    """
    if amount is None or isinstance(amount, bool) or not amount > 0:
        raise InvalidAmount("Amount must be a positive number")

    snapshot = goal if isinstance(goal, GoalSnapshot) else GoalSnapshot.from_goal(goal)
    new_amount = snapshot.current_amount + amount

    status = snapshot.status
    if status == GoalStatus.active and new_amount >= snapshot.target_amount:
        status = GoalStatus.completed

    return FundsApplied(
        goal=replace(snapshot, current_amount=new_amount, status=status),
        previous_amount=snapshot.current_amount,
        just_completed=status != snapshot.status,
    )
