# app/utils/notifications.py
import logging
from sqlalchemy.ext.asyncio import AsyncSession

from app.crud.notification import create_notification
from app.models.goal import Goal
from app.models.notification import Notification, NotificationType
from app.schemas.notification import NotificationCreate

logger = logging.getLogger(__name__)


async def notify_welcome(db: AsyncSession, user) -> Notification:
    notification = NotificationCreate(
        title="Welcome to CashCompass",
        message="Start by adding a transaction or setting up your first savings goal.",
        type=NotificationType.system,
        link="/transactions",
    )
    return await create_notification(db, user.id, notification)


async def notify_goal_completed(db: AsyncSession, goal: Goal) -> Notification:
    logger.info(f"Goal {goal.id} completed for user {goal.user_id}")
    notification = NotificationCreate(
        title="Goal achieved!",
        message=f"You reached your savings goal for {goal.name}",
        type=NotificationType.goal,
        link="/goals",
    )
    return await create_notification(db, goal.user_id, notification)
