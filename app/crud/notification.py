# app/crud/notification.py
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete, desc, func
from app.models.notification import Notification, NotificationType
from app.schemas.notification import NotificationCreate
from typing import List, Optional
import uuid
from datetime import datetime, timedelta

async def create_notification(db: AsyncSession, user_id: uuid.UUID, notification: NotificationCreate) -> Notification:
    """Create a new notification for a user"""
    db_notification = Notification(**notification.model_dump(), user_id=user_id)
    db.add(db_notification)
    await db.commit()
    await db.refresh(db_notification)
    return db_notification

async def get_notifications_for_user(
    db: AsyncSession,
    user_id: uuid.UUID,
    unread_only: bool = False,
    limit: int = 50
) -> List[Notification]:
    """Get notifications for a specific user, newest first"""
    query = (
        select(Notification)
        .filter(Notification.user_id == user_id)
    )

    if unread_only:
        query = query.filter(Notification.is_read == False)

    query = query.order_by(desc(Notification.created_at)).limit(limit)

    result = await db.execute(query)
    return result.scalars().all()

async def get_unread_count(db: AsyncSession, user_id: uuid.UUID) -> int:
    """Get count of unread notifications for a user"""
    result = await db.execute(
        select(func.count())
        .select_from(Notification)
        .filter(Notification.user_id == user_id, Notification.is_read == False)
    )
    return result.scalar_one() or 0

async def mark_notification_as_read(db: AsyncSession, notification_id: uuid.UUID, user_id: uuid.UUID) -> Optional[Notification]:
    """Mark a notification as read, ensuring it belongs to the specified user"""
    result = await db.execute(
        select(Notification)
        .filter(Notification.id == notification_id, Notification.user_id == user_id)
    )
    notification = result.scalars().first()

    if notification:
        notification.is_read = True
        await db.commit()
        await db.refresh(notification)
    return notification

async def mark_all_notifications_as_read(db: AsyncSession, user_id: uuid.UUID) -> int:
    """Mark all notifications as read for a specific user"""
    result = await db.execute(
        update(Notification)
        .filter(Notification.user_id == user_id, Notification.is_read == False)
        .values(is_read=True)
    )
    await db.commit()
    return result.rowcount

async def delete_notification(db: AsyncSession, notification_id: uuid.UUID, user_id: uuid.UUID) -> bool:
    """Delete a notification, ensuring it belongs to the specified user"""
    result = await db.execute(
        delete(Notification)
        .filter(Notification.id == notification_id, Notification.user_id == user_id)
    )
    await db.commit()
    return result.rowcount > 0

async def delete_all_notifications(db: AsyncSession, user_id: uuid.UUID) -> int:
    result = await db.execute(delete(Notification).filter(Notification.user_id == user_id))
    await db.commit()
    return result.rowcount


SAMPLE_NOTIFICATIONS = [
    {"title": "Goal achieved!", "message": "You reached your savings goal for Vacation", "type": "goal", "link": "/goals"},
    {"title": "Budget alert", "message": "You've spent 90% of your Food budget", "type": "budget", "link": "/transactions"},
    {"title": "New transaction", "message": "₹2,500 received from salary", "type": "transaction", "link": "/transactions"},
    {"title": "Investment update", "message": "Your investment portfolio grew by 5%", "type": "investment", "link": "/investments"},
    {"title": "Bill reminder", "message": "Electricity bill due in 3 days", "type": "system", "link": "/transactions"},
    {"title": "Large expense detected", "message": "You spent ₹15,000 on Shopping today", "type": "transaction", "link": "/transactions"},
    {"title": "Monthly report ready", "message": "Your monthly financial report is now available", "type": "system", "link": "/reports"},
    {"title": "Goal milestone", "message": "You're 75% closer to your Emergency Fund goal", "type": "goal", "link": "/goals"},
]

async def seed_notifications_for_user(db: AsyncSession, user_id: uuid.UUID) -> List[Notification]:
    """Replace the user's notifications with the sample set; the two newest stay unread."""
    await db.execute(delete(Notification).filter(Notification.user_id == user_id))
    now = datetime.utcnow()
    notifications = [
        Notification(
            user_id=user_id,
            title=sample["title"],
            message=sample["message"],
            type=NotificationType(sample["type"]),
            link=sample["link"],
            is_read=index >= 2,
            created_at=now - timedelta(hours=index),
        )
        for index, sample in enumerate(SAMPLE_NOTIFICATIONS)
    ]
    db.add_all(notifications)
    await db.commit()
    return await get_notifications_for_user(db, user_id)
