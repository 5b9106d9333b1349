# app/api/v1/routes/notification.py
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
from uuid import UUID
import logging

from app.schemas.notification import NotificationCreate, NotificationRead, UnreadCount
from app.crud import notification as crud_notification
from app.core.database import get_async_session
from app.core.auth import User
from app.api import deps

router = APIRouter(prefix="/notifications", tags=["Notifications"])
logger = logging.getLogger(__name__)

@router.get("", response_model=List[NotificationRead])
async def get_notifications(
    unread_only: bool = Query(False, description="Filter to only unread notifications"),
    limit: int = Query(50, ge=1, le=50, description="Maximum number of notifications to return"),
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(deps.get_current_user)
):
    """Get notifications for the current user, newest first"""
    return await crud_notification.get_notifications_for_user(
        db,
        user_id=current_user.id,
        unread_only=unread_only,
        limit=limit
    )

@router.get("/unread-count", response_model=UnreadCount)
async def get_unread_count(
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(deps.get_current_user)
):
    """Get count of unread notifications for the current user"""
    return {"count": await crud_notification.get_unread_count(db, current_user.id)}

@router.post("", response_model=NotificationRead, status_code=status.HTTP_201_CREATED)
async def create_notification(
    notification_in: NotificationCreate,
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(deps.get_current_user)
):
    return await crud_notification.create_notification(db, current_user.id, notification_in)

@router.post("/seed")
async def seed_notifications(
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(deps.get_current_user)
):
    """Replace the user's notifications with sample notifications"""
    notifications = await crud_notification.seed_notifications_for_user(db, current_user.id)
    logger.info(f"Seeded {len(notifications)} notifications for user {current_user.id}")
    return {
        "message": "Sample notifications created successfully",
        "count": len(notifications),
        "notifications": [NotificationRead.model_validate(n) for n in notifications],
    }

@router.put("/mark-all-read")
async def mark_all_notifications_as_read(
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(deps.get_current_user)
):
    """Mark all notifications for the current user as read"""
    updated = await crud_notification.mark_all_notifications_as_read(db, current_user.id)
    return {"message": "All notifications marked as read", "count": updated}

@router.put("/{notification_id}/read", response_model=NotificationRead)
async def mark_notification_as_read(
    notification_id: UUID,
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(deps.get_current_user)
):
    """Mark a specific notification as read, ensuring it belongs to the current user"""
    notification = await crud_notification.mark_notification_as_read(db, notification_id, current_user.id)
    if not notification:
        raise HTTPException(status_code=404, detail="Notification not found")
    return notification

@router.delete("/{notification_id}")
async def delete_notification(
    notification_id: UUID,
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(deps.get_current_user)
):
    if not await crud_notification.delete_notification(db, notification_id, current_user.id):
        raise HTTPException(status_code=404, detail="Notification not found")
    return {"message": "Notification deleted"}

@router.delete("")
async def delete_all_notifications(
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(deps.get_current_user)
):
    deleted = await crud_notification.delete_all_notifications(db, current_user.id)
    return {"message": "All notifications deleted", "count": deleted}
