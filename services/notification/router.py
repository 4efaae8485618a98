"""
services/notification/router.py
In-app notification endpoints. Notifications are created by the booking
workflow; users can only list them and mark them read.
"""

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from config.database import get_db
from shared.middleware.auth import get_current_user
from shared.models.models import User
from shared.schemas.schemas import MessageResponse, NotificationResponse, UnreadCountResponse
from shared.storage import notifications as notification_store

router = APIRouter(prefix="/api/notifications", tags=["Notifications"])


@router.get("", response_model=list[NotificationResponse])
async def get_my_notifications(
    unread_only: bool = Query(False, alias="unreadOnly"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Get authenticated user's notifications, newest first."""
    notifications = await notification_store.list_user_notifications(
        db, current_user.id, unread_only=unread_only
    )
    return [NotificationResponse.model_validate(n) for n in notifications]


@router.get("/unread-count", response_model=UnreadCountResponse)
async def unread_count(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    count = await notification_store.get_unread_count(db, current_user.id)
    return UnreadCountResponse(unread_count=count)


@router.patch("/read-all", response_model=MessageResponse)
async def mark_all_read(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await notification_store.mark_all_notifications_read(db, current_user.id)
    await db.commit()
    return MessageResponse(message="All notifications marked as read")


@router.patch("/{notification_id}/read", response_model=MessageResponse)
async def mark_read(
    notification_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Idempotent. Someone else's notification is reported as not found."""
    notification = await notification_store.get_notification(db, notification_id)
    if not notification or notification.user_id != current_user.id:
        raise HTTPException(status_code=404, detail="Notification not found")

    await notification_store.mark_notification_read(db, notification)
    await db.commit()
    return MessageResponse(message="Notification marked as read")
