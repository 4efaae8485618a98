"""
shared/storage/notifications.py
Notification queries. Notifications are append-only; only status changes.
"""

from typing import Optional, Sequence

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from shared.models.models import Notification, NotificationStatus, NotificationType


async def create_notification(
    db: AsyncSession,
    user_id: int,
    title: str,
    message: str,
    type: NotificationType = NotificationType.INFO,
    related_booking_id: Optional[int] = None,
) -> Notification:
    notification = Notification(
        user_id=user_id,
        title=title,
        message=message,
        type=type,
        related_booking_id=related_booking_id,
        status=NotificationStatus.UNREAD,
    )
    db.add(notification)
    await db.flush()
    return notification


async def get_notification(db: AsyncSession, notification_id: int) -> Optional[Notification]:
    return await db.get(Notification, notification_id)


async def list_user_notifications(
    db: AsyncSession, user_id: int, unread_only: bool = False
) -> Sequence[Notification]:
    query = (
        select(Notification)
        .where(Notification.user_id == user_id)
        .order_by(Notification.created_at.desc(), Notification.id.desc())
    )
    if unread_only:
        query = query.where(Notification.status == NotificationStatus.UNREAD)
    result = await db.execute(query)
    return result.scalars().all()


async def mark_notification_read(db: AsyncSession, notification: Notification) -> Notification:
    notification.status = NotificationStatus.READ
    await db.flush()
    return notification


async def mark_all_notifications_read(db: AsyncSession, user_id: int) -> int:
    """Returns the number of notifications that flipped from unread."""
    result = await db.execute(
        update(Notification)
        .where(
            Notification.user_id == user_id,
            Notification.status == NotificationStatus.UNREAD,
        )
        .values(status=NotificationStatus.READ)
    )
    return result.rowcount or 0


async def get_unread_count(db: AsyncSession, user_id: int) -> int:
    count = await db.scalar(
        select(func.count(Notification.id)).where(
            Notification.user_id == user_id,
            Notification.status == NotificationStatus.UNREAD,
        )
    )
    return count or 0
