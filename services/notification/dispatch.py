"""
services/notification/dispatch.py
Renders notification templates and stores them as in-app notifications.
Delivery is pull-only: clients fetch GET /api/notifications.
"""

import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from shared.models.models import Notification, NotificationType
from shared.storage import notifications as notification_store

logger = logging.getLogger(__name__)


# ── Notification Templates ────────────────────────────────────

TEMPLATES = {
    "BOOKING_SUBMITTED": {
        "type": NotificationType.INFO,
        "title": "Booking Request Submitted",
        "message": 'Your booking request for "{event_name}" has been submitted and is pending review.',
    },
    "BOOKING_APPROVED": {
        "type": NotificationType.SUCCESS,
        "title": "Booking Approved",
        "message": 'Your booking request for "{event_name}" has been approved!',
    },
    "BOOKING_REJECTED": {
        "type": NotificationType.ERROR,
        "title": "Booking Rejected",
        "message": 'Your booking request for "{event_name}" has been rejected.',
        "message_with_reason": 'Your booking request for "{event_name}" has been rejected. Reason: {reason}',
    },
}


def render(template_name: str, template_vars: Optional[dict] = None) -> tuple[NotificationType, str, str]:
    """Returns (type, title, message) for a named template."""
    template = TEMPLATES[template_name]
    vars_ = template_vars or {}

    message = template["message"]
    if vars_.get("reason") and "message_with_reason" in template:
        message = template["message_with_reason"]

    return template["type"], template["title"].format(**vars_), message.format(**vars_)


async def dispatch_notification(
    db: AsyncSession,
    user_id: int,
    template_name: str,
    template_vars: Optional[dict] = None,
    booking_id: Optional[int] = None,
) -> Notification:
    """Store an in-app notification for `user_id`."""
    notif_type, title, message = render(template_name, template_vars)
    notification = await notification_store.create_notification(
        db,
        user_id=user_id,
        title=title,
        message=message,
        type=notif_type,
        related_booking_id=booking_id,
    )
    logger.debug("Notification %s (%s) stored for user %s", notification.id, template_name, user_id)
    return notification
