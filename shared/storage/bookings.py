"""
shared/storage/bookings.py
Booking queries. No business rules here beyond trivial filters;
ownership and review rules live in services/booking/workflow.py.
"""

from datetime import datetime, timezone
from typing import Optional, Sequence

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from shared.models.models import Booking, BookingStatus, Notification

_WITH_RELATIONS = (
    selectinload(Booking.user),
    selectinload(Booking.facility),
    selectinload(Booking.reviewer),
)


async def get_booking(
    db: AsyncSession, booking_id: int, with_relations: bool = False
) -> Optional[Booking]:
    query = select(Booking).where(Booking.id == booking_id)
    if with_relations:
        query = query.options(*_WITH_RELATIONS)
    result = await db.execute(query)
    return result.scalar_one_or_none()


async def list_bookings(
    db: AsyncSession,
    user_id: Optional[int] = None,
    status: Optional[BookingStatus] = None,
) -> Sequence[Booking]:
    """Bookings newest first, with owner, facility and reviewer loaded."""
    query = (
        select(Booking)
        .options(*_WITH_RELATIONS)
        .order_by(Booking.created_at.desc(), Booking.id.desc())
    )
    if user_id is not None:
        query = query.where(Booking.user_id == user_id)
    if status:
        query = query.where(Booking.status == status)
    result = await db.execute(query)
    return result.scalars().all()


async def create_booking(db: AsyncSession, user_id: int, **fields) -> Booking:
    booking = Booking(user_id=user_id, status=BookingStatus.PENDING, **fields)
    db.add(booking)
    await db.flush()
    return booking


async def update_booking(db: AsyncSession, booking: Booking, **fields) -> Booking:
    for field, value in fields.items():
        setattr(booking, field, value)
    await db.flush()
    return booking


async def update_booking_status(
    db: AsyncSession,
    booking: Booking,
    status: BookingStatus,
    reviewer_id: int,
    notes: Optional[str] = None,
) -> Booking:
    booking.status = status
    booking.reviewed_by = reviewer_id
    booking.reviewed_at = datetime.now(timezone.utc)
    booking.admin_notes = notes
    await db.flush()
    return booking


async def delete_booking(db: AsyncSession, booking: Booking) -> None:
    await db.execute(
        update(Notification)
        .where(Notification.related_booking_id == booking.id)
        .values(related_booking_id=None)
    )
    await db.delete(booking)
    await db.flush()
