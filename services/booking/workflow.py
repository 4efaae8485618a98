"""
services/booking/workflow.py
Booking lifecycle rules shared by the requester and admin routers.
States: PENDING → APPROVED | REJECTED

Not checked here:
- facility status or time overlap when a booking is created;
- re-review of a booking that is already approved or rejected.
"""

import logging
from typing import Optional

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from services.notification.dispatch import dispatch_notification
from shared.models.models import Booking, BookingStatus, User
from shared.schemas.schemas import BookingCreateRequest, BookingUpdateRequest
from shared.storage import bookings as booking_store
from shared.storage import facilities as facility_store

logger = logging.getLogger(__name__)

_REVIEW_TEMPLATES = {
    BookingStatus.APPROVED: "BOOKING_APPROVED",
    BookingStatus.REJECTED: "BOOKING_REJECTED",
}


async def get_booking_or_404(db: AsyncSession, booking_id: int, with_relations: bool = False) -> Booking:
    booking = await booking_store.get_booking(db, booking_id, with_relations=with_relations)
    if not booking:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Booking not found")
    return booking


async def _ensure_facility_exists(db: AsyncSession, facility_id: int) -> None:
    if not await facility_store.get_facility(db, facility_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Facility not found")


def ensure_editable(booking: Booking, caller: User) -> None:
    """Only the owner may change a booking, and only while it is pending."""
    if booking.user_id != caller.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized to modify this booking",
        )
    if not booking.is_pending:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Booking in '{booking.status.value}' state can no longer be modified",
        )


async def create_booking(db: AsyncSession, owner: User, data: BookingCreateRequest) -> Booking:
    """
    Submit a booking request for `owner`.
    The owner is always the caller and the status is always PENDING.
    """
    await _ensure_facility_exists(db, data.facility_id)

    booking = await booking_store.create_booking(
        db,
        user_id=owner.id,
        **data.model_dump(),
    )
    await dispatch_notification(
        db,
        user_id=owner.id,
        template_name="BOOKING_SUBMITTED",
        template_vars={"event_name": booking.event_name},
        booking_id=booking.id,
    )
    logger.info("Booking %s submitted by user %s for facility %s", booking.id, owner.id, booking.facility_id)
    return booking


async def update_booking(
    db: AsyncSession, booking: Booking, caller: User, data: BookingUpdateRequest
) -> Booking:
    ensure_editable(booking, caller)

    updates = data.model_dump(exclude_unset=True, exclude_none=True)
    if "facility_id" in updates:
        await _ensure_facility_exists(db, updates["facility_id"])

    start = updates.get("start_time", booking.start_time)
    end = updates.get("end_time", booking.end_time)
    if end <= start:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="End time must be after start time",
        )

    return await booking_store.update_booking(db, booking, **updates)


async def delete_booking(db: AsyncSession, booking: Booking, caller: User) -> None:
    ensure_editable(booking, caller)
    await booking_store.delete_booking(db, booking)
    logger.info("Booking %s withdrawn by user %s", booking.id, caller.id)


async def review_booking(
    db: AsyncSession,
    booking_id: int,
    decision: BookingStatus,
    reviewer: User,
    notes: Optional[str] = None,
) -> Booking:
    """
    Approve or reject a booking and notify its owner.
    The status update and the notification are two separate writes.
    """
    if decision not in _REVIEW_TEMPLATES:
        raise ValueError(f"Cannot review a booking into {decision.value!r}")

    booking = await get_booking_or_404(db, booking_id)
    if not booking.is_pending:
        logger.warning(
            "Booking %s re-reviewed: %s → %s by admin %s",
            booking.id, booking.status.value, decision.value, reviewer.id,
        )

    await booking_store.update_booking_status(db, booking, decision, reviewer.id, notes)

    template_vars = {"event_name": booking.event_name}
    if decision == BookingStatus.REJECTED and notes:
        template_vars["reason"] = notes
    await dispatch_notification(
        db,
        user_id=booking.user_id,
        template_name=_REVIEW_TEMPLATES[decision],
        template_vars=template_vars,
        booking_id=booking.id,
    )

    logger.info("Booking %s %s by admin %s", booking.id, decision.value, reviewer.id)
    return booking
