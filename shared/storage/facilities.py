"""
shared/storage/facilities.py
Facility queries.
"""

from typing import Optional, Sequence

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from shared.models.models import Booking, Facility, FacilityStatus, Notification


async def get_facility(db: AsyncSession, facility_id: int) -> Optional[Facility]:
    return await db.get(Facility, facility_id)


async def list_facilities(
    db: AsyncSession, status: Optional[FacilityStatus] = None
) -> Sequence[Facility]:
    query = select(Facility).order_by(Facility.name, Facility.id)
    if status:
        query = query.where(Facility.status == status)
    result = await db.execute(query)
    return result.scalars().all()


async def create_facility(db: AsyncSession, **fields) -> Facility:
    facility = Facility(**fields)
    db.add(facility)
    await db.flush()
    return facility


async def update_facility(db: AsyncSession, facility: Facility, **fields) -> Facility:
    for field, value in fields.items():
        setattr(facility, field, value)
    await db.flush()
    return facility


async def delete_facility(db: AsyncSession, facility: Facility) -> None:
    """Delete a facility together with every booking made against it."""
    facility_bookings = select(Booking.id).where(Booking.facility_id == facility.id)
    await db.execute(
        update(Notification)
        .where(Notification.related_booking_id.in_(facility_bookings))
        .values(related_booking_id=None)
    )
    await db.execute(delete(Booking).where(Booking.facility_id == facility.id))
    await db.delete(facility)
    await db.flush()
