"""
shared/storage/reports.py
Read-side aggregates over bookings, users and facilities.
Every call recomputes exact counts from the tables; nothing is cached.
"""

import calendar
from datetime import date
from typing import Dict, List, Type

from sqlalchemy import extract, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from shared.models.models import (
    Booking,
    BookingStatus,
    Facility,
    FacilityStatus,
    User,
    UserRole,
)


async def _count_by(db: AsyncSession, column, enum_cls: Type) -> Dict[str, int]:
    """COUNT(*) GROUP BY column, zero-filled for every enum member."""
    result = await db.execute(select(column, func.count()).group_by(column))
    counts = {member.value: 0 for member in enum_cls}
    for value, count in result.all():
        key = value.value if hasattr(value, "value") else value
        counts[key] = count
    return counts


async def booking_stats(db: AsyncSession) -> Dict[str, int]:
    counts = await _count_by(db, Booking.status, BookingStatus)
    return {
        "pending": counts[BookingStatus.PENDING.value],
        "approved": counts[BookingStatus.APPROVED.value],
        "rejected": counts[BookingStatus.REJECTED.value],
        "total": sum(counts.values()),
    }


async def user_stats(db: AsyncSession) -> Dict[str, int]:
    counts = await _count_by(db, User.role, UserRole)
    return {
        "total": sum(counts.values()),
        "students": counts[UserRole.STUDENT.value],
        "faculty": counts[UserRole.FACULTY.value],
        "admins": counts[UserRole.ADMIN.value],
    }


async def facility_stats(db: AsyncSession) -> Dict[str, int]:
    counts = await _count_by(db, Facility.status, FacilityStatus)
    return {
        "total": sum(counts.values()),
        "available": counts[FacilityStatus.AVAILABLE.value],
        "maintenance": counts[FacilityStatus.MAINTENANCE.value],
        "closed": counts[FacilityStatus.CLOSED.value],
    }


async def facility_usage(db: AsyncSession, limit: int = 5) -> List[dict]:
    """Facilities ranked by number of bookings (all statuses), busiest first."""
    booking_count = func.count(Booking.id)
    result = await db.execute(
        select(Facility.id, Facility.name, booking_count)
        .outerjoin(Booking, Booking.facility_id == Facility.id)
        .group_by(Facility.id, Facility.name)
        .order_by(booking_count.desc(), Facility.name)
        .limit(limit)
    )
    return [
        {"facility_id": facility_id, "name": name, "bookings": count}
        for facility_id, name, count in result.all()
    ]


def trailing_months(today: date, months: int) -> List[tuple[int, int]]:
    """(year, month) pairs for the last `months` calendar months, oldest first."""
    pairs = []
    year, month = today.year, today.month
    for _ in range(months):
        pairs.append((year, month))
        month -= 1
        if month == 0:
            year, month = year - 1, 12
    return list(reversed(pairs))


async def monthly_bookings(db: AsyncSession, today: date, months: int = 6) -> List[dict]:
    """Bookings per calendar month of event_date over the trailing window."""
    window = trailing_months(today, months)
    first_year, first_month = window[0]
    last_year, last_month = window[-1]
    start = date(first_year, first_month, 1)
    end = date(last_year + 1, 1, 1) if last_month == 12 else date(last_year, last_month + 1, 1)

    year_col = extract("year", Booking.event_date)
    month_col = extract("month", Booking.event_date)
    result = await db.execute(
        select(year_col, month_col, func.count(Booking.id))
        .where(Booking.event_date >= start, Booking.event_date < end)
        .group_by(year_col, month_col)
    )
    counts = {(int(year), int(month)): count for year, month, count in result.all()}
    return [
        {
            "year": year,
            "month": month,
            "label": calendar.month_abbr[month],
            "count": counts.get((year, month), 0),
        }
        for year, month in window
    ]
