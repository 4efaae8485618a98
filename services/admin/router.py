"""
services/admin/router.py
Admin-only endpoints: booking review queue, user management,
facility management, and reporting.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from config.database import get_db
from services.booking import workflow
from shared.middleware.auth import require_admin
from shared.models.models import BookingStatus, User, UserRole
from shared.schemas.schemas import (
    AdminReportResponse,
    AdminStatsResponse,
    BookingDetailResponse,
    BookingResponse,
    BookingReviewRequest,
    CountBucket,
    FacilityCreateRequest,
    FacilityResponse,
    FacilityUpdateRequest,
    MessageResponse,
    RoleUpdateRequest,
    UserResponse,
)
from shared.storage import bookings as booking_store
from shared.storage import facilities as facility_store
from shared.storage import reports
from shared.storage import users as user_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["Admin"])


# ── Helpers ────────────────────────────────────────────────────────────────────

async def _get_user_or_404(db: AsyncSession, user_id: int) -> User:
    user = await user_store.get_user(db, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


async def _get_facility_or_404(db: AsyncSession, facility_id: int):
    facility = await facility_store.get_facility(db, facility_id)
    if not facility:
        raise HTTPException(status_code=404, detail="Facility not found")
    return facility


# ── Booking Review ─────────────────────────────────────────────────────────────

@router.get("/bookings", response_model=list[BookingDetailResponse])
async def list_all_bookings(
    status_filter: Optional[BookingStatus] = Query(None, alias="status"),
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """All bookings newest first, with requester, facility and reviewer."""
    bookings = await booking_store.list_bookings(db, status=status_filter)
    return [BookingDetailResponse.model_validate(b) for b in bookings]


@router.patch("/bookings/{booking_id}/approve", response_model=BookingResponse)
async def approve_booking(
    booking_id: int,
    data: Optional[BookingReviewRequest] = None,
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    booking = await workflow.review_booking(
        db, booking_id, BookingStatus.APPROVED, current_user, data.notes if data else None
    )
    await db.commit()
    return BookingResponse.model_validate(booking)


@router.patch("/bookings/{booking_id}/reject", response_model=BookingResponse)
async def reject_booking(
    booking_id: int,
    data: Optional[BookingReviewRequest] = None,
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Reject a booking. Notes are passed on to the requester as the reason."""
    booking = await workflow.review_booking(
        db, booking_id, BookingStatus.REJECTED, current_user, data.notes if data else None
    )
    await db.commit()
    return BookingResponse.model_validate(booking)


# ── User Management ────────────────────────────────────────────────────────────

@router.get("/users", response_model=list[UserResponse])
async def list_users(
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    users = await user_store.list_users(db)
    return [UserResponse.model_validate(u) for u in users]


@router.get("/users/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: int,
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return UserResponse.model_validate(await _get_user_or_404(db, user_id))


@router.patch("/users/{user_id}/role", response_model=UserResponse)
async def update_user_role(
    user_id: int,
    data: RoleUpdateRequest,
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    user = await _get_user_or_404(db, user_id)
    previous = user.role
    await user_store.update_user_role(db, user, UserRole(data.role))
    await db.commit()
    logger.info("User %s role changed %s → %s by admin %s",
                user.id, previous.value, user.role.value, current_user.id)
    return UserResponse.model_validate(user)


@router.delete("/users/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: int,
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """
    Delete a user and everything they own.
    Refused for the caller's own account and for anyone who reviewed
    another user's booking.
    """
    if user_id == current_user.id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot delete your own account",
        )

    user = await _get_user_or_404(db, user_id)
    if await user_store.has_reviewed_bookings(db, user):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot delete a user who has reviewed bookings",
        )

    await user_store.delete_user(db, user)
    await db.commit()
    logger.info("User %s deleted by admin %s", user_id, current_user.id)
    return MessageResponse(message="User deleted successfully")


# ── Facility Management ────────────────────────────────────────────────────────

@router.post("/facilities", response_model=FacilityResponse, status_code=status.HTTP_201_CREATED)
async def create_facility(
    data: FacilityCreateRequest,
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    facility = await facility_store.create_facility(db, **data.model_dump())
    await db.commit()
    logger.info("Facility %s created by admin %s", facility.id, current_user.id)
    return FacilityResponse.model_validate(facility)


@router.patch("/facilities/{facility_id}", response_model=FacilityResponse)
async def update_facility(
    facility_id: int,
    data: FacilityUpdateRequest,
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Partial update; only non-None fields are applied."""
    facility = await _get_facility_or_404(db, facility_id)
    updates = data.model_dump(exclude_none=True)
    if updates:
        await facility_store.update_facility(db, facility, **updates)
        await db.commit()
    return FacilityResponse.model_validate(facility)


@router.delete("/facilities/{facility_id}", response_model=MessageResponse)
async def delete_facility(
    facility_id: int,
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Delete a facility. Its bookings are deleted with it."""
    facility = await _get_facility_or_404(db, facility_id)
    await facility_store.delete_facility(db, facility)
    await db.commit()
    logger.info("Facility %s deleted by admin %s", facility_id, current_user.id)
    return MessageResponse(message="Facility deleted successfully")


# ── Reports ───────────────────────────────────────────────────────────────────

@router.get("/stats", response_model=AdminStatsResponse)
async def get_stats(
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Booking, user and facility counts. Recomputed on every call."""
    return AdminStatsResponse(
        bookings=await reports.booking_stats(db),
        users=await reports.user_stats(db),
        facilities=await reports.facility_stats(db),
    )


@router.get("/reports", response_model=AdminReportResponse)
async def get_reports(
    request: Request,
    top: Optional[int] = Query(None, ge=1, le=50),
    months: Optional[int] = Query(None, ge=1, le=24),
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """
    Status breakdown, busiest facilities, user roles and bookings per month.
    `top` and `months` default to the app's REPORT_* settings.
    """
    app_settings = request.app.state.settings
    top = top or app_settings.REPORT_TOP_FACILITIES
    months = months or app_settings.REPORT_MONTHS

    booking_counts = await reports.booking_stats(db)
    user_counts = await reports.user_stats(db)
    today = datetime.now(timezone.utc).date()

    return AdminReportResponse(
        status=[
            CountBucket(name="Approved", value=booking_counts["approved"]),
            CountBucket(name="Pending", value=booking_counts["pending"]),
            CountBucket(name="Rejected", value=booking_counts["rejected"]),
        ],
        facility_usage=await reports.facility_usage(db, limit=top),
        user_roles=[
            CountBucket(name="Students", value=user_counts["students"]),
            CountBucket(name="Faculty", value=user_counts["faculty"]),
            CountBucket(name="Admins", value=user_counts["admins"]),
        ],
        monthly_bookings=await reports.monthly_bookings(db, today, months=months),
    )
