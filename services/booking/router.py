"""
services/booking/router.py
Requester-facing booking endpoints: submit, list own, edit/withdraw while
pending, and the booking status summary.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from config.database import get_db
from services.booking import workflow
from shared.middleware.auth import get_current_user
from shared.models.models import User
from shared.schemas.schemas import (
    BookingCreateRequest,
    BookingDetailResponse,
    BookingResponse,
    BookingStatsResponse,
    BookingUpdateRequest,
    MessageResponse,
)
from shared.storage import bookings as booking_store
from shared.storage import reports

router = APIRouter(prefix="/api/bookings", tags=["Bookings"])


@router.get("/my", response_model=list[BookingDetailResponse])
async def list_my_bookings(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Bookings owned by the caller, newest first."""
    bookings = await booking_store.list_bookings(db, user_id=current_user.id)
    return [BookingDetailResponse.model_validate(b) for b in bookings]


@router.get("/stats", response_model=BookingStatsResponse)
async def get_booking_stats(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Counts of all bookings by status."""
    return BookingStatsResponse(**await reports.booking_stats(db))


@router.post("", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
async def create_booking(
    data: BookingCreateRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Submit a booking request.
    Owner is the caller and status starts as pending, whatever the body says.
    """
    booking = await workflow.create_booking(db, current_user, data)
    await db.commit()
    return BookingResponse.model_validate(booking)


@router.get("/{booking_id}", response_model=BookingDetailResponse)
async def get_booking(
    booking_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Owner or admin only."""
    booking = await workflow.get_booking_or_404(db, booking_id, with_relations=True)
    if booking.user_id != current_user.id and not current_user.is_admin:
        raise HTTPException(status_code=403, detail="Not authorized")
    return BookingDetailResponse.model_validate(booking)


@router.patch("/{booking_id}", response_model=BookingResponse)
async def update_booking(
    booking_id: int,
    data: BookingUpdateRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    booking = await workflow.get_booking_or_404(db, booking_id)
    booking = await workflow.update_booking(db, booking, current_user, data)
    await db.commit()
    return BookingResponse.model_validate(booking)


@router.delete("/{booking_id}", response_model=MessageResponse)
async def delete_booking(
    booking_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Withdraw a pending booking."""
    booking = await workflow.get_booking_or_404(db, booking_id)
    await workflow.delete_booking(db, booking, current_user)
    await db.commit()
    return MessageResponse(message="Booking deleted successfully")
