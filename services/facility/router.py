"""
services/facility/router.py
Public facility catalogue. Mutations live under /api/admin/facilities.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from config.database import get_db
from shared.models.models import FacilityStatus
from shared.schemas.schemas import FacilityResponse
from shared.storage import facilities as facility_store

router = APIRouter(prefix="/api/facilities", tags=["Facilities"])


@router.get("", response_model=list[FacilityResponse])
async def list_facilities(
    status_filter: Optional[FacilityStatus] = Query(None, alias="status"),
    db: AsyncSession = Depends(get_db),
):
    """All facilities ordered by name, optionally filtered by status."""
    facilities = await facility_store.list_facilities(db, status=status_filter)
    return [FacilityResponse.model_validate(f) for f in facilities]


@router.get("/{facility_id}", response_model=FacilityResponse)
async def get_facility(facility_id: int, db: AsyncSession = Depends(get_db)):
    facility = await facility_store.get_facility(db, facility_id)
    if not facility:
        raise HTTPException(status_code=404, detail="Facility not found")
    return FacilityResponse.model_validate(facility)
