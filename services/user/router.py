"""
services/user/router.py
Self-service profile, password change, and role-based navigation.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from config.database import get_db
from shared.middleware.auth import get_current_user
from shared.models.models import User
from shared.schemas.schemas import (
    MessageResponse,
    NavGroupResponse,
    PasswordChangeRequest,
    ProfileUpdateRequest,
    UserEnvelope,
    UserResponse,
)
from shared.storage import users as user_store
from shared.utils.navigation import resolve_navigation
from shared.utils.security import verify_password

router = APIRouter(prefix="/api/users", tags=["Users"])


@router.patch("/profile", response_model=UserEnvelope)
async def update_profile(
    data: ProfileUpdateRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Update first name, last name and student id.
    Only non-None fields in the request body are updated.
    """
    updates = data.model_dump(exclude_none=True)
    if updates:
        await user_store.update_user(db, current_user, **updates)
        await db.commit()
    return UserEnvelope(user=UserResponse.model_validate(current_user))


@router.patch("/password", response_model=MessageResponse)
async def change_password(
    data: PasswordChangeRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    if not verify_password(data.current_password, current_user.password):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Current password is incorrect",
        )

    await user_store.update_user_password(db, current_user, data.new_password)
    await db.commit()
    return MessageResponse(message="Password changed successfully")


@router.get("/navigation", response_model=list[NavGroupResponse])
async def get_navigation(current_user: User = Depends(get_current_user)):
    """Menu groups available to the caller's role."""
    return [
        NavGroupResponse.model_validate(group)
        for group in resolve_navigation(current_user.role)
    ]
