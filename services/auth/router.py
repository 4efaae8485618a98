"""
services/auth/router.py
Email/password authentication.
Implements: Register → Login → bearer JWT (7 days, no refresh token) → /me
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from config.database import get_db
from shared.middleware.auth import get_current_user, get_token_service
from shared.models.models import User
from shared.schemas.schemas import AuthResponse, LoginRequest, RegisterRequest, UserResponse
from shared.storage import users as user_store
from shared.utils.security import TokenService, verify_password

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Authentication"])


def _issue_token(user: User, token_service: TokenService) -> AuthResponse:
    token = token_service.create_access_token(
        user_id=user.id,
        email=user.email,
        role=user.role.value,
    )
    return AuthResponse(user=UserResponse.model_validate(user), token=token)


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new account",
)
async def register(
    data: RegisterRequest,
    db: AsyncSession = Depends(get_db),
    token_service: TokenService = Depends(get_token_service),
):
    """
    Create a student account and sign the caller in.
    Any role in the body is ignored; roles are granted by administrators.
    """
    if await user_store.get_user_by_email(db, data.email):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered",
        )

    try:
        user = await user_store.create_user(
            db,
            email=data.email,
            password=data.password,
            first_name=data.first_name,
            last_name=data.last_name,
            student_id=data.student_id,
        )
    except IntegrityError:
        # Lost a race with a concurrent registration for the same email
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered",
        )
    await db.commit()
    logger.info("User %s registered", user.id)
    return _issue_token(user, token_service)


@router.post("/login", response_model=AuthResponse, summary="Log in")
async def login(
    data: LoginRequest,
    db: AsyncSession = Depends(get_db),
    token_service: TokenService = Depends(get_token_service),
):
    user = await user_store.get_user_by_email(db, data.email)
    if not user or not verify_password(data.password, user.password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )
    return _issue_token(user, token_service)


@router.get("/me", response_model=UserResponse, summary="Get current user")
async def get_me(current_user: User = Depends(get_current_user)):
    """Returns the authenticated user's profile."""
    return UserResponse.model_validate(current_user)
