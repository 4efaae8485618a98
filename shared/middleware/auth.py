"""
shared/middleware/auth.py
FastAPI dependency functions for authentication and authorization.
The bearer JWT is validated here against the app's TokenService.
"""

from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from config.database import get_db
from shared.models.models import User, UserRole
from shared.storage import users as user_store
from shared.utils.security import TokenService

security = HTTPBearer(auto_error=False)


class TokenData:
    def __init__(self, payload: dict):
        self.user_id: int = int(payload["id"])
        self.email: str = payload["email"]
        self.role: UserRole = UserRole(payload["role"])


def get_token_service(request: Request) -> TokenService:
    """TokenService configured by the app factory."""
    return request.app.state.token_service


async def get_token_data(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    token_service: TokenService = Depends(get_token_service),
) -> TokenData:
    """Extract and validate the JWT from the Authorization header."""
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        payload = token_service.verify_access_token(credentials.credentials)
        return TokenData(payload)
    except (JWTError, ValueError, TypeError):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )


async def get_current_user(
    token_data: TokenData = Depends(get_token_data),
    db: AsyncSession = Depends(get_db),
) -> User:
    """Load the full User row for the token's id claim."""
    user = await user_store.get_user(db, token_data.user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


class RoleRequired:
    """Dependency factory for role-based access control."""

    def __init__(self, *roles: UserRole):
        self.roles = roles

    async def __call__(
        self,
        current_user: User = Depends(get_current_user),
    ) -> User:
        if current_user.role not in self.roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Admin access required" if self.roles == (UserRole.ADMIN,)
                else f"Required role: {[r.value for r in self.roles]}",
            )
        return current_user


require_admin = RoleRequired(UserRole.ADMIN)
