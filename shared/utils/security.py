"""
shared/utils/security.py
JWT creation/verification and password hashing.

The signing secret is not read from a module global: a TokenService is built
once from Settings in the app factory and handed to the auth dependencies.
"""

from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt
from passlib.context import CryptContext

from config.settings import Settings

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

_REQUIRED_CLAIMS = ("id", "email", "role")


# ── JWT ───────────────────────────────────────────────────────

class TokenService:
    """Signs and verifies bearer tokens carrying {id, email, role}."""

    def __init__(self, secret_key: str, algorithm: str = "HS256", expire_days: int = 7):
        if not secret_key:
            raise ValueError("JWT secret key must not be empty")
        self._secret_key = secret_key
        self.algorithm = algorithm
        self.expire_days = expire_days

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            secret_key=settings.JWT_SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM,
            expire_days=settings.JWT_ACCESS_TOKEN_EXPIRE_DAYS,
        )

    def create_access_token(self, user_id: int, email: str, role: str) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "id": user_id,
            "email": email,
            "role": role,
            "iat": now,
            "exp": now + timedelta(days=self.expire_days),
        }
        return jwt.encode(payload, self._secret_key, algorithm=self.algorithm)

    def verify_access_token(self, token: str) -> dict:
        """
        Decode and verify a JWT access token.
        Raises JWTError on a bad signature, expiry, or missing claims.
        """
        payload = jwt.decode(token, self._secret_key, algorithms=[self.algorithm])
        missing = [claim for claim in _REQUIRED_CLAIMS if claim not in payload]
        if missing:
            raise JWTError(f"Token missing claims: {missing}")
        return payload


# ── Password ──────────────────────────────────────────────────

def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)
