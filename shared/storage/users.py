"""
shared/storage/users.py
User queries. Passwords are hashed here, never in the routers.
"""

from typing import Optional, Sequence

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from shared.models.models import Booking, Notification, User, UserRole
from shared.utils.security import hash_password


async def get_user(db: AsyncSession, user_id: int) -> Optional[User]:
    return await db.get(User, user_id)


async def get_user_by_email(db: AsyncSession, email: str) -> Optional[User]:
    result = await db.execute(select(User).where(User.email == email.lower()))
    return result.scalar_one_or_none()


async def list_users(db: AsyncSession) -> Sequence[User]:
    result = await db.execute(select(User).order_by(User.created_at.desc(), User.id.desc()))
    return result.scalars().all()


async def create_user(
    db: AsyncSession,
    email: str,
    password: str,
    first_name: Optional[str] = None,
    last_name: Optional[str] = None,
    student_id: Optional[str] = None,
    role: UserRole = UserRole.STUDENT,
) -> User:
    user = User(
        email=email.lower(),
        password=hash_password(password),
        first_name=first_name,
        last_name=last_name,
        student_id=student_id,
        role=role,
    )
    db.add(user)
    await db.flush()
    return user


async def update_user(db: AsyncSession, user: User, **fields) -> User:
    """Apply non-None profile fields."""
    for field, value in fields.items():
        if value is not None:
            setattr(user, field, value)
    await db.flush()
    return user


async def update_user_password(db: AsyncSession, user: User, new_password: str) -> None:
    user.password = hash_password(new_password)
    await db.flush()


async def update_user_role(db: AsyncSession, user: User, role: UserRole) -> User:
    user.role = role
    await db.flush()
    return user


async def has_reviewed_bookings(db: AsyncSession, user: User) -> bool:
    """True if the user reviewed any booking owned by someone else."""
    reviewed = await db.scalar(
        select(func.count(Booking.id)).where(
            Booking.reviewed_by == user.id,
            Booking.user_id != user.id,
        )
    )
    return bool(reviewed)


async def delete_user(db: AsyncSession, user: User) -> None:
    """
    Delete a user with their notifications and bookings.
    Callers must refuse users who reviewed other people's bookings
    (see has_reviewed_bookings); the reviewer link is never cleared.
    """
    owned_bookings = select(Booking.id).where(Booking.user_id == user.id)
    await db.execute(
        update(Notification)
        .where(Notification.related_booking_id.in_(owned_bookings))
        .values(related_booking_id=None)
    )
    await db.execute(delete(Notification).where(Notification.user_id == user.id))
    await db.execute(delete(Booking).where(Booking.user_id == user.id))
    await db.delete(user)
    await db.flush()
