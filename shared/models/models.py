"""
shared/models/models.py
All SQLAlchemy ORM models for FacilityHub.
Integer surrogate keys throughout; enum columns store their lowercase values.
"""

from datetime import date, datetime, time, timezone
from enum import Enum as PyEnum
from typing import Optional

from sqlalchemy import (
    Date,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    Time,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from config.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _enum(enum_cls: type[PyEnum], name: str) -> Enum:
    return Enum(enum_cls, name=name, values_callable=lambda e: [m.value for m in e])


# ── Enumerations ──────────────────────────────────────────────

class UserRole(str, PyEnum):
    STUDENT = "student"    # requester-basic
    FACULTY = "faculty"    # requester-privileged
    ADMIN = "admin"


class FacilityStatus(str, PyEnum):
    AVAILABLE = "available"
    MAINTENANCE = "maintenance"
    CLOSED = "closed"


class BookingStatus(str, PyEnum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class NotificationType(str, PyEnum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


class NotificationStatus(str, PyEnum):
    UNREAD = "unread"
    READ = "read"


# ── Mixins ────────────────────────────────────────────────────

class TimestampMixin:
    """Adds created_at and updated_at to any model."""
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        server_default=func.now(),
        nullable=False,
    )


# ── Models ────────────────────────────────────────────────────

class User(TimestampMixin, Base):
    """Account with a role. The role decides authorization, never ownership."""
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    password: Mapped[str] = mapped_column(Text, nullable=False)  # bcrypt hash
    first_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    last_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    student_id: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    role: Mapped[UserRole] = mapped_column(
        _enum(UserRole, "user_role"), nullable=False, default=UserRole.STUDENT
    )

    __table_args__ = (Index("ix_users_role", "role"),)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def __repr__(self) -> str:
        return f"<User {self.email} ({self.role.value})>"


class Facility(TimestampMixin, Base):
    """A bookable physical resource."""
    __tablename__ = "facilities"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    capacity: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    location: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    status: Mapped[FacilityStatus] = mapped_column(
        _enum(FacilityStatus, "facility_status"),
        nullable=False,
        default=FacilityStatus.AVAILABLE,
    )
    amenities: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    image_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<Facility {self.name} ({self.status.value})>"


class Booking(TimestampMixin, Base):
    """
    Reservation request against a facility.
    Status transitions: PENDING → APPROVED | REJECTED, set by an admin review.
    reviewed_by / reviewed_at stay NULL while the booking is PENDING.
    """
    __tablename__ = "bookings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    facility_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("facilities.id", ondelete="CASCADE"), nullable=False
    )

    # Event
    event_name: Mapped[str] = mapped_column(String(255), nullable=False)
    event_description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    purpose: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    event_date: Mapped[date] = mapped_column(Date, nullable=False)
    start_time: Mapped[time] = mapped_column(Time, nullable=False)
    end_time: Mapped[time] = mapped_column(Time, nullable=False)
    attendees: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    equipment_needed: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Review
    status: Mapped[BookingStatus] = mapped_column(
        _enum(BookingStatus, "booking_status"),
        nullable=False,
        default=BookingStatus.PENDING,
    )
    admin_notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    reviewed_by: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="RESTRICT"), nullable=True
    )
    reviewed_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    # Relationships (always eager-loaded explicitly; never touched lazily)
    user: Mapped["User"] = relationship(foreign_keys=[user_id], lazy="raise")
    facility: Mapped["Facility"] = relationship(lazy="raise")
    reviewer: Mapped[Optional["User"]] = relationship(foreign_keys=[reviewed_by], lazy="raise")

    __table_args__ = (
        Index("ix_bookings_user_id", "user_id"),
        Index("ix_bookings_facility_id", "facility_id"),
        Index("ix_bookings_status", "status"),
        Index("ix_bookings_event_date", "event_date"),
    )

    @property
    def is_pending(self) -> bool:
        return self.status == BookingStatus.PENDING


class Notification(Base):
    """Append-only, user-targeted record of a workflow event."""
    __tablename__ = "notifications"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[NotificationType] = mapped_column(
        _enum(NotificationType, "notification_type"),
        nullable=False,
        default=NotificationType.INFO,
    )
    related_booking_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("bookings.id", ondelete="SET NULL"), nullable=True
    )
    status: Mapped[NotificationStatus] = mapped_column(
        _enum(NotificationStatus, "notification_status"),
        nullable=False,
        default=NotificationStatus.UNREAD,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False
    )

    __table_args__ = (Index("ix_notifications_user_id_status", "user_id", "status"),)
