"""
shared/schemas/schemas.py
All Pydantic v2 request/response schemas for the API.
Field names are snake_case in Python and camelCase on the wire.
"""

from datetime import date, datetime, time
from typing import List, Optional

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from shared.models.models import (
    BookingStatus,
    FacilityStatus,
    NotificationStatus,
    NotificationType,
    UserRole,
)


# ── Base ──────────────────────────────────────────────────────

class BaseSchema(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        use_enum_values=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


# ── Auth ──────────────────────────────────────────────────────

class RegisterRequest(BaseSchema):
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)
    confirm_password: str
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    student_id: Optional[str] = Field(None, max_length=50)

    @model_validator(mode="after")
    def passwords_match(self) -> "RegisterRequest":
        if self.password != self.confirm_password:
            raise ValueError("Passwords don't match")
        return self


class LoginRequest(BaseSchema):
    email: EmailStr
    password: str = Field(..., min_length=6)


class AuthResponse(BaseSchema):
    user: "UserResponse"
    token: str


# ── User ──────────────────────────────────────────────────────

class UserResponse(BaseSchema):
    id: int
    email: str
    first_name: Optional[str]
    last_name: Optional[str]
    student_id: Optional[str]
    role: UserRole
    created_at: datetime
    updated_at: datetime


class UserEnvelope(BaseSchema):
    user: UserResponse


class ProfileUpdateRequest(BaseSchema):
    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)
    student_id: Optional[str] = Field(None, max_length=50)


class PasswordChangeRequest(BaseSchema):
    current_password: str
    new_password: str = Field(..., min_length=6, max_length=128)


class RoleUpdateRequest(BaseSchema):
    role: UserRole


class NavItemResponse(BaseSchema):
    title: str
    url: str


class NavGroupResponse(BaseSchema):
    label: str
    items: List[NavItemResponse]


# ── Facility ──────────────────────────────────────────────────

class FacilityCreateRequest(BaseSchema):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    capacity: Optional[int] = Field(None, ge=0)
    location: Optional[str] = Field(None, max_length=255)
    status: FacilityStatus = FacilityStatus.AVAILABLE
    amenities: Optional[str] = None
    image_url: Optional[str] = None


class FacilityUpdateRequest(BaseSchema):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    capacity: Optional[int] = Field(None, ge=0)
    location: Optional[str] = Field(None, max_length=255)
    status: Optional[FacilityStatus] = None
    amenities: Optional[str] = None
    image_url: Optional[str] = None


class FacilityResponse(BaseSchema):
    id: int
    name: str
    description: Optional[str]
    capacity: Optional[int]
    location: Optional[str]
    status: FacilityStatus
    amenities: Optional[str]
    image_url: Optional[str]
    created_at: datetime
    updated_at: datetime


# ── Booking ───────────────────────────────────────────────────

class BookingCreateRequest(BaseSchema):
    """
    Owner and status are never read from the request body; the server
    sets them. Unknown keys such as userId or status are ignored.
    """
    facility_id: int
    event_name: str = Field(..., min_length=1, max_length=255)
    event_description: Optional[str] = None
    purpose: str = Field(..., min_length=1)
    event_date: date
    start_time: time
    end_time: time
    attendees: Optional[int] = Field(None, ge=1)
    equipment_needed: Optional[str] = None

    @model_validator(mode="after")
    def validate_time_range(self) -> "BookingCreateRequest":
        if self.end_time <= self.start_time:
            raise ValueError("End time must be after start time")
        return self


class BookingUpdateRequest(BaseSchema):
    facility_id: Optional[int] = None
    event_name: Optional[str] = Field(None, min_length=1, max_length=255)
    event_description: Optional[str] = None
    purpose: Optional[str] = Field(None, min_length=1)
    event_date: Optional[date] = None
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    attendees: Optional[int] = Field(None, ge=1)
    equipment_needed: Optional[str] = None


class BookingReviewRequest(BaseSchema):
    notes: Optional[str] = Field(
        None,
        max_length=2000,
        validation_alias=AliasChoices("notes", "adminNotes", "admin_notes"),
    )

    @field_validator("notes")
    @classmethod
    def strip_notes(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        return v or None


class BookingResponse(BaseSchema):
    id: int
    user_id: int
    facility_id: int
    event_name: str
    event_description: Optional[str]
    purpose: Optional[str]
    event_date: date
    start_time: time
    end_time: time
    attendees: Optional[int]
    equipment_needed: Optional[str]
    status: BookingStatus
    admin_notes: Optional[str]
    reviewed_by: Optional[int]
    reviewed_at: Optional[datetime]
    created_at: datetime
    updated_at: datetime


class BookingDetailResponse(BookingResponse):
    """Booking joined with its owner, facility and reviewer."""
    user: Optional[UserResponse] = None
    facility: Optional[FacilityResponse] = None
    reviewer: Optional[UserResponse] = None


# ── Notification ──────────────────────────────────────────────

class NotificationResponse(BaseSchema):
    id: int
    user_id: int
    title: str
    message: str
    type: NotificationType
    related_booking_id: Optional[int]
    status: NotificationStatus
    created_at: datetime


class UnreadCountResponse(BaseSchema):
    unread_count: int


# ── Stats & Reports ───────────────────────────────────────────

class BookingStatsResponse(BaseSchema):
    pending: int
    approved: int
    rejected: int
    total: int


class UserStatsResponse(BaseSchema):
    total: int
    students: int
    faculty: int
    admins: int


class FacilityStatsResponse(BaseSchema):
    total: int
    available: int
    maintenance: int
    closed: int


class AdminStatsResponse(BaseSchema):
    bookings: BookingStatsResponse
    users: UserStatsResponse
    facilities: FacilityStatsResponse


class CountBucket(BaseSchema):
    name: str
    value: int


class FacilityUsageResponse(BaseSchema):
    facility_id: int
    name: str
    bookings: int


class MonthlyCountResponse(BaseSchema):
    year: int
    month: int
    label: str
    count: int


class AdminReportResponse(BaseSchema):
    status: List[CountBucket]
    facility_usage: List[FacilityUsageResponse]
    user_roles: List[CountBucket]
    monthly_bookings: List[MonthlyCountResponse]


# ── Generic ───────────────────────────────────────────────────

class MessageResponse(BaseSchema):
    message: str
    success: bool = True


AuthResponse.model_rebuild()
