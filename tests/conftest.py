"""
tests/conftest.py
Shared fixtures: an in-memory SQLite database per test, an HTTP client bound
to the app with get_db overridden, and users/facilities/bookings to act on.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("APP_ENV", "test")

from datetime import date, time  # noqa: E402

import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from config.database import Base, get_db  # noqa: E402
from main import app  # noqa: E402
from shared.models.models import BookingStatus, Facility, FacilityStatus, User, UserRole  # noqa: E402
from shared.storage import bookings as booking_store  # noqa: E402
from shared.storage import facilities as facility_store  # noqa: E402
from shared.storage import users as user_store  # noqa: E402

TEST_PASSWORD = "secret123"


def auth_headers(user: User) -> dict:
    """Bearer header for `user`, signed by the app's TokenService."""
    token = app.state.token_service.create_access_token(
        user_id=user.id, email=user.email, role=user.role.value
    )
    return {"Authorization": f"Bearer {token}"}


# ── Database ──────────────────────────────────────────────────

@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


# ── Users ─────────────────────────────────────────────────────

async def _create_user(db: AsyncSession, email: str, role: UserRole, **fields) -> User:
    user = await user_store.create_user(db, email=email, password=TEST_PASSWORD, role=role, **fields)
    await db.commit()
    return user


@pytest_asyncio.fixture
async def student_user(db) -> User:
    return await _create_user(
        db, "student@campus.edu", UserRole.STUDENT,
        first_name="Sam", last_name="Student", student_id="S-1001",
    )


@pytest_asyncio.fixture
async def other_student(db) -> User:
    return await _create_user(db, "other@campus.edu", UserRole.STUDENT, first_name="Olive")


@pytest_asyncio.fixture
async def faculty_user(db) -> User:
    return await _create_user(db, "faculty@campus.edu", UserRole.FACULTY, first_name="Fran")


@pytest_asyncio.fixture
async def admin_user(db) -> User:
    return await _create_user(db, "admin@campus.edu", UserRole.ADMIN, first_name="Ada")


@pytest_asyncio.fixture
async def second_admin(db) -> User:
    return await _create_user(db, "admin2@campus.edu", UserRole.ADMIN, first_name="Alan")


# ── Facilities & Bookings ─────────────────────────────────────

@pytest_asyncio.fixture
async def facility(db) -> Facility:
    facility = await facility_store.create_facility(
        db,
        name="Main Auditorium",
        description="Tiered seating with stage",
        capacity=300,
        location="Building A",
        status=FacilityStatus.AVAILABLE,
        amenities="Projector, PA system",
    )
    await db.commit()
    return facility


@pytest_asyncio.fixture
async def make_booking(db, facility):
    """Factory inserting a booking directly, bypassing the workflow."""

    async def _make(
        owner: User,
        status: BookingStatus = BookingStatus.PENDING,
        target: Facility = None,
        event_date: date = date(2025, 1, 15),
        event_name: str = "Study Group",
    ):
        booking = await booking_store.create_booking(
            db,
            user_id=owner.id,
            facility_id=(target or facility).id,
            event_name=event_name,
            purpose="Exam revision",
            event_date=event_date,
            start_time=time(10, 0),
            end_time=time(12, 0),
            attendees=20,
        )
        booking.status = status
        await db.commit()
        return booking

    return _make
