"""
tests/test_users.py
Tests for self-service profile updates, password change and navigation.
"""

import pytest
from httpx import AsyncClient

from shared.models.models import User
from tests.conftest import TEST_PASSWORD, auth_headers


# ── Profile ───────────────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_update_profile(client: AsyncClient, student_user: User):
    response = await client.patch(
        "/api/users/profile",
        headers=auth_headers(student_user),
        json={"firstName": "Samantha", "studentId": "S-9999"},
    )
    assert response.status_code == 200
    user = response.json()["user"]
    assert user["firstName"] == "Samantha"
    assert user["lastName"] == "Student"
    assert user["studentId"] == "S-9999"


@pytest.mark.asyncio
async def test_update_profile_cannot_change_role_or_email(client: AsyncClient, student_user: User):
    response = await client.patch(
        "/api/users/profile",
        headers=auth_headers(student_user),
        json={"role": "admin", "email": "hijack@campus.edu", "lastName": "Stone"},
    )
    assert response.status_code == 200
    user = response.json()["user"]
    assert user["role"] == "student"
    assert user["email"] == student_user.email
    assert user["lastName"] == "Stone"


@pytest.mark.asyncio
async def test_update_profile_requires_auth(client: AsyncClient):
    response = await client.patch("/api/users/profile", json={"firstName": "X"})
    assert response.status_code == 401


# ── Password ──────────────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_change_password(client: AsyncClient, student_user: User):
    response = await client.patch(
        "/api/users/password",
        headers=auth_headers(student_user),
        json={"currentPassword": TEST_PASSWORD, "newPassword": "brand-new-pass"},
    )
    assert response.status_code == 200
    assert response.json()["success"] is True

    old = await client.post(
        "/api/auth/login", json={"email": student_user.email, "password": TEST_PASSWORD}
    )
    assert old.status_code == 401
    new = await client.post(
        "/api/auth/login", json={"email": student_user.email, "password": "brand-new-pass"}
    )
    assert new.status_code == 200


@pytest.mark.asyncio
async def test_change_password_wrong_current(client: AsyncClient, student_user: User):
    response = await client.patch(
        "/api/users/password",
        headers=auth_headers(student_user),
        json={"currentPassword": "not-my-password", "newPassword": "brand-new-pass"},
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Current password is incorrect"


@pytest.mark.asyncio
async def test_change_password_too_short(client: AsyncClient, student_user: User):
    response = await client.patch(
        "/api/users/password",
        headers=auth_headers(student_user),
        json={"currentPassword": TEST_PASSWORD, "newPassword": "abc"},
    )
    assert response.status_code == 400


# ── Navigation ────────────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_student_navigation(client: AsyncClient, student_user: User):
    response = await client.get("/api/users/navigation", headers=auth_headers(student_user))
    assert response.status_code == 200
    groups = response.json()
    assert [g["label"] for g in groups] == ["Menu", "Account"]
    urls = [item["url"] for item in groups[0]["items"]]
    assert urls == ["/dashboard", "/facilities", "/request-event", "/my-bookings"]


@pytest.mark.asyncio
async def test_faculty_navigation_matches_student(
    client: AsyncClient, student_user: User, faculty_user: User
):
    student = await client.get("/api/users/navigation", headers=auth_headers(student_user))
    faculty = await client.get("/api/users/navigation", headers=auth_headers(faculty_user))
    assert faculty.json() == student.json()


@pytest.mark.asyncio
async def test_admin_navigation(client: AsyncClient, admin_user: User):
    response = await client.get("/api/users/navigation", headers=auth_headers(admin_user))
    groups = response.json()
    assert [g["label"] for g in groups] == ["Administration", "Account"]
    assert "/admin/reports" in [item["url"] for item in groups[0]["items"]]
