"""
tests/test_navigation.py
Unit tests for the role → navigation mapping.
"""

import dataclasses

import pytest

from shared.models.models import UserRole
from shared.utils.navigation import ACCOUNT_MENU, ADMIN_MENU, REQUESTER_MENU, resolve_navigation


@pytest.mark.parametrize(
    "role, expected",
    [
        (UserRole.STUDENT, (REQUESTER_MENU, ACCOUNT_MENU)),
        (UserRole.FACULTY, (REQUESTER_MENU, ACCOUNT_MENU)),
        (UserRole.ADMIN, (ADMIN_MENU, ACCOUNT_MENU)),
    ],
)
def test_resolve_navigation(role, expected):
    assert resolve_navigation(role) == expected


def test_resolve_navigation_accepts_raw_value():
    assert resolve_navigation("admin") == (ADMIN_MENU, ACCOUNT_MENU)


def test_unknown_role_raises():
    with pytest.raises(ValueError):
        resolve_navigation("janitor")


def test_navigation_is_immutable():
    with pytest.raises(dataclasses.FrozenInstanceError):
        REQUESTER_MENU.label = "Changed"


def test_admin_menu_has_no_requester_entries():
    admin_urls = {item.url for item in ADMIN_MENU.items}
    assert "/request-event" not in admin_urls
    assert "/my-bookings" not in admin_urls
