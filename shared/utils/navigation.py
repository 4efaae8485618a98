"""
shared/utils/navigation.py
Role → navigation set. Each role maps to one fixed, immutable variant.
"""

from dataclasses import dataclass
from typing import Tuple

from shared.models.models import UserRole


@dataclass(frozen=True)
class NavItem:
    title: str
    url: str


@dataclass(frozen=True)
class NavGroup:
    label: str
    items: Tuple[NavItem, ...]


REQUESTER_MENU = NavGroup(
    label="Menu",
    items=(
        NavItem("Dashboard", "/dashboard"),
        NavItem("Facilities", "/facilities"),
        NavItem("Request Event", "/request-event"),
        NavItem("My Bookings", "/my-bookings"),
    ),
)

ADMIN_MENU = NavGroup(
    label="Administration",
    items=(
        NavItem("Dashboard", "/admin"),
        NavItem("Booking Requests", "/admin/bookings"),
        NavItem("Facilities", "/admin/facilities"),
        NavItem("Users", "/admin/users"),
        NavItem("Reports", "/admin/reports"),
    ),
)

ACCOUNT_MENU = NavGroup(
    label="Account",
    items=(
        NavItem("Notifications", "/notifications"),
        NavItem("Profile", "/profile"),
    ),
)

_NAVIGATION = {
    UserRole.STUDENT: (REQUESTER_MENU, ACCOUNT_MENU),
    UserRole.FACULTY: (REQUESTER_MENU, ACCOUNT_MENU),
    UserRole.ADMIN: (ADMIN_MENU, ACCOUNT_MENU),
}


def resolve_navigation(role: UserRole) -> Tuple[NavGroup, ...]:
    return _NAVIGATION[UserRole(role)]
