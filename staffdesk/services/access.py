"""Role gate for the staff console."""
from __future__ import annotations

from typing import Any

STAFF_ROLES = frozenset({"staff", "admin"})

ACCESS_DENIED_DETAIL = "You don't have permission to access the staff panel."


def is_staff_authorized(role: Any) -> bool:
    return isinstance(role, str) and role in STAFF_ROLES
