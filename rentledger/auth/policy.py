"""Role-based authorization policy.

A single ``(role, action) -> allow/deny`` table shared by every entry point
(API routers, scripts). Reads are open to every role; mutations are
restricted per resource.
"""

from dataclasses import dataclass

ADMIN = "ADMIN"
STAFF = "STAFF"
VIEWER = "VIEWER"

ROLES: tuple[str, ...] = (ADMIN, STAFF, VIEWER)

READ = "read"
CREATE = "create"
UPDATE = "update"
DELETE = "delete"
GENERATE = "generate"


@dataclass(frozen=True)
class Action:
    """Something a user attempts to do to a resource, e.g. ``Action("booking", "create")``."""

    resource: str
    verb: str

    def __str__(self) -> str:
        return f"{self.resource}:{self.verb}"


_ALL = frozenset(ROLES)
_ADMIN_ONLY = frozenset({ADMIN})
_OPERATORS = frozenset({ADMIN, STAFF})


def _crud(write: frozenset[str], delete: frozenset[str]) -> dict[str, frozenset[str]]:
    return {READ: _ALL, CREATE: write, UPDATE: write, DELETE: delete}


POLICY: dict[str, dict[str, frozenset[str]]] = {
    "property": _crud(write=_ADMIN_ONLY, delete=_ADMIN_ONLY),
    "unit": _crud(write=_ADMIN_ONLY, delete=_ADMIN_ONLY),
    "user": _crud(write=_ADMIN_ONLY, delete=_ADMIN_ONLY),
    "booking": _crud(write=_OPERATORS, delete=_ADMIN_ONLY),
    "guest": _crud(write=_OPERATORS, delete=_OPERATORS),
    "contact": _crud(write=_OPERATORS, delete=_OPERATORS),
    "inquiry": _crud(write=_OPERATORS, delete=_OPERATORS),
    "fixed_expense": _crud(write=_OPERATORS, delete=_ADMIN_ONLY),
    "variable_expense": {**_crud(write=_OPERATORS, delete=_ADMIN_ONLY), GENERATE: _ADMIN_ONLY},
    "report": {READ: _ALL},
}


def is_allowed(role: str | None, action: Action) -> bool:
    """Return True if ``role`` may perform ``action``. Unknown roles and actions are denied."""
    if role not in ROLES:
        return False
    allowed_roles = POLICY.get(action.resource, {}).get(action.verb)
    if allowed_roles is None:
        return False
    return role in allowed_roles
