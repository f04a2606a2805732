"""Shared API dependencies: single import point for all routers.

Re-exports the database session, authentication, and policy dependencies so
that router modules can import everything they need from one place::

    from rentledger.api.deps import get_db, require_permission
"""

from rentledger.auth.dependencies import (
    get_current_active_user,
    get_current_user,
    require_permission,
)
from rentledger.database import get_db

__all__ = [
    "get_db",
    "get_current_user",
    "get_current_active_user",
    "require_permission",
]
