"""FastAPI authentication and authorization dependencies for route protection."""

import logging
import uuid
from collections.abc import Awaitable, Callable

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from rentledger.auth.jwt import decode_token
from rentledger.auth.policy import Action, is_allowed
from rentledger.database import get_db
from rentledger.models.user import User

logger = logging.getLogger(__name__)

# Strict bearer: rejects requests without a token
_bearer_scheme = HTTPBearer()


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(_bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> User:
    """Extract and validate the Bearer token, then return the authenticated user.

    Raises:
        HTTPException 401: If the token is invalid, expired, wrong type, or user not found.
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    try:
        payload = decode_token(credentials.credentials)
    except JWTError:
        raise credentials_exception from None

    # Refresh tokens cannot be used to call the API
    if payload.get("type") != "access":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token type",
            headers={"WWW-Authenticate": "Bearer"},
        )

    sub: str | None = payload.get("sub")
    if sub is None:
        raise credentials_exception

    try:
        user_id = uuid.UUID(sub)
    except ValueError:
        raise credentials_exception from None

    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()

    if user is None:
        raise credentials_exception

    return user


async def get_current_active_user(
    user: User = Depends(get_current_user),
) -> User:
    """Return the current user only if their account is active.

    Raises:
        HTTPException 403: If the user account is inactive.
    """
    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is inactive",
        )
    return user


def require_permission(resource: str, verb: str) -> Callable[..., Awaitable[User]]:
    """Build a dependency that admits the current user only if the policy allows ``resource:verb``.

    Usage::

        @router.post("")
        async def create_unit(current_user: User = Depends(require_permission("unit", "create"))):
            ...
    """
    action = Action(resource, verb)

    async def _check(user: User = Depends(get_current_active_user)) -> User:
        if not is_allowed(user.role, action):
            logger.info("Denied %s to user %s with role %s", action, user.id, user.role)
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Not allowed",
            )
        return user

    return _check
