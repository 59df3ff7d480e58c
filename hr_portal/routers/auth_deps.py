"""
Identity and role dependencies.
Authentication happens at the gateway; it forwards the authenticated user's
id in a trusted header which is resolved against the users table here.
"""
from datetime import date
from typing import Callable, List, Optional
import logging

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from hr_portal.core.config import settings
from hr_portal.core.exceptions import AccessDeniedError, AuthenticationError
from hr_portal.database import get_db
from hr_portal.models.user import User, UserType

logger = logging.getLogger(__name__)


def get_current_user(
    x_user_id: Optional[str] = Header(default=None, alias=settings.user_id_header),
    db: Session = Depends(get_db)
) -> User:
    if not x_user_id:
        raise AuthenticationError(f"Missing {settings.user_id_header} header")
    try:
        user_id = int(x_user_id)
    except ValueError:
        logger.warning(f"Authentication failed: malformed user id {x_user_id!r}")
        raise AuthenticationError("Malformed user id")

    user = db.get(User, user_id)
    if user is None:
        logger.warning(f"Authentication failed: User {user_id} not found in database")
        raise AuthenticationError("User not found")
    if not user.is_active:
        logger.warning(f"Authentication failed: User {user_id} is inactive")
        raise AccessDeniedError("User is inactive")
    return user


def require_role(allowed_types: List[UserType]) -> Callable:
    """
    Dependency factory that checks if the user has one of the allowed types.

    Usage:
        @router.post("/admin-only")
        def admin_endpoint(user: User = Depends(require_role([UserType.ADMIN]))):
            ...
    """
    allowed = [t.value for t in allowed_types]

    def role_checker(current_user: User = Depends(get_current_user)) -> User:
        if current_user.user_type not in allowed:
            raise AccessDeniedError(f"Access denied. Required roles: {allowed}")
        return current_user
    return role_checker


def require_admin() -> Callable:
    """Shorthand for requiring the admin role."""
    return require_role([UserType.ADMIN])


def get_today() -> date:
    """Reference date for pro-rating; overridden in tests."""
    return date.today()
