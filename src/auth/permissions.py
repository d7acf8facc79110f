"""Authorization and role-based permission system."""

import logging
from typing import Dict, Optional
from fastapi import Depends, HTTPException, status, Request
from fastapi.security import HTTPBearer
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from src.auth.jwt import get_token_user_id
from src.core.database import get_db
from src.models.enums import UserRole
from src.repositories.lab_user import LabUserRepository
from src.utils.messages import get_message

logger = logging.getLogger(__name__)


class JWTBearer(HTTPBearer):
    """JWT handler reading the session cookie, falling back to the Authorization header."""

    def __init__(self, auto_error: bool = True):
        super(JWTBearer, self).__init__(auto_error=False)
        self.require_token = auto_error

    async def __call__(self, request: Request) -> Optional[str]:
        access_token = request.cookies.get("access_token")
        if access_token:
            return access_token

        credentials = await super(JWTBearer, self).__call__(request)
        if credentials and credentials.scheme.lower() == "bearer":
            return credentials.credentials

        if self.require_token:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail=get_message("auth", "authentication_required"),
            )

        return None


jwt_bearer = JWTBearer()


async def get_current_user(
    token: str = Depends(jwt_bearer),
    session: AsyncSession = Depends(get_db)
) -> Dict:
    """Get the current authenticated lab user from JWT token."""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=get_message("auth", "invalid_credentials"),
        headers={"WWW-Authenticate": "Bearer"},
    )

    try:
        user_id = get_token_user_id(token)
    except JWTError:
        raise credentials_exception

    user_repo = LabUserRepository(session)
    user = await user_repo.get_by_id(user_id)

    if not user:
        raise credentials_exception

    return {
        "id": user.id,
        "email": user.email,
        "role": user.role.value if isinstance(user.role, UserRole) else user.role,
        "is_active": user.is_active,
    }


async def get_current_active_user(
    current_user: Dict = Depends(get_current_user),
) -> Dict:
    """Ensure the current user is active."""
    if not current_user.get("is_active"):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=get_message("auth", "user_inactive")
        )
    return current_user


def require_min_role(required_role: UserRole):
    """
    Dependency factory requiring at least the given role level.

    Args:
        required_role: Lowest role allowed access

    Returns:
        Dependency function that checks the user's role level
    """
    async def _check_role(
        current_user: Dict = Depends(get_current_active_user),
    ) -> Dict:
        user_role = current_user.get("role")

        if not UserRole.has_min_role(user_role, required_role):
            logger.warning(
                f"User {current_user.get('id')} with role {user_role} denied, requires {required_role.value}"
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=get_message(
                    "access", "insufficient_role",
                    required_role=required_role.value, user_role=user_role
                ),
            )

        return current_user

    return _check_role


# ===== ROLE-BASED DEPENDENCIES =====

# Admin - deleting evaluations
admin_required = require_min_role(UserRole.ADMIN)

# Lead instructor - clinical section, creating and listing evaluations
lead_instructor_required = require_min_role(UserRole.LEAD_INSTRUCTOR)

# Instructor - grading students
instructor_required = require_min_role(UserRole.INSTRUCTOR)
