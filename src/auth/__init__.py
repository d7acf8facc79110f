"""Auth module init."""

from .jwt import verify_token, get_token_user_id
from .permissions import (
    get_current_user,
    get_current_active_user,
    require_min_role,
    # Role dependencies
    admin_required,
    lead_instructor_required,
    instructor_required,
)

__all__ = [
    # JWT functions
    "verify_token",
    "get_token_user_id",
    # Auth dependencies
    "get_current_user",
    "get_current_active_user",
    "require_min_role",
    # Role dependencies
    "admin_required",
    "lead_instructor_required",
    "instructor_required",
]
