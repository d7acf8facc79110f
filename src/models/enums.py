"""Enums for database models and scoring results."""

from enum import Enum


class UserRole(str, Enum):
    """Lab user role, ordered by privilege level."""
    SUPERADMIN = "superadmin"
    ADMIN = "admin"
    LEAD_INSTRUCTOR = "lead_instructor"
    INSTRUCTOR = "instructor"
    GUEST = "guest"

    @classmethod
    def get_all_values(cls):
        """Get all role values as list."""
        return [role.value for role in cls]

    @classmethod
    def get_level(cls, role: str) -> int:
        """Numeric privilege level for a role; unknown roles get 0."""
        level_map = {
            cls.SUPERADMIN.value: 5,
            cls.ADMIN.value: 4,
            cls.LEAD_INSTRUCTOR.value: 3,
            cls.INSTRUCTOR.value: 2,
            cls.GUEST.value: 1,
        }
        return level_map.get(role.value if isinstance(role, cls) else role, 0)

    @classmethod
    def has_min_role(cls, role: str, required_role: "UserRole") -> bool:
        """Check whether role is at least as privileged as required_role."""
        return cls.get_level(role) >= cls.get_level(required_role)


class EvaluationLifecycleStatus(str, Enum):
    """Stored status of a summative evaluation session."""
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

