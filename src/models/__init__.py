"""Database models initialization."""

# Base classes
from .base import BaseModel, TimestampMixin, AuditMixin

# Reference models
from .lab_user import LabUser
from .cohort import Cohort
from .student import Student

# Summative evaluation models
from .summative_scenario import SummativeScenario
from .summative_evaluation import SummativeEvaluation
from .summative_evaluation_score import SummativeEvaluationScore

# Enums
from .enums import (
    UserRole as UserRoleEnum,
    EvaluationLifecycleStatus,
)

__all__ = [
    # Base classes
    "BaseModel",
    "TimestampMixin",
    "AuditMixin",

    # Reference models
    "LabUser",
    "Cohort",
    "Student",

    # Summative evaluation models
    "SummativeScenario",
    "SummativeEvaluation",
    "SummativeEvaluationScore",

    # Enums
    "UserRoleEnum",
    "EvaluationLifecycleStatus",
]
