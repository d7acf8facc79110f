"""Schemas initialization."""

# Shared schemas
from .shared import (
    BaseListResponse,
    MessageResponse,
    PaginationParams,
)

# Summative scenario schemas
from .summative_scenario import (
    SummativeScenarioBase,
    SummativeScenarioCreate,
    SummativeScenarioResponse,
)

# Summative evaluation schemas
from .summative_evaluation import (
    AddStudentToEvaluation,
    ScorePreviewRequest,
    ScorePreviewResponse,
    StudentSummary,
    SummativeEvaluationBase,
    SummativeEvaluationCreate,
    SummativeEvaluationFilterParams,
    SummativeEvaluationResponse,
    SummativeScoreResponse,
    SummativeScoreUpdate,
    ScoreValues,
)
