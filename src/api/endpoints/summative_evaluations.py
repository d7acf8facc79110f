"""Summative Evaluations endpoints - sessions, student scores and grading."""

from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from src.auth.permissions import (
    admin_required,
    instructor_required,
    lead_instructor_required,
)
from src.core.database import get_db
from src.repositories.student import StudentRepository
from src.repositories.summative_evaluation import SummativeEvaluationRepository
from src.repositories.summative_scenario import SummativeScenarioRepository
from src.schemas.shared import BaseListResponse, MessageResponse
from src.schemas.summative_evaluation import (
    AddStudentToEvaluation,
    ScorePreviewRequest,
    ScorePreviewResponse,
    SummativeEvaluationCreate,
    SummativeEvaluationFilterParams,
    SummativeEvaluationResponse,
    SummativeScoreResponse,
    SummativeScoreUpdate,
)
from src.schemas.summative_scenario import SummativeScenarioResponse
from src.services.summative_evaluation import SummativeEvaluationService

router = APIRouter()


async def get_summative_evaluation_service(
    session: AsyncSession = Depends(get_db),
) -> SummativeEvaluationService:
    """Get summative evaluation service dependency."""
    return SummativeEvaluationService(
        SummativeEvaluationRepository(session),
        SummativeScenarioRepository(session),
        StudentRepository(session),
    )


# ===== SCENARIOS =====


@router.get(
    "/scenarios",
    response_model=List[SummativeScenarioResponse],
    summary="List summative scenarios",
)
async def list_summative_scenarios(
    current_user: dict = Depends(instructor_required),
    service: SummativeEvaluationService = Depends(get_summative_evaluation_service),
):
    """Get active summative scenarios ordered by scenario number."""
    return await service.list_scenarios()


# ===== GRADING PREVIEW =====


@router.post(
    "/score-preview",
    response_model=ScorePreviewResponse,
    summary="Preview total and pass/fail",
)
async def preview_score(
    preview_data: ScorePreviewRequest,
    current_user: dict = Depends(instructor_required),
    service: SummativeEvaluationService = Depends(get_summative_evaluation_service),
):
    """
    Compute the live total and pass/fail for unsaved grading form values.

    Nothing is stored; the final decision is saved when grading is completed.
    """
    return service.preview_score(preview_data)


# ===== EVALUATION SESSIONS =====


@router.get(
    "/",
    response_model=BaseListResponse[SummativeEvaluationResponse],
    summary="Get filtered summative evaluations",
)
async def list_summative_evaluations(
    cohort_id: Optional[int] = Query(None, description="Filter by cohort ID"),
    internship_id: Optional[int] = Query(None, description="Filter by internship ID"),
    student_id: Optional[int] = Query(None, description="Only evaluations including this student"),
    status: Optional[Literal["pending", "in_progress", "completed"]] = Query(
        None, description="Filter by derived status"
    ),
    page: int = Query(1, ge=1, description="Page number"),
    size: int = Query(20, ge=1, le=100, description="Items per page"),
    current_user: dict = Depends(lead_instructor_required),
    service: SummativeEvaluationService = Depends(get_summative_evaluation_service),
):
    """
    Get summative evaluations, newest exam date first.

    Each item carries its derived status (pending, in progress, all passed,
    some failed) for the list badge.
    """
    filters = SummativeEvaluationFilterParams(
        cohort_id=cohort_id,
        internship_id=internship_id,
        student_id=student_id,
        status=status,
        page=page,
        size=size,
    )
    return await service.list_evaluations(filters)


@router.post(
    "/",
    response_model=SummativeEvaluationResponse,
    summary="Create summative evaluation",
)
async def create_summative_evaluation(
    evaluation_data: SummativeEvaluationCreate,
    current_user: dict = Depends(lead_instructor_required),
    service: SummativeEvaluationService = Depends(get_summative_evaluation_service),
):
    """
    Create a summative evaluation session.

    - **scenario_id**: Summative scenario to run
    - **evaluation_date**: Exam date
    - **examiner_name**: Examiner running the scenario
    - **student_ids**: 1 to 6 students to grade
    """
    return await service.create_evaluation(evaluation_data, current_user)


@router.get(
    "/{evaluation_id}",
    response_model=SummativeEvaluationResponse,
    summary="Get summative evaluation by ID",
)
async def get_summative_evaluation(
    evaluation_id: int,
    current_user: dict = Depends(instructor_required),
    service: SummativeEvaluationService = Depends(get_summative_evaluation_service),
):
    """Get summative evaluation with scenario and all student scores."""
    return await service.get_evaluation(evaluation_id)


@router.delete(
    "/{evaluation_id}",
    response_model=MessageResponse,
    summary="Delete summative evaluation",
)
async def delete_summative_evaluation(
    evaluation_id: int,
    current_user: dict = Depends(admin_required),
    service: SummativeEvaluationService = Depends(get_summative_evaluation_service),
):
    """Delete summative evaluation and all its scores (Admin only)."""
    return await service.delete_evaluation(evaluation_id)


# ===== STUDENT SCORES =====


@router.post(
    "/{evaluation_id}/scores",
    response_model=SummativeScoreResponse,
    summary="Add student to evaluation",
)
async def add_student_to_evaluation(
    evaluation_id: int,
    student_data: AddStudentToEvaluation,
    current_user: dict = Depends(instructor_required),
    service: SummativeEvaluationService = Depends(get_summative_evaluation_service),
):
    """Add a student to the evaluation (maximum 6 per evaluation)."""
    return await service.add_student(evaluation_id, student_data, current_user)


@router.patch(
    "/{evaluation_id}/scores",
    response_model=SummativeScoreResponse,
    summary="Update student score",
)
async def update_student_score(
    evaluation_id: int,
    score_data: SummativeScoreUpdate,
    current_user: dict = Depends(instructor_required),
    service: SummativeEvaluationService = Depends(get_summative_evaluation_service),
):
    """
    Update a student's rubric scores and critical criteria.

    - **score_id** or **student_id**: Identifies the score row
    - **grading_complete**: true stores the final pass/fail decision
    """
    return await service.update_score(evaluation_id, score_data, current_user)


@router.delete(
    "/{evaluation_id}/scores",
    response_model=MessageResponse,
    summary="Remove student from evaluation",
)
async def remove_student_from_evaluation(
    evaluation_id: int,
    score_id: Optional[int] = Query(None, description="Score row ID"),
    student_id: Optional[int] = Query(None, description="Student ID"),
    current_user: dict = Depends(instructor_required),
    service: SummativeEvaluationService = Depends(get_summative_evaluation_service),
):
    """Remove a student's score row from the evaluation."""
    return await service.remove_student(evaluation_id, score_id, student_id)
