"""Summative Evaluation service - session setup, grading workflow and listing."""

import logging
from typing import Any, Dict, List, Optional

from fastapi import HTTPException, status

from src.core.config import settings
from src.core.exceptions import (
    BusinessLogicError,
    EvaluationNotFoundError,
    ScenarioNotFoundError,
    ScoreNotFoundError,
)
from src.models.summative_evaluation_score import SummativeEvaluationScore
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
from src.utils.messages import get_message
from src.utils.summative_scoring import (
    CRITICAL_CRITERIA_FIELDS,
    MAX_TOTAL_SCORE,
    SCORE_CATEGORY_FIELDS,
    EvaluationRollupStatus,
    ScoreOutcome,
    calculate_total_score,
    compute_critical_failed,
    determine_outcome,
)

logger = logging.getLogger(__name__)


class SummativeEvaluationService:
    """Service for summative evaluation sessions and student grading."""

    def __init__(
        self,
        evaluation_repo: SummativeEvaluationRepository,
        scenario_repo: SummativeScenarioRepository,
        student_repo: StudentRepository,
        pass_threshold: int = None,
        max_students: int = None,
    ):
        self.evaluation_repo = evaluation_repo
        self.scenario_repo = scenario_repo
        self.student_repo = student_repo
        self.pass_threshold = pass_threshold if pass_threshold is not None else settings.SUMMATIVE_PASS_THRESHOLD
        self.max_students = max_students if max_students is not None else settings.SUMMATIVE_MAX_STUDENTS

    def _to_response(self, evaluation) -> SummativeEvaluationResponse:
        """Convert evaluation model to response with derived rollup status."""
        return SummativeEvaluationResponse.model_validate(evaluation)

    async def _get_evaluation_or_404(self, evaluation_id: int):
        evaluation = await self.evaluation_repo.get_evaluation_by_id(evaluation_id)
        if not evaluation:
            raise EvaluationNotFoundError(evaluation_id)
        return evaluation

    async def _ensure_students_exist(self, student_ids: List[int]) -> None:
        existing = await self.student_repo.get_existing_ids(student_ids)
        missing = [student_id for student_id in student_ids if student_id not in existing]
        if missing:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=get_message(
                    "student", "not_found_with_ids",
                    student_ids=", ".join(str(student_id) for student_id in missing)
                ),
            )

    # ===== SCENARIOS =====

    async def list_scenarios(self) -> List[SummativeScenarioResponse]:
        """Get active summative scenarios."""
        scenarios = await self.scenario_repo.get_active()
        return [SummativeScenarioResponse.model_validate(s) for s in scenarios]

    # ===== EVALUATION SESSIONS =====

    async def create_evaluation(
        self, evaluation_data: SummativeEvaluationCreate, current_user: Dict[str, Any]
    ) -> SummativeEvaluationResponse:
        """Create evaluation session and a score row for each selected student."""
        if len(evaluation_data.student_ids) > self.max_students:
            raise BusinessLogicError(
                get_message("evaluation", "max_students", max_students=self.max_students)
            )

        scenario = await self.scenario_repo.get_by_id(evaluation_data.scenario_id)
        if not scenario:
            raise ScenarioNotFoundError(evaluation_data.scenario_id)

        await self._ensure_students_exist(evaluation_data.student_ids)

        examiner_email = evaluation_data.examiner_email or current_user.get("email")
        evaluation = await self.evaluation_repo.create_evaluation(
            evaluation_data, examiner_email, current_user.get("id")
        )

        logger.info(
            f"Summative evaluation {evaluation.id} created with "
            f"{len(evaluation_data.student_ids)} students by user {current_user.get('id')}"
        )
        return self._to_response(evaluation)

    async def get_evaluation(self, evaluation_id: int) -> SummativeEvaluationResponse:
        """Get evaluation by ID with scenario and scores."""
        evaluation = await self._get_evaluation_or_404(evaluation_id)
        return self._to_response(evaluation)

    async def list_evaluations(
        self, filters: SummativeEvaluationFilterParams
    ) -> BaseListResponse[SummativeEvaluationResponse]:
        """
        Get evaluations filtered by cohort, internship, student and derived status.

        The derived status is not stored, so status filtering and pagination
        happen after loading the matching evaluations.
        """
        evaluations = await self.evaluation_repo.get_evaluations_filtered(filters)
        items = [self._to_response(evaluation) for evaluation in evaluations]

        if filters.status == "completed":
            finished = EvaluationRollupStatus.finished_values()
            items = [item for item in items if item.rollup_status in finished]
        elif filters.status:
            items = [item for item in items if item.rollup_status == filters.status]

        return BaseListResponse[SummativeEvaluationResponse].paginate(items, filters.page, filters.size)

    async def delete_evaluation(self, evaluation_id: int) -> MessageResponse:
        """Delete evaluation and all its scores."""
        success = await self.evaluation_repo.delete_evaluation(evaluation_id)
        if not success:
            raise EvaluationNotFoundError(evaluation_id)

        logger.info(f"Summative evaluation {evaluation_id} deleted")
        return MessageResponse(message=get_message("evaluation", "deleted"))

    # ===== STUDENTS IN AN EVALUATION =====

    async def add_student(
        self,
        evaluation_id: int,
        student_data: AddStudentToEvaluation,
        current_user: Dict[str, Any],
    ) -> SummativeScoreResponse:
        """Add a student to an evaluation by creating an empty score row."""
        evaluation = await self._get_evaluation_or_404(evaluation_id)

        if any(score.student_id == student_data.student_id for score in evaluation.scores):
            raise BusinessLogicError(get_message("evaluation", "student_already_added"))

        if len(evaluation.scores) >= self.max_students:
            raise BusinessLogicError(
                get_message("evaluation", "max_students", max_students=self.max_students)
            )

        await self._ensure_students_exist([student_data.student_id])

        score = await self.evaluation_repo.add_score(
            evaluation_id, student_data.student_id, current_user.get("id")
        )
        return SummativeScoreResponse.model_validate(score)

    async def remove_student(
        self,
        evaluation_id: int,
        score_id: Optional[int] = None,
        student_id: Optional[int] = None,
    ) -> MessageResponse:
        """Remove a student's score row from an evaluation."""
        if score_id is None and student_id is None:
            raise BusinessLogicError(get_message("score", "identifier_required"))

        await self._get_evaluation_or_404(evaluation_id)
        score = await self.evaluation_repo.get_score(evaluation_id, score_id, student_id)
        if not score:
            raise ScoreNotFoundError()

        await self.evaluation_repo.delete_score(score)
        return MessageResponse(message=get_message("evaluation", "student_removed"))

    # ===== GRADING =====

    def apply_score_changes(
        self,
        score: SummativeEvaluationScore,
        changes: Dict[str, Any],
        graded_by: Optional[int] = None,
    ) -> None:
        """
        Apply a partial update to a score row and keep derived fields consistent.

        Args:
            score: Score row to mutate
            changes: Fields explicitly sent by the grader
            graded_by: Lab user ID recorded when grading is completed

        Rules:
            - The aggregate critical flag is the OR of the three specific flags.
              An explicit aggregate of true also sets it; an explicit false
              cannot clear it while a specific flag is failed.
            - Total is recomputed on every write.
            - Completing grading stores the pass/fail decision; reopening clears it.
            - Editing an already completed score refreshes its decision.
        """
        changes = dict(changes)
        grading_complete = changes.pop("grading_complete", None)
        explicit_critical_failed = changes.pop("critical_criteria_failed", None)
        critical_flags_changed = False

        for field, value in changes.items():
            if field in CRITICAL_CRITERIA_FIELDS:
                if value is None:
                    continue
                critical_flags_changed = True
            setattr(score, field, value)

        if critical_flags_changed or explicit_critical_failed is not None:
            # An explicit aggregate can raise the flag but never clear a failed criterion
            score.recalculate_critical_failed()
            if explicit_critical_failed:
                score.critical_criteria_failed = True

        score.recalculate_total()

        if grading_complete is True:
            score.complete_grading(graded_by, self.pass_threshold)
        elif grading_complete is False:
            score.reopen_grading()
        elif score.grading_complete:
            score.passed = score.preview_outcome(self.pass_threshold) == ScoreOutcome.PASS

    async def update_score(
        self,
        evaluation_id: int,
        score_data: SummativeScoreUpdate,
        current_user: Dict[str, Any],
    ) -> SummativeScoreResponse:
        """Update one student's rubric scores, critical criteria or completion."""
        if score_data.score_id is None and score_data.student_id is None:
            raise BusinessLogicError(get_message("score", "identifier_required"))

        await self._get_evaluation_or_404(evaluation_id)
        score = await self.evaluation_repo.get_score(
            evaluation_id, score_data.score_id, score_data.student_id
        )
        if not score:
            raise ScoreNotFoundError()

        was_complete = score.grading_complete
        changes = score_data.model_dump(exclude_unset=True, exclude={"score_id", "student_id"})
        self.apply_score_changes(score, changes, current_user.get("id"))

        score.updated_by = current_user.get("id")
        score = await self.evaluation_repo.save_score(score)

        if score.grading_complete and not was_complete:
            logger.info(
                f"Score {score.id} in evaluation {evaluation_id} graded: "
                f"total={score.total_score} passed={score.passed}"
            )
        elif was_complete and not score.grading_complete:
            logger.info(f"Score {score.id} in evaluation {evaluation_id} reopened")

        return SummativeScoreResponse.model_validate(score)

    def preview_score(self, preview_data: ScorePreviewRequest) -> ScorePreviewResponse:
        """Compute live total and outcome for unsaved grading form values."""
        total = calculate_total_score(
            [getattr(preview_data, field) for field in SCORE_CATEGORY_FIELDS]
        )
        critical_failed = compute_critical_failed(
            *(bool(getattr(preview_data, field)) for field in CRITICAL_CRITERIA_FIELDS)
        ) or bool(preview_data.critical_criteria_failed)

        return ScorePreviewResponse(
            total_score=total,
            max_score=MAX_TOTAL_SCORE,
            critical_criteria_failed=critical_failed,
            outcome=determine_outcome(total, critical_failed, self.pass_threshold),
        )
