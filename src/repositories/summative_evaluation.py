"""Summative Evaluation repository for evaluation sessions and student scores."""

import logging
from typing import List, Optional
from sqlalchemy import select, and_, desc
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from src.models.summative_evaluation import SummativeEvaluation
from src.models.summative_evaluation_score import SummativeEvaluationScore
from src.models.base import utc_now
from src.models.enums import EvaluationLifecycleStatus
from src.schemas.summative_evaluation import (
    SummativeEvaluationCreate, SummativeEvaluationFilterParams
)

logger = logging.getLogger(__name__)


class SummativeEvaluationRepository:
    """Repository for summative evaluation sessions and their scores."""

    def __init__(self, session: AsyncSession):
        self.session = session

    # ===== EVALUATION CRUD =====

    async def create_evaluation(
        self,
        evaluation_data: SummativeEvaluationCreate,
        examiner_email: Optional[str] = None,
        created_by: Optional[int] = None,
    ) -> SummativeEvaluation:
        """Create evaluation session with an empty score row per student."""
        evaluation = SummativeEvaluation(
            scenario_id=evaluation_data.scenario_id,
            cohort_id=evaluation_data.cohort_id,
            internship_id=evaluation_data.internship_id,
            evaluation_date=evaluation_data.evaluation_date,
            start_time=evaluation_data.start_time,
            examiner_name=evaluation_data.examiner_name,
            examiner_email=examiner_email,
            location=evaluation_data.location,
            notes=evaluation_data.notes,
            status=EvaluationLifecycleStatus.IN_PROGRESS,
            created_by=created_by,
        )
        self.session.add(evaluation)
        await self.session.flush()

        for student_id in evaluation_data.student_ids:
            self.session.add(
                SummativeEvaluationScore(
                    evaluation_id=evaluation.id,
                    student_id=student_id,
                    created_by=created_by,
                )
            )

        await self.session.commit()
        return await self.get_evaluation_by_id(evaluation.id)

    async def get_evaluation_by_id(self, evaluation_id: int) -> Optional[SummativeEvaluation]:
        """Get evaluation by ID with scenario, scores and students loaded."""
        query = select(SummativeEvaluation).options(
            selectinload(SummativeEvaluation.scenario),
            selectinload(SummativeEvaluation.scores).selectinload(SummativeEvaluationScore.student),
        ).where(SummativeEvaluation.id == evaluation_id).execution_options(populate_existing=True)

        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def get_evaluations_filtered(
        self, filters: SummativeEvaluationFilterParams
    ) -> List[SummativeEvaluation]:
        """Get evaluations matching stored-column filters, newest exam first."""
        query = select(SummativeEvaluation).options(
            selectinload(SummativeEvaluation.scenario),
            selectinload(SummativeEvaluation.scores).selectinload(SummativeEvaluationScore.student),
        )

        conditions = []

        if filters.cohort_id:
            conditions.append(SummativeEvaluation.cohort_id == filters.cohort_id)

        if filters.internship_id:
            conditions.append(SummativeEvaluation.internship_id == filters.internship_id)

        if filters.student_id:
            student_evaluations = select(SummativeEvaluationScore.evaluation_id).where(
                SummativeEvaluationScore.student_id == filters.student_id
            )
            conditions.append(SummativeEvaluation.id.in_(student_evaluations))

        if conditions:
            query = query.where(and_(*conditions))

        query = query.order_by(desc(SummativeEvaluation.evaluation_date), desc(SummativeEvaluation.id))

        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def delete_evaluation(self, evaluation_id: int) -> bool:
        """Delete evaluation and all its scores."""
        evaluation = await self.get_evaluation_by_id(evaluation_id)
        if not evaluation:
            return False

        await self.session.delete(evaluation)
        await self.session.commit()
        return True

    # ===== SCORE OPERATIONS =====

    async def get_score(
        self,
        evaluation_id: int,
        score_id: Optional[int] = None,
        student_id: Optional[int] = None,
    ) -> Optional[SummativeEvaluationScore]:
        """Get a score row of an evaluation by score ID or student ID."""
        conditions = [SummativeEvaluationScore.evaluation_id == evaluation_id]
        if score_id is not None:
            conditions.append(SummativeEvaluationScore.id == score_id)
        elif student_id is not None:
            conditions.append(SummativeEvaluationScore.student_id == student_id)
        else:
            return None

        query = select(SummativeEvaluationScore).options(
            selectinload(SummativeEvaluationScore.student)
        ).where(and_(*conditions))

        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def add_score(
        self, evaluation_id: int, student_id: int, created_by: Optional[int] = None
    ) -> SummativeEvaluationScore:
        """Add an empty score row for a student."""
        score = SummativeEvaluationScore(
            evaluation_id=evaluation_id,
            student_id=student_id,
            created_by=created_by,
        )
        self.session.add(score)
        await self.session.commit()

        await self.sync_evaluation_status(evaluation_id)
        return await self.get_score(evaluation_id, score_id=score.id)

    async def save_score(self, score: SummativeEvaluationScore) -> SummativeEvaluationScore:
        """Persist changes made to a score row."""
        score.updated_at = utc_now()
        await self.session.commit()

        await self.sync_evaluation_status(score.evaluation_id)
        return await self.get_score(score.evaluation_id, score_id=score.id)

    async def delete_score(self, score: SummativeEvaluationScore) -> None:
        """Remove a student's score row from its evaluation."""
        evaluation_id = score.evaluation_id
        await self.session.delete(score)
        await self.session.commit()

        await self.sync_evaluation_status(evaluation_id)

    async def sync_evaluation_status(self, evaluation_id: int) -> Optional[SummativeEvaluation]:
        """Recompute stored lifecycle status after score changes."""
        evaluation = await self.get_evaluation_by_id(evaluation_id)
        if not evaluation:
            return None

        if evaluation.sync_lifecycle_status():
            await self.session.commit()
            logger.info(f"Summative evaluation {evaluation_id} status changed to {evaluation.status.value}")
        return evaluation
