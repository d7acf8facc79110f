"""Summative Evaluation model - one grading session for up to six students."""

from typing import List, Optional, TYPE_CHECKING
from datetime import date, time
from sqlmodel import Field, SQLModel, Relationship, Column
from sqlalchemy import Enum as SQLAlchemyEnum, Integer, ForeignKey

from .base import BaseModel
from .enums import EvaluationLifecycleStatus
from ..utils.summative_scoring import EvaluationRollupStatus, rollup_evaluation_status

if TYPE_CHECKING:
    from .summative_scenario import SummativeScenario
    from .cohort import Cohort
    from .summative_evaluation_score import SummativeEvaluationScore


class SummativeEvaluation(BaseModel, SQLModel, table=True):
    """Parent evaluation session; scores are owned by it and cascade on delete."""

    __tablename__ = "summative_evaluations"

    id: int = Field(primary_key=True)
    scenario_id: int = Field(
        sa_column=Column(
            Integer,
            ForeignKey("summative_scenarios.id", ondelete="RESTRICT"),
            nullable=False,
            index=True
        )
    )
    cohort_id: Optional[int] = Field(
        default=None,
        sa_column=Column(
            Integer,
            ForeignKey("cohorts.id", ondelete="CASCADE"),
            nullable=True,
            index=True
        )
    )
    # Internship records live in the clinical tracking tables
    internship_id: Optional[int] = Field(default=None, index=True)

    # Exam details
    evaluation_date: date = Field(nullable=False, index=True)
    start_time: Optional[time] = Field(default=None)
    examiner_name: str = Field(max_length=200, nullable=False)
    examiner_email: Optional[str] = Field(default=None, max_length=255)
    location: Optional[str] = Field(default=None, max_length=200)
    notes: Optional[str] = Field(default=None, max_length=2000)

    status: EvaluationLifecycleStatus = Field(
        default=EvaluationLifecycleStatus.IN_PROGRESS,
        sa_column=Column(
            SQLAlchemyEnum(
                EvaluationLifecycleStatus,
                name="summative_evaluation_status",
                values_callable=lambda e: [m.value for m in e]
            ),
            nullable=False,
            default=EvaluationLifecycleStatus.IN_PROGRESS
        )
    )

    # Relationships
    scenario: "SummativeScenario" = Relationship(back_populates="evaluations")
    cohort: Optional["Cohort"] = Relationship()
    scores: List["SummativeEvaluationScore"] = Relationship(
        back_populates="evaluation",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"}
    )

    def __repr__(self) -> str:
        return f"<SummativeEvaluation(id={self.id}, scenario_id={self.scenario_id}, status={self.status})>"

    @property
    def student_count(self) -> int:
        """Get number of students in this evaluation."""
        return len(self.scores) if self.scores else 0

    @property
    def rollup_status(self) -> EvaluationRollupStatus:
        """Status badge derived from the students' scores."""
        return rollup_evaluation_status(self.scores or [])

    def sync_lifecycle_status(self) -> bool:
        """
        Align stored status with grading progress.

        Completed once every score is graded, back to in progress when a score
        is added or reopened. Cancelled evaluations are left untouched.

        Returns:
            True if the status changed
        """
        if self.status == EvaluationLifecycleStatus.CANCELLED:
            return False

        scores = self.scores or []
        all_complete = bool(scores) and all(score.grading_complete for score in scores)
        new_status = (
            EvaluationLifecycleStatus.COMPLETED if all_complete
            else EvaluationLifecycleStatus.IN_PROGRESS
        )
        if new_status == self.status:
            return False

        self.status = new_status
        self.touch()
        return True
