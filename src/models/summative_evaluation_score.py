"""Summative Evaluation Score model - one student's rubric result."""

from typing import List, Optional, TYPE_CHECKING
from datetime import datetime, time
from sqlmodel import Field, SQLModel, Relationship, UniqueConstraint, Column
from sqlalchemy import DateTime, Integer, ForeignKey

from .base import BaseModel, utc_now
from ..utils.summative_scoring import (
    PASS_THRESHOLD,
    ScoreOutcome,
    calculate_total_score,
    compute_critical_failed,
    determine_outcome,
)

if TYPE_CHECKING:
    from .summative_evaluation import SummativeEvaluation
    from .student import Student


class SummativeEvaluationScore(BaseModel, SQLModel, table=True):
    """Rubric scores, critical criteria and result for a student in an evaluation."""

    __tablename__ = "summative_evaluation_scores"
    __table_args__ = (
        UniqueConstraint('evaluation_id', 'student_id', name='uq_summative_evaluation_student'),
    )

    id: int = Field(primary_key=True)
    evaluation_id: int = Field(
        sa_column=Column(
            Integer,
            ForeignKey("summative_evaluations.id", ondelete="CASCADE"),
            nullable=False,
            index=True
        )
    )
    student_id: int = Field(
        sa_column=Column(
            Integer,
            ForeignKey("students.id", ondelete="CASCADE"),
            nullable=False,
            index=True
        )
    )

    # Rubric categories, 0-3 each, null until graded
    leadership_scene_score: Optional[int] = Field(default=None, description="Leadership and Scene Management")
    patient_assessment_score: Optional[int] = Field(default=None, description="Patient Assessment")
    patient_management_score: Optional[int] = Field(default=None, description="Patient Management")
    interpersonal_score: Optional[int] = Field(default=None, description="Interpersonal Relations")
    integration_score: Optional[int] = Field(default=None, description="Field Impression and Transport Decision")

    total_score: int = Field(default=0, nullable=False)

    # Critical criteria - any failure is an automatic fail
    critical_criteria_failed: bool = Field(default=False)
    critical_fails_mandatory: bool = Field(default=False)
    critical_harmful_intervention: bool = Field(default=False)
    critical_unprofessional: bool = Field(default=False)
    critical_criteria_notes: Optional[str] = Field(default=None, max_length=2000)

    # None until grading is complete
    passed: Optional[bool] = Field(default=None)

    start_time: Optional[time] = Field(default=None)
    end_time: Optional[time] = Field(default=None)

    examiner_notes: Optional[str] = Field(default=None, max_length=4000)
    feedback_provided: Optional[str] = Field(default=None, max_length=4000)

    grading_complete: bool = Field(default=False, index=True)
    graded_at: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=True))
    graded_by: Optional[int] = Field(default=None, foreign_key="lab_users.id")

    # Relationships
    evaluation: "SummativeEvaluation" = Relationship(back_populates="scores")
    student: "Student" = Relationship()

    def __repr__(self) -> str:
        return f"<SummativeEvaluationScore(id={self.id}, evaluation_id={self.evaluation_id}, total={self.total_score}, passed={self.passed})>"

    @property
    def category_scores(self) -> List[Optional[int]]:
        """The five rubric category scores in rubric order."""
        return [
            self.leadership_scene_score,
            self.patient_assessment_score,
            self.patient_management_score,
            self.interpersonal_score,
            self.integration_score,
        ]

    def recalculate_total(self) -> int:
        """Recalculate total_score from the category scores."""
        self.total_score = calculate_total_score(self.category_scores)
        return self.total_score

    def recalculate_critical_failed(self) -> bool:
        """Recompute the aggregate critical flag from the three specific flags."""
        self.critical_criteria_failed = compute_critical_failed(
            self.critical_fails_mandatory,
            self.critical_harmful_intervention,
            self.critical_unprofessional,
        )
        return self.critical_criteria_failed

    def preview_outcome(self, threshold: int = PASS_THRESHOLD) -> ScoreOutcome:
        """Live pass/fail from the current values, without storing it."""
        return determine_outcome(
            calculate_total_score(self.category_scores),
            self.critical_criteria_failed,
            threshold,
        )

    def complete_grading(self, graded_by: Optional[int] = None, threshold: int = PASS_THRESHOLD) -> None:
        """
        Mark grading complete and store the final pass/fail decision.

        Grader and time are stamped on the first completion only; completing
        again just refreshes the decision.
        """
        self.recalculate_total()
        self.passed = self.preview_outcome(threshold) == ScoreOutcome.PASS
        if not self.grading_complete:
            self.grading_complete = True
            self.graded_at = utc_now()
            self.graded_by = graded_by

    def reopen_grading(self) -> None:
        """Return the score to in-progress and drop the stored decision."""
        self.grading_complete = False
        self.passed = None
        self.graded_at = None
        self.graded_by = None
