"""Summative Evaluation schemas for sessions, student scores and previews."""

from typing import Optional, List, Literal
from datetime import date, datetime, time
from pydantic import BaseModel, Field, ConfigDict, EmailStr, StrictBool, field_validator, computed_field

from .shared import PaginationParams
from .summative_scenario import SummativeScenarioResponse
from ..models.enums import EvaluationLifecycleStatus
from ..utils.sanitize_html import sanitize_optional_text
from ..utils.summative_scoring import EvaluationRollupStatus, ScoreOutcome


# ===== EVALUATION SESSION =====

class SummativeEvaluationBase(BaseModel):
    """Base summative evaluation schema."""
    scenario_id: int = Field(..., description="ID of summative scenario")
    cohort_id: Optional[int] = Field(None, description="ID of cohort being examined")
    internship_id: Optional[int] = Field(None, description="Optional linked internship")
    evaluation_date: date = Field(..., description="Exam date")
    start_time: Optional[time] = Field(None, description="Exam start time")
    examiner_name: str = Field(..., min_length=1, max_length=200, description="Examiner name")
    examiner_email: Optional[EmailStr] = Field(None, description="Examiner email, defaults to the caller")
    location: Optional[str] = Field(None, max_length=200, description="Exam location")
    notes: Optional[str] = Field(None, max_length=2000, description="Session notes")

    @field_validator('examiner_name')
    @classmethod
    def strip_examiner_name(cls, v: str) -> str:
        """Reject blank examiner names."""
        v = v.strip()
        if not v:
            raise ValueError("Examiner name is required")
        return v

    @field_validator('notes')
    @classmethod
    def sanitize_notes(cls, v):
        """Sanitize HTML content in notes field."""
        return sanitize_optional_text(v)


class SummativeEvaluationCreate(SummativeEvaluationBase):
    """Schema for creating an evaluation together with its students' score rows."""
    student_ids: List[int] = Field(
        ..., min_length=1, max_length=6, description="Students to examine (1-6)"
    )

    @field_validator('student_ids')
    @classmethod
    def unique_students(cls, v: List[int]) -> List[int]:
        """Each student can appear only once per evaluation."""
        if len(set(v)) != len(v):
            raise ValueError("Duplicate students in evaluation")
        return v


class AddStudentToEvaluation(BaseModel):
    """Schema for adding a student to an existing evaluation."""
    student_id: int = Field(..., description="ID of student to add")


# ===== STUDENT SCORES =====

class ScoreValues(BaseModel):
    """Rubric scores and critical criteria as entered by the grader."""
    leadership_scene_score: Optional[int] = Field(None, ge=0, le=3, description="Leadership and Scene Management (0-3)")
    patient_assessment_score: Optional[int] = Field(None, ge=0, le=3, description="Patient Assessment (0-3)")
    patient_management_score: Optional[int] = Field(None, ge=0, le=3, description="Patient Management (0-3)")
    interpersonal_score: Optional[int] = Field(None, ge=0, le=3, description="Interpersonal Relations (0-3)")
    integration_score: Optional[int] = Field(None, ge=0, le=3, description="Integration - Field Impression and Transport (0-3)")

    critical_fails_mandatory: Optional[StrictBool] = Field(None, description="Failed to perform required critical interventions")
    critical_harmful_intervention: Optional[StrictBool] = Field(None, description="Performed intervention that could harm patient")
    critical_unprofessional: Optional[StrictBool] = Field(None, description="Demonstrated unprofessional conduct")
    critical_criteria_failed: Optional[StrictBool] = Field(None, description="Any critical criterion failed")


class SummativeScoreUpdate(ScoreValues):
    """
    Partial update of one student's score.

    Only fields present in the request body are applied. The row is identified
    by score_id or student_id.
    """
    score_id: Optional[int] = Field(None, description="ID of score row")
    student_id: Optional[int] = Field(None, description="ID of student in this evaluation")

    critical_criteria_notes: Optional[str] = Field(None, max_length=2000, description="Which critical criteria failed and why")
    start_time: Optional[time] = Field(None, description="Student scenario start time")
    end_time: Optional[time] = Field(None, description="Student scenario end time")
    examiner_notes: Optional[str] = Field(None, max_length=4000, description="Internal examiner notes")
    feedback_provided: Optional[str] = Field(None, max_length=4000, description="Feedback given to the student")
    grading_complete: Optional[StrictBool] = Field(None, description="Finalize grading and store pass/fail")

    @field_validator('critical_criteria_notes', 'examiner_notes', 'feedback_provided')
    @classmethod
    def sanitize_text_fields(cls, v):
        """Sanitize HTML content in free-text fields."""
        return sanitize_optional_text(v)


class ScorePreviewRequest(ScoreValues):
    """Unsaved grading form values to preview."""
    pass


class ScorePreviewResponse(BaseModel):
    """Live total and decision for the grading form."""
    total_score: int
    max_score: int = 15
    critical_criteria_failed: bool
    outcome: ScoreOutcome

    @computed_field
    @property
    def passed(self) -> bool:
        """Whether the preview outcome is a pass."""
        return self.outcome == ScoreOutcome.PASS


class StudentSummary(BaseModel):
    """Minimal student info embedded in score responses."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: str
    last_name: str


class SummativeScoreResponse(BaseModel):
    """Schema for one student's score response."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    evaluation_id: int
    student_id: int
    leadership_scene_score: Optional[int] = None
    patient_assessment_score: Optional[int] = None
    patient_management_score: Optional[int] = None
    interpersonal_score: Optional[int] = None
    integration_score: Optional[int] = None
    total_score: int
    critical_criteria_failed: bool
    critical_fails_mandatory: bool
    critical_harmful_intervention: bool
    critical_unprofessional: bool
    critical_criteria_notes: Optional[str] = None
    passed: Optional[bool] = None
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    examiner_notes: Optional[str] = None
    feedback_provided: Optional[str] = None
    grading_complete: bool
    graded_at: Optional[datetime] = None
    graded_by: Optional[int] = None
    updated_at: Optional[datetime] = None

    student: Optional[StudentSummary] = None


class SummativeEvaluationResponse(BaseModel):
    """Schema for summative evaluation response with scores and derived status."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    scenario_id: int
    cohort_id: Optional[int] = None
    internship_id: Optional[int] = None
    evaluation_date: date
    start_time: Optional[time] = None
    examiner_name: str
    examiner_email: Optional[str] = None
    location: Optional[str] = None
    notes: Optional[str] = None
    status: EvaluationLifecycleStatus
    rollup_status: EvaluationRollupStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    # Relationships
    scenario: Optional[SummativeScenarioResponse] = None
    scores: List[SummativeScoreResponse] = Field(default_factory=list)

    @computed_field
    @property
    def rollup_label(self) -> str:
        """Badge label for the evaluations list."""
        return EvaluationRollupStatus.get_label(self.rollup_status)


# ===== FILTERS =====

class SummativeEvaluationFilterParams(PaginationParams):
    """Filter parameters for summative evaluation listing."""
    cohort_id: Optional[int] = Field(default=None, description="Filter by cohort")
    internship_id: Optional[int] = Field(default=None, description="Filter by internship")
    student_id: Optional[int] = Field(default=None, description="Only evaluations including this student")
    status: Optional[Literal["pending", "in_progress", "completed"]] = Field(
        default=None,
        description="Filter by derived status; completed covers all finished evaluations"
    )
