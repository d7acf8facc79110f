"""Summative evaluation scoring rules.

Pure functions over already-validated values. Range checks on sub-scores
happen in the request schemas; nothing here raises for in-domain input.
"""

from enum import Enum
from typing import Iterable, Optional, Protocol, Sequence

PASS_THRESHOLD = 12  # 80% of MAX_TOTAL_SCORE
MAX_CATEGORY_SCORE = 3
MAX_TOTAL_SCORE = 15

SCORE_CATEGORY_FIELDS = (
    "leadership_scene_score",
    "patient_assessment_score",
    "patient_management_score",
    "interpersonal_score",
    "integration_score",
)

CRITICAL_CRITERIA_FIELDS = (
    "critical_fails_mandatory",
    "critical_harmful_intervention",
    "critical_unprofessional",
)


class ScoreOutcome(str, Enum):
    """Result of the pass/fail decision."""
    PASS = "pass"
    FAIL = "fail"


class EvaluationRollupStatus(str, Enum):
    """Status derived from the scores of an evaluation, shown as a badge."""
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    ALL_PASSED = "all_passed"
    SOME_FAILED = "some_failed"
    COMPLETED = "completed"

    @classmethod
    def get_label(cls, status: str) -> str:
        """Get badge label for a rollup status."""
        label_map = {
            cls.PENDING.value: "Pending",
            cls.IN_PROGRESS.value: "In Progress",
            cls.ALL_PASSED.value: "All Passed",
            cls.SOME_FAILED.value: "Some Failed",
            cls.COMPLETED.value: "Completed",
        }
        return label_map.get(status.value if isinstance(status, cls) else status, "Pending")

    @classmethod
    def finished_values(cls):
        """Statuses that count as finished grading in list filters."""
        return [cls.ALL_PASSED, cls.SOME_FAILED, cls.COMPLETED]


class GradedScore(Protocol):
    """Anything carrying the completion state of one student's score."""

    grading_complete: bool
    passed: Optional[bool]


def calculate_total_score(scores: Sequence[Optional[int]]) -> int:
    """Sum the category scores, counting ungraded (None) categories as 0."""
    return sum(score or 0 for score in scores)


def compute_critical_failed(
    fails_mandatory: bool,
    harmful_intervention: bool,
    unprofessional: bool,
) -> bool:
    """Aggregate critical-failure flag: any specific criterion failed."""
    return bool(fails_mandatory or harmful_intervention or unprofessional)


def determine_outcome(
    total: int,
    critical_failed: bool,
    threshold: int = PASS_THRESHOLD,
) -> ScoreOutcome:
    """Pass/fail for a graded score. A critical failure overrides any total."""
    if critical_failed:
        return ScoreOutcome.FAIL
    if total >= threshold:
        return ScoreOutcome.PASS
    return ScoreOutcome.FAIL


def rollup_evaluation_status(scores: Iterable[GradedScore]) -> EvaluationRollupStatus:
    """
    Derive the evaluation-level status from its students' scores.

    Empty score sets are pending. Any ungraded score keeps the evaluation in
    progress. Once all are complete, the status reflects whether everyone
    passed.

    Args:
        scores: Score rows (or schemas) exposing grading_complete and passed

    Returns:
        EvaluationRollupStatus for the evaluation
    """
    scores = list(scores)
    if not scores:
        return EvaluationRollupStatus.PENDING

    if not all(score.grading_complete for score in scores):
        return EvaluationRollupStatus.IN_PROGRESS

    if all(score.passed is True for score in scores):
        return EvaluationRollupStatus.ALL_PASSED
    if any(score.passed is False for score in scores):
        return EvaluationRollupStatus.SOME_FAILED

    # Only reachable if a completed score was stored without a decision
    return EvaluationRollupStatus.COMPLETED
