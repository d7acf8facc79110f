"""
Shared fixtures for summative evaluation tests.
Settings are read at import time, so the environment is filled in before any
src module is imported. No database is used; repositories are in-memory doubles.
"""
import os
import tempfile

os.environ.setdefault("PROJECT_NAME", "Summative Evaluations Test")
os.environ.setdefault("SERVICE_NAME", "summative-test")
os.environ.setdefault("POSTGRES_SERVER", "localhost")
os.environ.setdefault("POSTGRES_USER", "test")
os.environ.setdefault("POSTGRES_PASSWORD", "test")
os.environ.setdefault("POSTGRES_DB", "summative_test")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")
os.environ.setdefault("LOG_DIRECTORY", os.path.join(tempfile.gettempdir(), "summative-test-logs"))

from datetime import date

import pytest

from src.models.student import Student
from src.models.summative_evaluation import SummativeEvaluation
from src.models.summative_evaluation_score import SummativeEvaluationScore
from src.models.summative_scenario import SummativeScenario
from src.services.summative_evaluation import SummativeEvaluationService


class InMemoryEvaluationRepository:
    """Stores evaluations in a dict and mirrors the SQL repository's contract."""

    def __init__(self, scenarios, students):
        self.scenarios = scenarios
        self.students = students
        self.evaluations = {}
        self._next_evaluation_id = 1
        self._next_score_id = 1

    def _new_score(self, evaluation_id, student_id, created_by=None):
        score = SummativeEvaluationScore(
            id=self._next_score_id,
            evaluation_id=evaluation_id,
            student_id=student_id,
            created_by=created_by,
        )
        score.student = self.students.get(student_id)
        self._next_score_id += 1
        return score

    async def create_evaluation(self, evaluation_data, examiner_email=None, created_by=None):
        evaluation = SummativeEvaluation(
            id=self._next_evaluation_id,
            scenario_id=evaluation_data.scenario_id,
            cohort_id=evaluation_data.cohort_id,
            internship_id=evaluation_data.internship_id,
            evaluation_date=evaluation_data.evaluation_date,
            start_time=evaluation_data.start_time,
            examiner_name=evaluation_data.examiner_name,
            examiner_email=examiner_email,
            location=evaluation_data.location,
            notes=evaluation_data.notes,
            created_by=created_by,
        )
        evaluation.scenario = self.scenarios.get(evaluation_data.scenario_id)
        self._next_evaluation_id += 1
        for student_id in evaluation_data.student_ids:
            evaluation.scores.append(self._new_score(evaluation.id, student_id, created_by))
        self.evaluations[evaluation.id] = evaluation
        return evaluation

    async def get_evaluation_by_id(self, evaluation_id):
        return self.evaluations.get(evaluation_id)

    async def get_evaluations_filtered(self, filters):
        items = list(self.evaluations.values())
        if filters.cohort_id:
            items = [e for e in items if e.cohort_id == filters.cohort_id]
        if filters.internship_id:
            items = [e for e in items if e.internship_id == filters.internship_id]
        if filters.student_id:
            items = [e for e in items if any(s.student_id == filters.student_id for s in e.scores)]
        return sorted(items, key=lambda e: (e.evaluation_date, e.id), reverse=True)

    async def delete_evaluation(self, evaluation_id):
        return self.evaluations.pop(evaluation_id, None) is not None

    async def get_score(self, evaluation_id, score_id=None, student_id=None):
        evaluation = self.evaluations.get(evaluation_id)
        if not evaluation:
            return None
        for score in evaluation.scores:
            if score_id is not None and score.id == score_id:
                return score
            if score_id is None and student_id is not None and score.student_id == student_id:
                return score
        return None

    async def add_score(self, evaluation_id, student_id, created_by=None):
        evaluation = self.evaluations[evaluation_id]
        score = self._new_score(evaluation_id, student_id, created_by)
        evaluation.scores.append(score)
        evaluation.sync_lifecycle_status()
        return score

    async def save_score(self, score):
        self.evaluations[score.evaluation_id].sync_lifecycle_status()
        return score

    async def delete_score(self, score):
        evaluation = self.evaluations[score.evaluation_id]
        evaluation.scores.remove(score)
        evaluation.sync_lifecycle_status()


class InMemoryScenarioRepository:
    def __init__(self, scenarios):
        self.scenarios = scenarios

    async def get_by_id(self, scenario_id):
        return self.scenarios.get(scenario_id)

    async def get_active(self):
        active = [s for s in self.scenarios.values() if s.is_active]
        return sorted(active, key=lambda s: s.scenario_number)


class InMemoryStudentRepository:
    def __init__(self, students):
        self.students = students

    async def get_existing_ids(self, student_ids):
        return {student_id for student_id in student_ids if student_id in self.students}


@pytest.fixture
def scenarios():
    """Two active scenarios and one retired one."""
    return {
        1: SummativeScenario(id=1, scenario_number=1, title="Medical Emergency - Cardiac", is_active=True),
        2: SummativeScenario(id=2, scenario_number=2, title="Trauma - Multi-System", is_active=True),
        3: SummativeScenario(id=3, scenario_number=2, title="Retired Trauma", is_active=False),
    }


@pytest.fixture
def students():
    """Eight students, enough to exceed the per-evaluation limit."""
    return {
        student_id: Student(id=student_id, first_name=f"Student{student_id}", last_name="Medic", cohort_id=1)
        for student_id in range(1, 9)
    }


@pytest.fixture
def evaluation_repo(scenarios, students):
    return InMemoryEvaluationRepository(scenarios, students)


@pytest.fixture
def service(evaluation_repo, scenarios, students):
    """Service wired to in-memory repositories with the default rules."""
    return SummativeEvaluationService(
        evaluation_repo,
        InMemoryScenarioRepository(scenarios),
        InMemoryStudentRepository(students),
        pass_threshold=12,
        max_students=6,
    )


@pytest.fixture
def instructor():
    return {"id": 10, "email": "instructor@example.com", "role": "instructor", "is_active": True}


@pytest.fixture
def lead_instructor():
    return {"id": 20, "email": "lead@example.com", "role": "lead_instructor", "is_active": True}


@pytest.fixture
def evaluation_payload():
    """Valid create request body for three students."""
    return {
        "scenario_id": 1,
        "cohort_id": 1,
        "evaluation_date": date(2026, 5, 1).isoformat(),
        "examiner_name": "Dr. Rivera",
        "location": "Sim Lab A",
        "student_ids": [1, 2, 3],
    }
