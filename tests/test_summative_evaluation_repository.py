"""
Test: SQL repository on an async SQLite database - create, grade, status sync,
membership changes, filtered listing and cascade delete.
"""
from datetime import date

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from src.models.cohort import Cohort
from src.models.enums import EvaluationLifecycleStatus, UserRole
from src.models.lab_user import LabUser
from src.models.student import Student
from src.models.summative_evaluation_score import SummativeEvaluationScore
from src.models.summative_scenario import SummativeScenario
from src.repositories.student import StudentRepository
from src.repositories.summative_evaluation import SummativeEvaluationRepository
from src.repositories.summative_scenario import SummativeScenarioRepository
from src.schemas.summative_evaluation import (
    AddStudentToEvaluation,
    SummativeEvaluationCreate,
    SummativeEvaluationFilterParams,
    SummativeScoreUpdate,
)
from src.services.summative_evaluation import SummativeEvaluationService
from src.utils.summative_scoring import EvaluationRollupStatus

PERFECT = dict(
    leadership_scene_score=3,
    patient_assessment_score=3,
    patient_management_score=3,
    interpersonal_score=3,
    integration_score=3,
)


@pytest.fixture
async def db_session():
    """Fresh in-memory SQLite schema per test."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    session_factory = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )
    async with session_factory() as session:
        yield session

    await engine.dispose()


@pytest.fixture
async def seeded(db_session):
    """One cohort, four students, one scenario and one grader."""
    cohort = Cohort(cohort_number=14, program_abbreviation="PM")
    db_session.add(cohort)
    await db_session.flush()

    students = [
        Student(first_name=f"Student{n}", last_name="Medic", cohort_id=cohort.id)
        for n in range(1, 5)
    ]
    scenario = SummativeScenario(scenario_number=1, title="Medical Emergency - Cardiac")
    grader = LabUser(email="grader@example.com", name="Grader", role=UserRole.INSTRUCTOR)
    db_session.add_all([*students, scenario, grader])
    await db_session.commit()

    return {
        "cohort_id": cohort.id,
        "student_ids": [student.id for student in students],
        "scenario_id": scenario.id,
        "grader": {"id": grader.id, "email": grader.email, "role": "instructor", "is_active": True},
    }


@pytest.fixture
def repo(db_session):
    return SummativeEvaluationRepository(db_session)


@pytest.fixture
def sql_service(db_session, repo):
    return SummativeEvaluationService(
        repo,
        SummativeScenarioRepository(db_session),
        StudentRepository(db_session),
        pass_threshold=12,
        max_students=6,
    )


def create_data(seeded, student_ids, evaluation_date=date(2026, 5, 1)):
    return SummativeEvaluationCreate(
        scenario_id=seeded["scenario_id"],
        cohort_id=seeded["cohort_id"],
        evaluation_date=evaluation_date,
        examiner_name="Dr. Rivera",
        student_ids=student_ids,
    )


class TestCreateAndLoad:
    async def test_create_loads_scenario_and_students(self, repo, seeded):
        evaluation = await repo.create_evaluation(
            create_data(seeded, seeded["student_ids"][:3]), "exam@example.com", 1
        )
        assert evaluation.id is not None
        assert evaluation.status == EvaluationLifecycleStatus.IN_PROGRESS
        assert evaluation.scenario.title == "Medical Emergency - Cardiac"
        assert sorted(score.student.first_name for score in evaluation.scores) == [
            "Student1", "Student2", "Student3"
        ]
        assert evaluation.created_at is not None

    async def test_get_score_by_student_or_row(self, repo, seeded):
        evaluation = await repo.create_evaluation(create_data(seeded, seeded["student_ids"][:2]))
        target = evaluation.scores[0]
        by_row = await repo.get_score(evaluation.id, score_id=target.id)
        by_student = await repo.get_score(evaluation.id, student_id=target.student_id)
        assert by_row.id == by_student.id == target.id
        assert await repo.get_score(evaluation.id) is None
        assert await repo.get_score(evaluation.id + 1, score_id=target.id) is None


class TestGradingLifecycle:
    async def test_full_grading_flow(self, sql_service, repo, seeded):
        grader = seeded["grader"]
        first, second, third, fourth = seeded["student_ids"]

        created = await sql_service.create_evaluation(create_data(seeded, [first, second]), grader)
        assert created.examiner_email == grader["email"]

        for student_id in (first, second):
            score = await sql_service.update_score(
                created.id,
                SummativeScoreUpdate(student_id=student_id, grading_complete=True, **PERFECT),
                grader,
            )
            assert score.passed is True
            assert score.graded_by == grader["id"]
            assert score.graded_at is not None

        evaluation = await repo.get_evaluation_by_id(created.id)
        assert evaluation.status == EvaluationLifecycleStatus.COMPLETED
        assert evaluation.rollup_status == EvaluationRollupStatus.ALL_PASSED

        await sql_service.add_student(created.id, AddStudentToEvaluation(student_id=third), grader)
        evaluation = await repo.get_evaluation_by_id(created.id)
        assert evaluation.status == EvaluationLifecycleStatus.IN_PROGRESS
        assert len(evaluation.scores) == 3

        await sql_service.remove_student(created.id, student_id=third)
        evaluation = await repo.get_evaluation_by_id(created.id)
        assert evaluation.status == EvaluationLifecycleStatus.COMPLETED
        assert len(evaluation.scores) == 2

        await sql_service.update_score(
            created.id, SummativeScoreUpdate(student_id=first, grading_complete=False), grader
        )
        evaluation = await repo.get_evaluation_by_id(created.id)
        assert evaluation.status == EvaluationLifecycleStatus.IN_PROGRESS
        reopened = await repo.get_score(created.id, student_id=first)
        assert reopened.passed is None
        assert reopened.graded_by is None

        assert fourth not in [score.student_id for score in evaluation.scores]

    async def test_critical_failure_persists_as_fail(self, sql_service, repo, seeded):
        grader = seeded["grader"]
        student_id = seeded["student_ids"][0]
        created = await sql_service.create_evaluation(create_data(seeded, [student_id]), grader)

        await sql_service.update_score(
            created.id,
            SummativeScoreUpdate(student_id=student_id, critical_harmful_intervention=True, **PERFECT),
            grader,
        )
        await sql_service.update_score(
            created.id,
            SummativeScoreUpdate(student_id=student_id, critical_criteria_failed=False, grading_complete=True),
            grader,
        )

        stored = await repo.get_score(created.id, student_id=student_id)
        assert stored.total_score == 15
        assert stored.critical_criteria_failed is True
        assert stored.passed is False
        evaluation = await repo.get_evaluation_by_id(created.id)
        assert evaluation.rollup_status == EvaluationRollupStatus.SOME_FAILED


class TestFilteringAndDelete:
    async def test_student_filter_and_ordering(self, repo, seeded):
        first, second, third, _ = seeded["student_ids"]
        older = await repo.create_evaluation(create_data(seeded, [first, second], date(2026, 3, 1)))
        newer = await repo.create_evaluation(create_data(seeded, [first], date(2026, 6, 1)))
        other = await repo.create_evaluation(create_data(seeded, [third], date(2026, 4, 1)))

        everything = await repo.get_evaluations_filtered(SummativeEvaluationFilterParams())
        assert [e.id for e in everything] == [newer.id, other.id, older.id]

        with_first = await repo.get_evaluations_filtered(SummativeEvaluationFilterParams(student_id=first))
        assert [e.id for e in with_first] == [newer.id, older.id]

        by_cohort = await repo.get_evaluations_filtered(
            SummativeEvaluationFilterParams(cohort_id=seeded["cohort_id"] + 1)
        )
        assert by_cohort == []

    async def test_delete_cascades_to_scores(self, repo, db_session, seeded):
        evaluation = await repo.create_evaluation(create_data(seeded, seeded["student_ids"][:3]))

        assert await repo.delete_evaluation(evaluation.id) is True
        assert await repo.get_evaluation_by_id(evaluation.id) is None

        remaining = await db_session.execute(
            select(func.count()).select_from(SummativeEvaluationScore).where(
                SummativeEvaluationScore.evaluation_id == evaluation.id
            )
        )
        assert remaining.scalar_one() == 0
        assert await repo.delete_evaluation(evaluation.id) is False
