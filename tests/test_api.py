"""
Test: HTTP surface - routing, role checks and response shapes.
"""
import pytest
from fastapi.testclient import TestClient
from jose import jwt

from src.api.endpoints.summative_evaluations import get_summative_evaluation_service
from src.auth.permissions import get_current_user
from src.core.config import settings
from src.main import create_app

BASE = f"{settings.API_V1_STR}/summative-evaluations"


@pytest.fixture
def app(service):
    app = create_app()
    app.dependency_overrides[get_summative_evaluation_service] = lambda: service
    yield app
    app.dependency_overrides.clear()


def client_as(app, role, user_id=10):
    """TestClient whose requests are authenticated as a lab user with the given role."""
    app.dependency_overrides[get_current_user] = lambda: {
        "id": user_id,
        "email": f"{role}@example.com",
        "role": role,
        "is_active": True,
    }
    return TestClient(app)


class TestAuthentication:
    def test_missing_token(self, app):
        response = TestClient(app).get(f"{BASE}/scenarios")
        assert response.status_code == 401

    def test_invalid_token(self, app):
        response = TestClient(app).get(
            f"{BASE}/scenarios", headers={"Authorization": "Bearer not-a-jwt"}
        )
        assert response.status_code == 401

    def test_token_signed_with_other_secret(self, app):
        token = jwt.encode({"sub": "1"}, "other-secret", algorithm=settings.ALGORITHM)
        response = TestClient(app).get(f"{BASE}/scenarios", cookies={"access_token": token})
        assert response.status_code == 401

    def test_inactive_user(self, app):
        app.dependency_overrides[get_current_user] = lambda: {
            "id": 1, "email": "x@example.com", "role": "admin", "is_active": False
        }
        response = TestClient(app).get(f"{BASE}/scenarios")
        assert response.status_code == 403


class TestRoleChecks:
    def test_guest_cannot_grade(self, app):
        response = client_as(app, "guest").get(f"{BASE}/scenarios")
        assert response.status_code == 403

    def test_instructor_cannot_create(self, app, evaluation_payload):
        response = client_as(app, "instructor").post(f"{BASE}/", json=evaluation_payload)
        assert response.status_code == 403

    def test_lead_instructor_cannot_delete(self, app, evaluation_payload):
        client = client_as(app, "lead_instructor")
        created = client.post(f"{BASE}/", json=evaluation_payload).json()
        response = client.delete(f"{BASE}/{created['id']}")
        assert response.status_code == 403

    def test_admin_can_delete(self, app, evaluation_payload):
        client = client_as(app, "admin")
        created = client.post(f"{BASE}/", json=evaluation_payload).json()
        response = client.delete(f"{BASE}/{created['id']}")
        assert response.status_code == 200
        assert client.get(f"{BASE}/{created['id']}").status_code == 404


class TestGradingFlow:
    def test_create_grade_and_list(self, app, evaluation_payload):
        lead = client_as(app, "lead_instructor", user_id=20)
        response = lead.post(f"{BASE}/", json=evaluation_payload)
        assert response.status_code == 200
        evaluation = response.json()
        assert evaluation["rollup_status"] == "in_progress"
        assert evaluation["rollup_label"] == "In Progress"
        assert len(evaluation["scores"]) == 3

        grader = client_as(app, "instructor")
        for student_id in (1, 2, 3):
            response = grader.patch(
                f"{BASE}/{evaluation['id']}/scores",
                json={
                    "student_id": student_id,
                    "leadership_scene_score": 3,
                    "patient_assessment_score": 3,
                    "patient_management_score": 2,
                    "interpersonal_score": 2,
                    "integration_score": 2,
                    "grading_complete": True,
                },
            )
            assert response.status_code == 200
            assert response.json()["total_score"] == 12
            assert response.json()["passed"] is True

        detail = grader.get(f"{BASE}/{evaluation['id']}").json()
        assert detail["rollup_status"] == "all_passed"
        assert detail["status"] == "completed"

        listing = client_as(app, "lead_instructor").get(f"{BASE}/", params={"status": "completed"}).json()
        assert listing["total"] == 1
        assert listing["items"][0]["id"] == evaluation["id"]

    def test_out_of_range_score_rejected(self, app, evaluation_payload):
        created = client_as(app, "lead_instructor").post(f"{BASE}/", json=evaluation_payload).json()
        response = client_as(app, "instructor").patch(
            f"{BASE}/{created['id']}/scores",
            json={"student_id": 1, "integration_score": 4},
        )
        assert response.status_code == 422

    def test_passed_is_not_client_writable(self, app, evaluation_payload):
        created = client_as(app, "lead_instructor").post(f"{BASE}/", json=evaluation_payload).json()
        response = client_as(app, "instructor").patch(
            f"{BASE}/{created['id']}/scores",
            json={"student_id": 1, "passed": True, "leadership_scene_score": 1},
        )
        assert response.status_code == 200
        assert response.json()["passed"] is None

    def test_too_many_students(self, app, evaluation_payload):
        response = client_as(app, "lead_instructor").post(
            f"{BASE}/", json={**evaluation_payload, "student_ids": [1, 2, 3, 4, 5, 6, 7]}
        )
        assert response.status_code == 422

    def test_remove_student(self, app, evaluation_payload):
        created = client_as(app, "lead_instructor").post(f"{BASE}/", json=evaluation_payload).json()
        client = client_as(app, "instructor")
        response = client.delete(f"{BASE}/{created['id']}/scores", params={"student_id": 2})
        assert response.status_code == 200
        assert response.json()["message"] == "Student removed from evaluation"
        assert len(client.get(f"{BASE}/{created['id']}").json()["scores"]) == 2

    def test_add_student(self, app, evaluation_payload):
        created = client_as(app, "lead_instructor").post(f"{BASE}/", json=evaluation_payload).json()
        response = client_as(app, "instructor").post(
            f"{BASE}/{created['id']}/scores", json={"student_id": 4}
        )
        assert response.status_code == 200
        assert response.json()["student"]["first_name"] == "Student4"


class TestPreviewAndScenarios:
    def test_preview(self, app):
        response = client_as(app, "instructor").post(
            f"{BASE}/score-preview",
            json={
                "leadership_scene_score": 3,
                "patient_assessment_score": 3,
                "patient_management_score": 3,
                "interpersonal_score": 3,
                "integration_score": 3,
                "critical_harmful_intervention": True,
            },
        )
        assert response.status_code == 200
        assert response.json() == {
            "total_score": 15,
            "max_score": 15,
            "critical_criteria_failed": True,
            "outcome": "fail",
            "passed": False,
        }

    def test_preview_rejects_string_flag(self, app):
        response = client_as(app, "instructor").post(
            f"{BASE}/score-preview", json={"critical_unprofessional": "yes"}
        )
        assert response.status_code == 422

    def test_scenarios(self, app):
        response = client_as(app, "instructor").get(f"{BASE}/scenarios")
        assert response.status_code == 200
        assert [s["scenario_number"] for s in response.json()] == [1, 2]


def test_health(app):
    response = TestClient(app).get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"
