"""Onboarding, dashboard and admin endpoints."""

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from app.core.config import settings
from app.services.auth import DEMO_EMAIL, DEMO_PASSWORD
from app.stores import SqlComplianceStore

GENERAL = {"gen-1": "No", "gen-2": "No", "gen-3": "Yes", "gen-4": "No", "gen-5": "Yes"}
TECHNOLOGY = {"tech-1": "No", "tech-2": "Yes", "tech-3": "NotApplicable"}


def answers(mapping: dict) -> list:
    return [{"question_key": k, "response": v} for k, v in mapping.items()]


def complete_onboarding(client, headers, industry="Technology", general=GENERAL, specific=TECHNOLOGY):
    assert client.put("/api/onboarding/industry", headers=headers, json={"industry": industry}).status_code == 200
    assert client.post("/api/onboarding/advance", headers=headers).status_code == 200
    assert client.post(
        "/api/onboarding/responses", headers=headers, json={"step": 2, "responses": answers(general)}
    ).status_code == 200
    assert client.post("/api/onboarding/advance", headers=headers).status_code == 200
    assert client.post(
        "/api/onboarding/responses", headers=headers, json={"step": 3, "responses": answers(specific)}
    ).status_code == 200
    response = client.post("/api/onboarding/advance", headers=headers)
    assert response.status_code == 200
    return response.json()


@pytest.mark.api
class TestOnboardingEndpoints:

    def test_requires_authentication(self, client):
        assert client.get("/api/onboarding").status_code == 401

    def test_initial_state(self, client, auth_headers):
        response = client.get("/api/onboarding", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["current_step"] == 1
        assert data["view"] == "/onboarding/step1"
        assert data["is_completed"] is False

    def test_empty_industry_is_rejected(self, client, auth_headers):
        response = client.put("/api/onboarding/industry", headers=auth_headers, json={"industry": ""})

        assert response.status_code == 422
        assert client.get("/api/onboarding", headers=auth_headers).json()["current_step"] == 1

    def test_general_questions(self, client, auth_headers):
        response = client.get("/api/onboarding/questions", headers=auth_headers, params={"step": 2})

        assert response.status_code == 200
        assert [q["question_key"] for q in response.json()] == ["gen-1", "gen-2", "gen-3", "gen-4", "gen-5"]

    def test_question_step_out_of_range(self, client, auth_headers):
        response = client.get("/api/onboarding/questions", headers=auth_headers, params={"step": 1})
        assert response.status_code == 422

    def test_invalid_response_value(self, client, auth_headers):
        response = client.post(
            "/api/onboarding/responses",
            headers=auth_headers,
            json={"step": 2, "responses": [{"question_key": "gen-1", "response": "Maybe"}]},
        )
        assert response.status_code == 422

    def test_full_flow(self, client, auth_headers):
        data = complete_onboarding(client, auth_headers)

        assert data["current_step"] == 4
        assert data["view"] == "/dashboard"
        assert data["is_completed"] is True

        items = client.get("/api/compliance-items", headers=auth_headers).json()
        assert len(items["items"]) == 4
        assert items["progress"] == {"total": 4, "completed": 0, "percentage": 0}

    def test_retreat(self, client, auth_headers):
        client.put("/api/onboarding/industry", headers=auth_headers, json={"industry": "Healthcare"})
        client.post("/api/onboarding/advance", headers=auth_headers)

        response = client.post("/api/onboarding/retreat", headers=auth_headers)

        assert response.json()["current_step"] == 1
        assert response.json()["industry"] == "Healthcare"

    def test_reset(self, client, auth_headers):
        complete_onboarding(client, auth_headers)

        response = client.delete("/api/onboarding", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["current_step"] == 1
        assert client.get("/api/compliance-items", headers=auth_headers).json()["items"] == []


@pytest.mark.api
class TestComplianceItemEndpoints:

    @pytest.fixture(autouse=True)
    def _onboarded(self, client, auth_headers):
        complete_onboarding(client, auth_headers)

    def test_search_and_filter(self, client, auth_headers):
        response = client.get(
            "/api/compliance-items",
            headers=auth_headers,
            params={"filter": "Pending", "search": "information"},
        )

        assert response.status_code == 200
        titles = sorted(i["title"] for i in response.json()["items"])
        assert titles == ["Information Officer Appointment", "Personal Information Impact Assessment"]

    def test_unknown_filter(self, client, auth_headers):
        response = client.get("/api/compliance-items", headers=auth_headers, params={"filter": "Urgent"})
        assert response.status_code == 422

    def test_toggle_round_trip(self, client, auth_headers):
        item = client.get("/api/compliance-items", headers=auth_headers).json()["items"][0]

        first = client.post(f"/api/compliance-items/{item['id']}/toggle", headers=auth_headers)
        assert first.json()["status"] == "Completed"
        assert client.get("/api/compliance-items/progress", headers=auth_headers).json()["percentage"] == 25

        second = client.post(f"/api/compliance-items/{item['id']}/toggle", headers=auth_headers)
        assert second.json()["status"] == "Pending"
        assert client.get("/api/compliance-items/progress", headers=auth_headers).json()["percentage"] == 0

    def test_get_item(self, client, auth_headers):
        item = client.get("/api/compliance-items", headers=auth_headers).json()["items"][0]

        response = client.get(f"/api/compliance-items/{item['id']}", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == item

    def test_missing_item(self, client, auth_headers):
        assert client.get("/api/compliance-items/9999", headers=auth_headers).status_code == 404
        assert client.post("/api/compliance-items/9999/toggle", headers=auth_headers).status_code == 404


@pytest.mark.api
class TestLocalModeEndpoints:

    def test_demo_user_completes_onboarding(self, local_client):
        token = local_client.post(
            "/api/auth/login",
            json={"email": DEMO_EMAIL, "password": DEMO_PASSWORD},
        ).json()["access_token"]
        headers = {"Authorization": f"Bearer {token}"}

        data = complete_onboarding(local_client, headers)

        assert data["view"] == "/dashboard"
        progress = local_client.get("/api/compliance-items/progress", headers=headers).json()
        assert progress == {"total": 4, "completed": 0, "percentage": 0}


@pytest.mark.api
class TestMiscEndpoints:

    def test_industries(self, client):
        response = client.get("/api/industries")

        assert response.status_code == 200
        labels = [i["label"] for i in response.json()]
        assert len(labels) == 11
        assert labels[0] == "Technology"
        assert "Transport & Logistics" in labels

    def test_seed_requires_admin_key(self, client):
        assert client.post("/api/admin/questions/seed").status_code == 422
        response = client.post("/api/admin/questions/seed", headers={"api-key-header": "wrong"})
        assert response.status_code == 403

    def test_seed_is_repeatable(self, client):
        headers = {"api-key-header": settings.ADMIN_API_KEY}

        first = client.post("/api/admin/questions/seed", headers=headers)
        second = client.post("/api/admin/questions/seed", headers=headers)

        assert first.status_code == second.status_code == 200
        assert first.json()["seeded"] == second.json()["seeded"] == 5 + 11 * 3

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["database"] == "connected"

    def test_health_local(self, local_client):
        response = local_client.get("/health")
        assert response.json()["store"] == "local"


@pytest.mark.api
class TestPersistenceErrors:

    def test_database_outage_becomes_notification(self, client, auth_headers, monkeypatch):
        def unavailable(self, user_id):
            raise OperationalError("SELECT 1", {}, Exception("connection refused"))

        monkeypatch.setattr(SqlComplianceStore, "list_items", unavailable)

        response = client.get("/api/compliance-items", headers=auth_headers)

        assert response.status_code == 503
        assert "try again" in response.json()["detail"]

    def test_conflict_becomes_409(self, client, auth_headers, monkeypatch):
        def conflict(self, user_id, item_id, status):
            raise IntegrityError("UPDATE compliance_items", {}, Exception("unique"))

        monkeypatch.setattr(SqlComplianceStore, "set_item_status", conflict)
        complete_onboarding(client, auth_headers)
        item = client.get("/api/compliance-items", headers=auth_headers).json()["items"][0]

        response = client.post(f"/api/compliance-items/{item['id']}/toggle", headers=auth_headers)

        assert response.status_code == 409
