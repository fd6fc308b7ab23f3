"""HTTP tests for /api/trips/{trip_id}/generated_plans."""
import asyncio

import pytest

from models.errors import IllegalTransitionError
from services import plan_generation, plan_service
from services.plan_validator import validate_plan_content


@pytest.fixture
def scheduled(monkeypatch):
    """Record scheduled generations instead of running them."""
    calls = []
    monkeypatch.setattr(plan_generation, "schedule_plan_generation", lambda plan_id, user: calls.append(plan_id))
    return calls


@pytest.fixture
def plans_url(trip):
    return f"/api/trips/{trip.id}/generated_plans"


class TestCreate:
    def test_returns_pending_plan_and_schedules_generation(self, client, auth_headers, plans_url, preferences, scheduled):
        response = client.post(plans_url, headers=auth_headers)

        assert response.status_code == 202
        plan = response.json()["generated_plan"]
        assert plan["status"] == "pending"
        assert scheduled == [plan["id"]]

    def test_requires_preferences(self, client, auth_headers, plans_url, scheduled):
        response = client.post(plans_url, headers=auth_headers)

        assert response.status_code == 422
        assert response.json()["errors"][0]["field"] == "preferences"
        assert scheduled == []

    def test_other_users_trip(self, client, other_headers, plans_url, scheduled):
        assert client.post(plans_url, headers=other_headers).status_code == 404


class TestReadAndRate:
    @pytest.fixture
    def completed(self, user, trip, preferences, make_content):
        content = validate_plan_content(make_content())

        async def run():
            plan = await plan_service.create_plan(user, trip.id)
            await plan_service.start_plan(plan.id)
            return await plan_service.complete_plan(plan.id, content)

        return asyncio.run(run())

    @pytest.fixture
    def pending(self, user, trip, preferences):
        return asyncio.run(plan_service.create_plan(user, trip.id))

    def test_detail_has_content(self, client, auth_headers, plans_url, completed):
        plan = client.get(f"{plans_url}/{completed.id}", headers=auth_headers).json()["generated_plan"]
        assert plan["status"] == "completed"
        assert len(plan["content"]["daily_itinerary"]) == 3

    def test_list_has_no_content(self, client, auth_headers, plans_url, completed):
        plans = client.get(plans_url, headers=auth_headers).json()["generated_plans"]
        assert [p["id"] for p in plans] == [completed.id]
        assert "content" not in plans[0]

    def test_rate_completed_plan(self, client, auth_headers, plans_url, completed):
        response = client.patch(f"{plans_url}/{completed.id}", json={"rating": 7}, headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["generated_plan"]["rating"] == 7

    @pytest.mark.parametrize("rating", [0, 11])
    def test_rating_out_of_range(self, client, auth_headers, plans_url, completed, rating):
        response = client.patch(f"{plans_url}/{completed.id}", json={"rating": rating}, headers=auth_headers)
        assert response.status_code == 422
        assert response.json()["errors"][0]["field"] == "rating"

    def test_rate_pending_plan(self, client, auth_headers, plans_url, pending):
        response = client.patch(f"{plans_url}/{pending.id}", json={"rating": 5}, headers=auth_headers)
        assert response.status_code == 422
        assert response.json() == {"errors": [{"field": "rating", "reason": "can only be set for completed plans"}]}

    def test_plan_of_other_trip_is_not_found(self, client, auth_headers, completed):
        body = {"name": "Other", "destination": "Faro", "start_date": "2026-11-01", "end_date": "2026-11-02"}
        other_trip = client.post("/api/trips", json=body, headers=auth_headers).json()["trip"]

        response = client.get(f"/api/trips/{other_trip['id']}/generated_plans/{completed.id}", headers=auth_headers)

        assert response.status_code == 404
        assert response.json() == {"error": "Generated plan not found"}

    def test_other_user_cannot_read_plans(self, client, other_headers, plans_url, completed):
        assert client.get(f"{plans_url}/{completed.id}", headers=other_headers).status_code == 404


def test_illegal_transition_is_internal_error(client, auth_headers, plans_url, monkeypatch):
    async def stale_rate(*args, **kwargs):
        raise IllegalTransitionError("generating", "rate", "plan was modified concurrently")

    monkeypatch.setattr(plan_service, "rate_plan", stale_rate)
    response = client.patch(f"{plans_url}/000000000000000000000000", json={"rating": 5}, headers=auth_headers)

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}
