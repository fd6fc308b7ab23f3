"""
HTTP tests for /api/trips

Tests cover:
- Create, read, update, delete
- Listing: pagination, sorting, destination filter, counts
- Ownership scoping
- Error shapes
"""
import pytest


def _trip_body(**overrides):
    body = {
        "name": "Weekend in Porto",
        "destination": "Porto",
        "start_date": "2026-07-10",
        "end_date": "2026-07-12",
        "number_of_people": 2,
    }
    body.update(overrides)
    return body


@pytest.fixture
def created(client, auth_headers):
    return client.post("/api/trips", json=_trip_body(), headers=auth_headers).json()["trip"]


class TestCreate:
    def test_create(self, client, auth_headers):
        response = client.post("/api/trips", json=_trip_body(), headers=auth_headers)
        assert response.status_code == 201
        trip = response.json()["trip"]
        assert trip["destination"] == "Porto"
        assert trip["start_date"] == "2026-07-10"

    def test_end_date_must_follow_start_date(self, client, auth_headers):
        response = client.post("/api/trips", json=_trip_body(end_date="2026-07-10"), headers=auth_headers)
        assert response.status_code == 422
        assert response.json() == {"errors": [{"field": "end_date", "reason": "must be after start date"}]}

    def test_people_must_be_positive(self, client, auth_headers):
        response = client.post("/api/trips", json=_trip_body(number_of_people=0), headers=auth_headers)
        assert response.status_code == 422
        assert response.json()["errors"][0]["field"] == "number_of_people"

    def test_name_length(self, client, auth_headers):
        response = client.post("/api/trips", json=_trip_body(name="x" * 256), headers=auth_headers)
        assert response.status_code == 422


class TestReadUpdateDelete:
    def test_detail_view(self, client, auth_headers, created):
        client.post(f"/api/trips/{created['id']}/notes", json={"content": "Port tasting"}, headers=auth_headers)

        response = client.get(f"/api/trips/{created['id']}", headers=auth_headers)

        trip = response.json()["trip"]
        assert [n["content"] for n in trip["notes"]] == ["Port tasting"]
        assert trip["generated_plans"] == []

    def test_partial_update(self, client, auth_headers, created):
        response = client.patch(f"/api/trips/{created['id']}", json={"name": "Porto again"}, headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["trip"]["name"] == "Porto again"
        assert response.json()["trip"]["destination"] == "Porto"

    def test_update_checks_merged_dates(self, client, auth_headers, created):
        response = client.patch(f"/api/trips/{created['id']}", json={"end_date": "2026-07-01"}, headers=auth_headers)
        assert response.status_code == 422
        assert response.json() == {"errors": [{"field": "end_date", "reason": "must be after start date"}]}

    def test_delete_removes_notes(self, client, auth_headers, created):
        client.post(f"/api/trips/{created['id']}/notes", json={"content": "x"}, headers=auth_headers)

        assert client.delete(f"/api/trips/{created['id']}", headers=auth_headers).status_code == 200
        assert client.get(f"/api/trips/{created['id']}", headers=auth_headers).status_code == 404
        assert client.get(f"/api/trips/{created['id']}/notes", headers=auth_headers).status_code == 404


class TestOwnership:
    @pytest.mark.parametrize("method", ["get", "delete"])
    def test_other_users_trip_is_not_found(self, client, other_headers, created, method):
        response = getattr(client, method)(f"/api/trips/{created['id']}", headers=other_headers)
        assert response.status_code == 404
        assert response.json() == {"error": "Trip not found"}

    def test_update_by_other_user(self, client, other_headers, created):
        response = client.patch(f"/api/trips/{created['id']}", json={"name": "Mine"}, headers=other_headers)
        assert response.status_code == 404

    def test_malformed_id_is_not_found(self, client, auth_headers):
        response = client.get("/api/trips/not-an-id", headers=auth_headers)
        assert response.status_code == 404
        assert response.json() == {"error": "Trip not found"}

    def test_list_only_shows_own_trips(self, client, other_headers, created):
        response = client.get("/api/trips", headers=other_headers)
        assert response.json()["trips"] == []


class TestList:
    @pytest.fixture
    def three_trips(self, client, auth_headers):
        for destination, start, end in [
            ("Rome", "2026-09-01", "2026-09-04"),
            ("Porto", "2026-07-10", "2026-07-12"),
            ("Paris", "2026-08-01", "2026-08-03"),
        ]:
            body = _trip_body(name=f"{destination} trip", destination=destination, start_date=start, end_date=end)
            client.post("/api/trips", json=body, headers=auth_headers)

    def test_sorted_by_start_date(self, client, auth_headers, three_trips):
        asc = client.get("/api/trips", headers=auth_headers).json()["trips"]
        desc = client.get("/api/trips?sort_order=desc", headers=auth_headers).json()["trips"]
        assert [t["destination"] for t in asc] == ["Porto", "Paris", "Rome"]
        assert [t["destination"] for t in desc] == ["Rome", "Paris", "Porto"]

    def test_pagination(self, client, auth_headers, three_trips):
        body = client.get("/api/trips?page=2&per_page=2", headers=auth_headers).json()
        assert [t["destination"] for t in body["trips"]] == ["Rome"]
        assert body["pagination"] == {"current_page": 2, "total_pages": 2, "total_count": 3, "per_page": 2}

    def test_destination_filter_is_case_insensitive(self, client, auth_headers, three_trips):
        body = client.get("/api/trips?destination=pa", headers=auth_headers).json()
        assert [t["destination"] for t in body["trips"]] == ["Paris"]

    def test_list_view_has_counts(self, client, auth_headers, created):
        client.post(f"/api/trips/{created['id']}/notes", json={"content": "one"}, headers=auth_headers)
        trip = client.get("/api/trips", headers=auth_headers).json()["trips"][0]
        assert trip["notes_count"] == 1
        assert trip["generated_plans_count"] == 0

    @pytest.mark.parametrize("query", ["per_page=0", "per_page=101", "page=0", "sort_order=sideways"])
    def test_invalid_query(self, client, auth_headers, query):
        response = client.get(f"/api/trips?{query}", headers=auth_headers)
        assert response.status_code == 422
        assert "errors" in response.json()
