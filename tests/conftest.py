import asyncio
from datetime import date, timedelta

import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from app import create_app
from config.database import database
from models.preferences import PreferencesUpdate
from models.trip import TripCreate
from models.user import UserCreate
from services import auth_service, preference_service, trip_service


TRIP_START = date(2026, 6, 1)


@pytest.fixture(autouse=True)
def mongo():
    """Bind the application database to a fresh in-memory store for every test."""
    client = AsyncMongoMockClient()
    database.use(client, "tripwise_test")
    yield database.get_database()
    database.client = None
    database.db = None


@pytest.fixture
def user():
    return asyncio.run(auth_service.create_user(UserCreate(email="ana@example.com", password="secret123")))


@pytest.fixture
def other_user():
    return asyncio.run(auth_service.create_user(UserCreate(email="ben@example.com", password="secret123")))


@pytest.fixture
def trip(user):
    """A three day trip for two people."""
    data = TripCreate(
        name="Summer in Lisbon",
        destination="Lisbon",
        start_date=TRIP_START,
        end_date=TRIP_START + timedelta(days=2),
        number_of_people=2,
    )
    return asyncio.run(trip_service.create_trip(user, data))


@pytest.fixture
def preferences(user):
    data = PreferencesUpdate(
        budget="standard",
        accommodation="hotel",
        activities=["cultural", "sightseeing"],
        eating_habits="mix",
    )
    return asyncio.run(preference_service.upsert_preferences(user, data))


@pytest.fixture
def make_content():
    """Build raw plan content that is valid for a trip of the given shape."""
    def build(days=3, people=2, start=TRIP_START, per_person=100.0):
        return {
            "summary": {
                "total_cost_usd": per_person * people,
                "cost_per_person_usd": per_person,
                "duration_days": days,
                "number_of_people": people,
            },
            "daily_itinerary": [
                {
                    "day": i + 1,
                    "date": (start + timedelta(days=i)).isoformat(),
                    "activities": [
                        {
                            "time": "10:00 AM",
                            "name": f"Walking tour {i + 1}",
                            "duration_minutes": 120,
                            "estimated_cost_usd": 40,
                            "estimated_cost_per_person_usd": 20,
                            "rating": 4.5,
                            "description": "Old town highlights",
                        }
                    ],
                    "restaurants": [
                        {
                            "meal": "lunch",
                            "name": "Taberna",
                            "cuisine": "Portuguese",
                            "estimated_cost_per_person_usd": 15,
                            "rating": 4,
                            "google_maps_url": "https://maps.google.com/?q=Taberna",
                        }
                    ],
                }
                for i in range(days)
            ],
        }
    return build


@pytest.fixture
def client():
    with TestClient(create_app(use_lifespan=False)) as test_client:
        yield test_client


def _auth_headers(user_doc_email: str) -> dict:
    user = asyncio.run(auth_service.get_user_by_email(user_doc_email))
    return {"Authorization": f"Bearer {auth_service.create_token_for_user(user)}"}


@pytest.fixture
def auth_headers(user):
    return _auth_headers(user.email)


@pytest.fixture
def other_headers(other_user):
    return _auth_headers(other_user.email)
