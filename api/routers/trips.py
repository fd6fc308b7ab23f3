"""
Trips API Router

CRUD for the authenticated user's trips. Trips owned by other users are
reported as not found.
"""

from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query, status

from api.dependencies import get_current_user
from models.pagination import TripListQuery
from models.trip import TripCreate, TripUpdate
from models.user import UserResponse
from serializers.pagination import PaginationSerializer
from serializers.trip import TripSerializer
from services import trip_service


router = APIRouter(prefix="/api/trips", tags=["Trips"])


@router.get("")
async def list_trips(
    page: int = Query(default=1, ge=1),
    per_page: int = Query(default=20, ge=1, le=100),
    sort_order: Literal["asc", "desc"] = Query(default="asc"),
    destination: Optional[str] = Query(default=None, max_length=255),
    current_user: UserResponse = Depends(get_current_user)
):
    """List trips sorted by start date, paginated, optionally filtered by destination."""
    query = TripListQuery(page=page, per_page=per_page, sort_order=sort_order, destination=destination)
    trips, pagination = await trip_service.list_trips(current_user, query)
    return {
        "trips": TripSerializer.render_many(trips, view="list"),
        "pagination": PaginationSerializer.render(pagination)
    }


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_trip(
    trip_data: TripCreate,
    current_user: UserResponse = Depends(get_current_user)
):
    """Create a new trip."""
    trip = await trip_service.create_trip(current_user, trip_data)
    return {"trip": TripSerializer.render(trip)}


@router.get("/{trip_id}")
async def get_trip(
    trip_id: str,
    current_user: UserResponse = Depends(get_current_user)
):
    """Get a trip with its notes and generated plans."""
    trip = await trip_service.get_trip_detail(current_user, trip_id)
    return {"trip": TripSerializer.render(trip, view="detail")}


@router.patch("/{trip_id}")
async def update_trip(
    trip_id: str,
    trip_data: TripUpdate,
    current_user: UserResponse = Depends(get_current_user)
):
    """Update some fields of a trip."""
    trip = await trip_service.update_trip(current_user, trip_id, trip_data)
    return {"trip": TripSerializer.render(trip)}


@router.delete("/{trip_id}")
async def delete_trip(
    trip_id: str,
    current_user: UserResponse = Depends(get_current_user)
):
    """Delete a trip together with its notes and generated plans."""
    await trip_service.delete_trip(current_user, trip_id)
    return {"message": "Trip deleted successfully"}
