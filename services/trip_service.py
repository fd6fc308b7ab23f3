"""
Trip Service

Ownership-scoped trip persistence. Every lookup filters on the requesting
user's id, so a trip that exists but belongs to someone else is reported
exactly like a trip that does not exist.
"""

import re
from datetime import datetime

from pymongo import ASCENDING, DESCENDING, ReturnDocument

from config.database import GENERATED_PLANS, NOTES, TRIPS, database
from config.logging_utils import log_debug, log_success
from models.errors import NotFoundError, ValidationError
from models.generated_plan import GeneratedPlan
from models.note import NoteInDB
from models.pagination import Pagination, TripListQuery
from models.trip import TripCreate, TripInDB, TripUpdate
from models.user import UserResponse
from services.plan_timeouts import mark_timed_out_plans
from services.records import to_object_id


def get_trips_collection():
    """Get the trips collection."""
    return database.get_collection(TRIPS)


def _to_document_fields(data: dict) -> dict:
    """Dates are stored as ISO strings."""
    return {k: v.isoformat() if k in ("start_date", "end_date") else v for k, v in data.items()}


async def _find_owned(user: UserResponse, trip_id: str) -> dict:
    doc = await get_trips_collection().find_one({
        "_id": to_object_id(trip_id, "Trip"),
        "user_id": user.id
    })
    if not doc:
        raise NotFoundError("Trip")
    return doc


async def create_trip(user: UserResponse, data: TripCreate) -> TripInDB:
    """Create a trip owned by the authenticated user."""
    now = datetime.utcnow()
    doc = _to_document_fields(data.model_dump())
    doc.update({"user_id": user.id, "created_at": now, "updated_at": now})

    result = await get_trips_collection().insert_one(doc)
    doc["_id"] = result.inserted_id
    log_success(f"Created trip id={result.inserted_id} for user_id={user.id}", prefix="TRIPS")
    return TripInDB.from_document(doc)


async def get_trip(user: UserResponse, trip_id: str) -> TripInDB:
    """Get a single trip owned by the user."""
    return TripInDB.from_document(await _find_owned(user, trip_id))


async def get_trip_detail(user: UserResponse, trip_id: str) -> TripInDB:
    """Get a trip with its notes (oldest first) and generated plans (newest first)."""
    doc = await _find_owned(user, trip_id)
    trip_key = str(doc["_id"])

    notes_cursor = database.get_collection(NOTES).find({"trip_id": trip_key}).sort("created_at", ASCENDING)
    notes = [NoteInDB.from_document(n) async for n in notes_cursor]

    await mark_timed_out_plans()
    plans_cursor = database.get_collection(GENERATED_PLANS).find({"trip_id": trip_key}).sort("created_at", DESCENDING)
    plans = [GeneratedPlan.from_document(p) async for p in plans_cursor]

    return TripInDB.from_document(
        doc,
        notes=notes,
        generated_plans=plans,
        notes_count=len(notes),
        generated_plans_count=len(plans)
    )


async def list_trips(user: UserResponse, query: TripListQuery) -> tuple[list[TripInDB], Pagination]:
    """List the user's trips sorted by start date, with optional destination filter."""
    filters: dict = {"user_id": user.id}
    destination = (query.destination or "").strip()
    if destination:
        filters["destination"] = {"$regex": re.escape(destination), "$options": "i"}

    collection = get_trips_collection()
    total = await collection.count_documents(filters)
    direction = ASCENDING if query.sort_order == "asc" else DESCENDING

    cursor = (
        collection.find(filters)
        .sort([("start_date", direction), ("_id", direction)])
        .skip((query.page - 1) * query.per_page)
        .limit(query.per_page)
    )

    notes = database.get_collection(NOTES)
    plans = database.get_collection(GENERATED_PLANS)
    trips = []
    async for doc in cursor:
        trip_key = str(doc["_id"])
        trips.append(TripInDB.from_document(
            doc,
            notes_count=await notes.count_documents({"trip_id": trip_key}),
            generated_plans_count=await plans.count_documents({"trip_id": trip_key})
        ))

    log_debug(f"Listed {len(trips)} of {total} trips for user_id={user.id}", prefix="TRIPS")
    return trips, Pagination.build(query.page, query.per_page, total)


async def update_trip(user: UserResponse, trip_id: str, data: TripUpdate) -> TripInDB:
    """Apply a partial update; the resulting date range must still be valid."""
    current = await get_trip(user, trip_id)
    changes = data.model_dump(exclude_unset=True, exclude_none=True)

    start_date = changes.get("start_date", current.start_date)
    end_date = changes.get("end_date", current.end_date)
    if end_date <= start_date:
        raise ValidationError.single("end_date", "must be after start date")

    if not changes:
        return current

    changes = _to_document_fields(changes)
    changes["updated_at"] = datetime.utcnow()
    doc = await get_trips_collection().find_one_and_update(
        {"_id": to_object_id(trip_id, "Trip"), "user_id": user.id},
        {"$set": changes},
        return_document=ReturnDocument.AFTER
    )
    if not doc:
        raise NotFoundError("Trip")
    return TripInDB.from_document(doc)


async def delete_trip(user: UserResponse, trip_id: str) -> None:
    """Delete a trip together with its notes and generated plans."""
    oid = to_object_id(trip_id, "Trip")
    result = await get_trips_collection().delete_one({"_id": oid, "user_id": user.id})
    if result.deleted_count == 0:
        raise NotFoundError("Trip")

    await database.get_collection(NOTES).delete_many({"trip_id": str(oid)})
    await database.get_collection(GENERATED_PLANS).delete_many({"trip_id": str(oid)})
    log_success(f"Deleted trip id={trip_id} with its notes and plans", prefix="TRIPS")
