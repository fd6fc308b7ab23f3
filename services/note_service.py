"""Note Service: notes are always reached through a trip owned by the user."""

from datetime import datetime

from pymongo import ASCENDING, ReturnDocument

from config.database import NOTES, database
from models.errors import NotFoundError
from models.note import NoteCreate, NoteInDB, NoteUpdate
from models.user import UserResponse
from services import trip_service
from services.records import to_object_id


def get_notes_collection():
    """Get the notes collection."""
    return database.get_collection(NOTES)


async def list_notes(user: UserResponse, trip_id: str) -> list[NoteInDB]:
    trip = await trip_service.get_trip(user, trip_id)
    cursor = get_notes_collection().find({"trip_id": trip.id}).sort("created_at", ASCENDING)
    return [NoteInDB.from_document(doc) async for doc in cursor]


async def create_note(user: UserResponse, trip_id: str, data: NoteCreate) -> NoteInDB:
    trip = await trip_service.get_trip(user, trip_id)
    now = datetime.utcnow()
    doc = {"trip_id": trip.id, "content": data.content, "created_at": now, "updated_at": now}
    result = await get_notes_collection().insert_one(doc)
    doc["_id"] = result.inserted_id
    return NoteInDB.from_document(doc)


async def update_note(user: UserResponse, trip_id: str, note_id: str, data: NoteUpdate) -> NoteInDB:
    trip = await trip_service.get_trip(user, trip_id)
    doc = await get_notes_collection().find_one_and_update(
        {"_id": to_object_id(note_id, "Note"), "trip_id": trip.id},
        {"$set": {"content": data.content, "updated_at": datetime.utcnow()}},
        return_document=ReturnDocument.AFTER
    )
    if not doc:
        raise NotFoundError("Note")
    return NoteInDB.from_document(doc)


async def delete_note(user: UserResponse, trip_id: str, note_id: str) -> None:
    trip = await trip_service.get_trip(user, trip_id)
    result = await get_notes_collection().delete_one({
        "_id": to_object_id(note_id, "Note"),
        "trip_id": trip.id
    })
    if result.deleted_count == 0:
        raise NotFoundError("Note")
