"""Notes API Router: notes nested under a trip owned by the user."""

from fastapi import APIRouter, Depends, status

from api.dependencies import get_current_user
from models.note import NoteCreate, NoteUpdate
from models.user import UserResponse
from serializers.note import NoteSerializer
from services import note_service


router = APIRouter(prefix="/api/trips/{trip_id}/notes", tags=["Notes"])


@router.get("")
async def list_notes(trip_id: str, current_user: UserResponse = Depends(get_current_user)):
    notes = await note_service.list_notes(current_user, trip_id)
    return {"notes": NoteSerializer.render_many(notes)}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_note(
    trip_id: str,
    note_data: NoteCreate,
    current_user: UserResponse = Depends(get_current_user)
):
    note = await note_service.create_note(current_user, trip_id, note_data)
    return {"note": NoteSerializer.render(note)}


@router.patch("/{note_id}")
async def update_note(
    trip_id: str,
    note_id: str,
    note_data: NoteUpdate,
    current_user: UserResponse = Depends(get_current_user)
):
    note = await note_service.update_note(current_user, trip_id, note_id, note_data)
    return {"note": NoteSerializer.render(note)}


@router.delete("/{note_id}")
async def delete_note(
    trip_id: str,
    note_id: str,
    current_user: UserResponse = Depends(get_current_user)
):
    await note_service.delete_note(current_user, trip_id, note_id)
    return {"message": "Note deleted successfully"}
