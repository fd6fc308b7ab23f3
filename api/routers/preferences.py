"""Preferences API Router: one preference record per user."""

from fastapi import APIRouter, Depends

from api.dependencies import get_current_user
from models.errors import NotFoundError
from models.preferences import PreferenceOptions, PreferencesUpdate
from models.user import UserResponse
from serializers.preferences import PreferenceOptionsSerializer, UserPreferencesSerializer
from services import preference_service


router = APIRouter(prefix="/api/preferences", tags=["Preferences"])


@router.get("/options")
async def get_preference_options():
    """Every allowed value for each preference category."""
    return PreferenceOptionsSerializer.render(PreferenceOptions())


@router.get("")
async def get_preferences(current_user: UserResponse = Depends(get_current_user)):
    preferences = await preference_service.get_preferences(current_user)
    if preferences is None:
        raise NotFoundError("Preferences")
    return {"preferences": UserPreferencesSerializer.render(preferences)}


@router.put("")
async def update_preferences(
    preferences_data: PreferencesUpdate,
    current_user: UserResponse = Depends(get_current_user)
):
    """Create the user's preferences or update the fields that were sent."""
    preferences = await preference_service.upsert_preferences(current_user, preferences_data)
    return {"preferences": UserPreferencesSerializer.render(preferences)}
