"""Preference Service: one preference record per user, created on first update."""

from datetime import datetime
from typing import Optional

from pymongo import ReturnDocument

from config.database import USER_PREFERENCES, database
from config.logging_utils import log_debug
from models.preferences import PreferencesUpdate, UserPreferences
from models.user import UserResponse


def get_preferences_collection():
    """Get the user preferences collection."""
    return database.get_collection(USER_PREFERENCES)


async def get_preferences(user: UserResponse) -> Optional[UserPreferences]:
    """Get the user's preferences, or None if they were never set."""
    doc = await get_preferences_collection().find_one({"user_id": user.id})
    return UserPreferences.from_document(doc) if doc else None


async def upsert_preferences(user: UserResponse, data: PreferencesUpdate) -> UserPreferences:
    """Create or update the user's preferences; only the fields sent are changed."""
    now = datetime.utcnow()
    changes = data.model_dump(mode="json", exclude_unset=True)
    changes["updated_at"] = now

    doc = await get_preferences_collection().find_one_and_update(
        {"user_id": user.id},
        {"$set": changes, "$setOnInsert": {"created_at": now}},
        upsert=True,
        return_document=ReturnDocument.AFTER
    )
    log_debug(f"Saved preferences for user_id={user.id}: {sorted(changes)}", prefix="PREFERENCES")
    return UserPreferences.from_document(doc)
