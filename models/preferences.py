"""
User Preferences Models

Defines the allowed preference values and the schemas used to read and
upsert a user's travel preferences.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class Budget(str, Enum):
    BUDGET_CONSCIOUS = "budget_conscious"
    STANDARD = "standard"
    LUXURY = "luxury"


class Accommodation(str, Enum):
    HOTEL = "hotel"
    AIRBNB = "airbnb"
    HOSTEL = "hostel"
    RESORT = "resort"
    CAMPING = "camping"


class Activity(str, Enum):
    OUTDOORS = "outdoors"
    SIGHTSEEING = "sightseeing"
    CULTURAL = "cultural"
    RELAXATION = "relaxation"
    ADVENTURE = "adventure"
    NIGHTLIFE = "nightlife"
    SHOPPING = "shopping"


class EatingHabit(str, Enum):
    RESTAURANTS_ONLY = "restaurants_only"
    SELF_PREPARED = "self_prepared"
    MIX = "mix"


def string_values(enum_cls: type[Enum]) -> list[str]:
    """Allowed string values of a preference enum, in declaration order."""
    return [member.value for member in enum_cls]


class PreferencesUpdate(BaseModel):
    """Schema for upserting preferences (all fields optional)."""

    budget: Optional[Budget] = None
    accommodation: Optional[Accommodation] = None
    activities: Optional[list[Activity]] = Field(
        default=None,
        description="Preferred activity tags; accepts a list or a comma-separated string"
    )
    eating_habits: Optional[EatingHabit] = None

    @field_validator("activities", mode="before")
    @classmethod
    def split_activities(cls, v):
        """Accept 'a, b' strings from forms and drop blank entries."""
        if isinstance(v, str):
            v = v.split(",")
        if isinstance(v, list):
            cleaned = [a.strip() if isinstance(a, str) else a for a in v]
            return [a for a in cleaned if a != ""]
        return v

    @field_validator("activities")
    @classmethod
    def unique_activities(cls, v):
        if v is None:
            return v
        return list(dict.fromkeys(v))


class UserPreferences(BaseModel):
    """Schema for preferences stored in the database."""

    id: str
    user_id: str
    budget: Optional[Budget] = None
    accommodation: Optional[Accommodation] = None
    activities: list[Activity] = Field(default_factory=list)
    eating_habits: Optional[EatingHabit] = None
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    @classmethod
    def from_document(cls, doc: dict) -> "UserPreferences":
        return cls(
            id=str(doc["_id"]),
            user_id=str(doc["user_id"]),
            budget=doc.get("budget"),
            accommodation=doc.get("accommodation"),
            activities=doc.get("activities") or [],
            eating_habits=doc.get("eating_habits"),
            created_at=doc.get("created_at", datetime.utcnow()),
            updated_at=doc.get("updated_at", datetime.utcnow()),
        )


class PreferenceOptions(BaseModel):
    """Every value a user may pick for each preference category."""

    budget: list[str] = Field(default_factory=lambda: string_values(Budget))
    accommodation: list[str] = Field(default_factory=lambda: string_values(Accommodation))
    activities: list[str] = Field(default_factory=lambda: string_values(Activity))
    eating_habits: list[str] = Field(default_factory=lambda: string_values(EatingHabit))
