"""
Trip Models

Schemas for trips and the request bodies used to create and update them.
"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field, ValidationInfo, field_validator

from models.generated_plan import GeneratedPlan
from models.note import NoteInDB


def _end_after_start(end_date: Optional[date], info: ValidationInfo) -> Optional[date]:
    start_date = info.data.get("start_date")
    if start_date and end_date and end_date <= start_date:
        raise ValueError("must be after start date")
    return end_date


class TripBase(BaseModel):
    """Fields shared by trip requests and stored trips."""

    name: str = Field(..., min_length=1, max_length=255, description="Trip name")
    destination: str = Field(..., min_length=1, max_length=255, description="Travel destination")
    start_date: date = Field(..., description="First day of the trip")
    end_date: date = Field(..., description="Last day of the trip")
    number_of_people: int = Field(default=1, gt=0, description="Number of travelers")


class TripCreate(TripBase):
    """Schema for creating a new trip."""

    @field_validator("end_date")
    @classmethod
    def end_after_start(cls, v, info: ValidationInfo):
        return _end_after_start(v, info)


class TripUpdate(BaseModel):
    """Schema for updating a trip (all fields optional)."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    destination: Optional[str] = Field(default=None, min_length=1, max_length=255)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    number_of_people: Optional[int] = Field(default=None, gt=0)

    @field_validator("end_date")
    @classmethod
    def end_after_start(cls, v, info: ValidationInfo):
        return _end_after_start(v, info)


class TripInDB(TripBase):
    """Schema for a trip stored in the database, with optionally loaded children."""

    id: str = Field(..., description="Unique trip ID")
    user_id: str = Field(..., description="Owner of the trip")
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    notes: list[NoteInDB] = Field(default_factory=list)
    generated_plans: list[GeneratedPlan] = Field(default_factory=list)
    notes_count: int = 0
    generated_plans_count: int = 0

    @property
    def duration_days(self) -> int:
        """Inclusive number of days covered by the trip."""
        return (self.end_date - self.start_date).days + 1

    @classmethod
    def from_document(cls, doc: dict, **loaded) -> "TripInDB":
        return cls(
            id=str(doc["_id"]),
            user_id=str(doc["user_id"]),
            name=doc["name"],
            destination=doc["destination"],
            start_date=date.fromisoformat(doc["start_date"]),
            end_date=date.fromisoformat(doc["end_date"]),
            number_of_people=doc.get("number_of_people", 1),
            created_at=doc.get("created_at", datetime.utcnow()),
            updated_at=doc.get("updated_at", datetime.utcnow()),
            **loaded
        )
