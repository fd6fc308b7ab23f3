"""
Generated Plan Content Models

Strict, immutable schemas for the itinerary payload attached to a completed
plan. Raw provider output is validated straight into these models (see
services.plan_validator); everything downstream works with these types
instead of raw dictionaries.

Normalization applied while validating:
- costs and ratings become floats, counts become ints (integral floats and
  numeric strings are accepted, booleans are not)
- strings are trimmed; blank optional strings are dropped
- meal slots are lower-cased

When validated with ``context={"trip": trip}`` the content must also match
the trip: same duration, same party size, one day per trip day and day N
dated ``start_date + N - 1``.
"""

from datetime import date, timedelta
from typing import Annotated, Any, Literal, Optional

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    StringConstraints,
    ValidationInfo,
    field_validator,
)
from pydantic_core import PydanticCustomError


RATING_MIN = 0
RATING_MAX = 5

MealSlot = Literal["breakfast", "lunch", "dinner"]


def _number(value: Any) -> Any:
    if isinstance(value, bool):
        raise PydanticCustomError("number_type", "must be a number")
    if isinstance(value, int):
        try:
            return float(value)
        except OverflowError:
            raise PydanticCustomError("number_type", "must be a number")
    return value


def _count(value: Any) -> Any:
    if isinstance(value, bool):
        raise PydanticCustomError("int_type", "must be a positive integer")
    return value


def _rating_in_range(value: Optional[float]) -> Optional[float]:
    if value is not None and not RATING_MIN <= value <= RATING_MAX:
        raise PydanticCustomError("rating_range", f"out of range [{RATING_MIN},{RATING_MAX}]")
    return value


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip() or None
    return value


def _meal_slot(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip().lower()
    return value


Cost = Annotated[float, BeforeValidator(_number), Field(ge=0, allow_inf_nan=False)]
Count = Annotated[int, BeforeValidator(_count), Field(gt=0)]
Rating = Annotated[
    Optional[float],
    BeforeValidator(_number),
    AfterValidator(_rating_in_range),
    Field(json_schema_extra={"minimum": RATING_MIN, "maximum": RATING_MAX}),
]
Text = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
OptionalText = Annotated[Optional[str], BeforeValidator(_blank_to_none)]
Meal = Annotated[MealSlot, BeforeValidator(_meal_slot)]


def _trip(info: ValidationInfo):
    return (info.context or {}).get("trip")


def _mismatch(expected: Any, actual: Any, unit: str = "") -> PydanticCustomError:
    return PydanticCustomError(
        "trip_mismatch",
        "expected {expected}{unit}, got {actual}",
        {"expected": expected, "actual": actual, "unit": unit},
    )


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class PlanActivity(_Frozen):
    """Schema for a single activity in a day's itinerary."""

    time: Text = Field(..., description="Start time (e.g., '10:00 AM')")
    name: Text = Field(..., description="Activity name")
    duration_minutes: Count = Field(..., description="Duration in minutes")
    estimated_cost_usd: Cost = Field(..., description="Total cost for all people")
    estimated_cost_per_person_usd: Cost = Field(..., description="Cost per person")
    rating: Rating = Field(default=None, description="Rating from 0.0 to 5.0")
    description: OptionalText = Field(default=None, description="Activity description")
    google_maps_url: OptionalText = Field(default=None, description="Google Maps link")


class PlanRestaurant(_Frozen):
    """Schema for a restaurant recommendation."""

    meal: Meal = Field(..., description="breakfast, lunch, or dinner")
    name: Text = Field(..., description="Restaurant name")
    cuisine: Text = Field(..., description="Type of cuisine")
    estimated_cost_per_person_usd: Cost = Field(..., description="Cost per person")
    rating: Rating = Field(default=None, description="Rating from 0.0 to 5.0")
    google_maps_url: OptionalText = Field(default=None, description="Google Maps link")


class PlanHotel(_Frozen):
    """Schema for a suggested place to stay."""

    name: Text = Field(..., description="Hotel name")
    location: Text = Field(..., description="Neighbourhood or address")
    estimated_cost_per_night_usd: Cost = Field(..., description="Cost per night for the whole party")
    rating: Rating = Field(default=None, description="Rating from 0.0 to 5.0")
    description: OptionalText = Field(default=None, description="Why it fits the trip")
    google_maps_url: OptionalText = Field(default=None, description="Google Maps link")


class DailyItinerary(_Frozen):
    """Schema for a single day's plan."""

    day: Count = Field(..., description="Day number in the trip (1-based)")
    date: str = Field(..., description="Date in YYYY-MM-DD format")
    activities: tuple[PlanActivity, ...] = Field(default=(), description="Activities in order")
    restaurants: tuple[PlanRestaurant, ...] = Field(default=(), description="Meal recommendations")

    @field_validator("date")
    @classmethod
    def iso_date(cls, v: str, info: ValidationInfo) -> str:
        try:
            parsed = date.fromisoformat(v.strip())
        except ValueError:
            raise PydanticCustomError("date_format", "must be a date in YYYY-MM-DD format")

        trip = _trip(info)
        day = info.data.get("day")
        if trip is not None and day is not None:
            expected = trip.start_date + timedelta(days=day - 1)
            if parsed != expected:
                raise _mismatch(expected.isoformat(), parsed.isoformat())
        return parsed.isoformat()


class TripSummary(_Frozen):
    """Schema for the cost and size summary of the whole plan."""

    total_cost_usd: Cost = Field(..., description="Total estimated cost for all people")
    cost_per_person_usd: Cost = Field(..., description="Cost per person")
    duration_days: Count = Field(..., description="Number of days")
    number_of_people: Count = Field(..., description="Number of travelers")

    @field_validator("duration_days")
    @classmethod
    def matches_trip_duration(cls, v: int, info: ValidationInfo) -> int:
        trip = _trip(info)
        if trip is not None and v != trip.duration_days:
            raise _mismatch(trip.duration_days, v, " days")
        return v

    @field_validator("number_of_people")
    @classmethod
    def matches_trip_party(cls, v: int, info: ValidationInfo) -> int:
        trip = _trip(info)
        if trip is not None and v != trip.number_of_people:
            raise _mismatch(trip.number_of_people, v)
        return v


class GeneratedPlanContent(_Frozen):
    """Complete validated plan content stored on a completed plan."""

    summary: TripSummary
    hotels: tuple[PlanHotel, ...] = Field(default=(), description="Suggested places to stay")
    daily_itinerary: tuple[DailyItinerary, ...] = Field(..., min_length=1)

    @field_validator("daily_itinerary", mode="before")
    @classmethod
    def not_empty(cls, v: Any) -> Any:
        if isinstance(v, (list, tuple)) and not v:
            raise PydanticCustomError("empty_itinerary", "daily_itinerary must be non-empty")
        return v

    @field_validator("daily_itinerary")
    @classmethod
    def days_in_sequence(cls, v: tuple[DailyItinerary, ...], info: ValidationInfo) -> tuple[DailyItinerary, ...]:
        for index, day in enumerate(v):
            if day.day != index + 1:
                raise PydanticCustomError(
                    "day_sequence",
                    "must be {expected}; days are numbered from 1 without gaps",
                    {"field": f"daily_itinerary[{index}].day", "expected": index + 1},
                )

        trip = _trip(info)
        if trip is not None and len(v) != trip.duration_days:
            raise _mismatch(trip.duration_days, len(v), " days")
        return v

    def to_document(self) -> dict:
        """Plain nested structure for persistence, omitting absent optional fields."""
        return self.model_dump(mode="json", exclude_none=True)
