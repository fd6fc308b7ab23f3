"""Checks run on a trip, its notes and the user's preferences before a plan is generated."""

from typing import Optional

from config.settings import settings
from models.note import NoteInDB
from models.preferences import UserPreferences
from models.trip import TripInDB


class InputValidator:
    """Collects human-readable reasons why a plan cannot be generated."""

    def __init__(self, trip: TripInDB, preferences: Optional[UserPreferences], notes: list[NoteInDB]):
        self.trip = trip
        self.preferences = preferences
        self.notes = notes
        self.errors: list[str] = []

    def is_valid(self) -> bool:
        self.errors = []
        self._validate_trip()
        self._validate_preferences()
        self._validate_notes()
        return not self.errors

    def _validate_trip(self) -> None:
        trip = self.trip
        if not trip.destination.strip():
            self.errors.append("Trip destination is required")
        if trip.number_of_people <= 0:
            self.errors.append("Number of people must be positive")
        if trip.end_date <= trip.start_date:
            self.errors.append("Trip end date must be after start date")
            return

        max_days = settings.MAX_TRIP_DURATION_DAYS
        if not 1 <= trip.duration_days <= max_days:
            self.errors.append(f"Trip duration must be between 1 and {max_days} days")

    def _validate_preferences(self) -> None:
        # Enum-typed fields make invalid values unrepresentable; presence is what matters here.
        if self.preferences is None:
            self.errors.append("User preferences are required to generate a plan")

    def _validate_notes(self) -> None:
        for note in self.notes:
            if note.trip_id != self.trip.id:
                self.errors.append(f"Note {note.id} does not belong to trip {self.trip.id}")
