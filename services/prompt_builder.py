"""
Prompt Builder

Builds the system instruction, the user prompt and the JSON schema sent to the
generation provider for a trip.
"""

import json
from typing import Optional

from models.note import NoteInDB
from models.plan_content import GeneratedPlanContent
from models.preferences import Accommodation, Budget, EatingHabit, UserPreferences
from models.trip import TripInDB


SYSTEM_INSTRUCTION = """You are an expert travel planning assistant. Your task is to create detailed, realistic, and exciting travel itineraries based on user preferences.

REQUIREMENTS:
1. Generate a complete day-by-day itinerary with specific activities and restaurant recommendations
2. Provide realistic cost estimates in USD based on the destination and budget level
3. Include activity ratings (0.0-5.0) based on popular review sites
4. Ensure all activities fit realistically within each day's timeframe
5. Consider the user's preferences for budget, accommodation type, activities, and eating habits
6. Include specific times for each activity (e.g., "10:00 AM")
7. Provide engaging descriptions for each activity
8. Recommend restaurants for breakfast, lunch, and dinner each day
9. Suggest a few places to stay that match the accommodation preference
10. Include a Google Maps link for activities, restaurants and hotels when you know one

OUTPUT FORMAT:
You must respond with valid JSON matching the exact schema provided. All costs should be in USD.
Ratings should be realistic (3.5-5.0 for popular attractions, 2.0-4.5 for restaurants).
RESPOND ONLY WITH THE JSON OBJECT, no additional text."""


BUDGET_LABELS = {
    Budget.BUDGET_CONSCIOUS: "Budget-conscious (affordable options)",
    Budget.STANDARD: "Standard (mid-range options)",
    Budget.LUXURY: "Luxury (premium options)",
}

ACCOMMODATION_LABELS = {
    Accommodation.HOTEL: "Hotels",
    Accommodation.AIRBNB: "Airbnb/Vacation Rentals",
    Accommodation.HOSTEL: "Hostels",
    Accommodation.RESORT: "Resorts",
    Accommodation.CAMPING: "Camping",
}

EATING_HABIT_LABELS = {
    EatingHabit.RESTAURANTS_ONLY: "Restaurants only (all meals at restaurants)",
    EatingHabit.SELF_PREPARED: "Self-prepared (groceries and cooking)",
    EatingHabit.MIX: "Mix (combination of restaurants and self-prepared)",
}


def build_response_schema() -> dict:
    """JSON Schema of the plan content the provider must return, generated from the content models."""
    return GeneratedPlanContent.model_json_schema()


def format_activity(activity: str) -> str:
    return " ".join(part.capitalize() for part in activity.split("_"))


class PromptBuilder:
    """Builds provider prompts from a trip, the user's preferences and the trip notes."""

    def __init__(self, trip: TripInDB, preferences: Optional[UserPreferences], notes: list[NoteInDB]):
        self.trip = trip
        self.preferences = preferences
        self.notes = notes

    def build_system_instruction(self) -> str:
        return SYSTEM_INSTRUCTION

    def build_user_prompt(self) -> str:
        trip = self.trip
        prompt = f"""Please create a detailed travel itinerary for the following trip:

TRIP DETAILS:
- Destination: {trip.destination}
- Start Date: {trip.start_date.strftime('%B %d, %Y')} ({trip.start_date.isoformat()})
- End Date: {trip.end_date.strftime('%B %d, %Y')} ({trip.end_date.isoformat()})
- Duration: {trip.duration_days} days
- Number of People: {trip.number_of_people}

USER PREFERENCES:
{self._format_preferences()}
"""
        if self.notes:
            prompt += "\nADDITIONAL NOTES FROM USER:\n"
            prompt += "".join(f"- {note.content}\n" for note in self.notes)

        prompt += f"""
Day 1 must be {trip.start_date.isoformat()} and the itinerary must contain exactly {trip.duration_days} consecutive days.

JSON SCHEMA:
{json.dumps(build_response_schema(), indent=2)}

Please generate a complete itinerary with hotel suggestions, daily activities and restaurant recommendations."""
        return prompt

    def _format_preferences(self) -> str:
        prefs = self.preferences
        if prefs is None:
            return "- No specific preferences"

        lines = []
        if prefs.budget:
            lines.append(f"- Budget: {BUDGET_LABELS[prefs.budget]}")
        if prefs.accommodation:
            lines.append(f"- Accommodation: {ACCOMMODATION_LABELS[prefs.accommodation]}")
        if prefs.eating_habits:
            lines.append(f"- Eating Habits: {EATING_HABIT_LABELS[prefs.eating_habits]}")
        if prefs.activities:
            activities = ", ".join(format_activity(a.value) for a in prefs.activities)
            lines.append(f"- Preferred Activities: {activities}")
        return "\n".join(lines) or "- No specific preferences"
