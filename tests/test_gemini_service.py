"""Tests for services/gemini_service.py and services/prompt_builder.py with the Gemini SDK mocked."""
import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from config.settings import settings
from services import gemini_service as gemini_module
from services.gemini_service import APIKeyNotConfiguredError, GeminiService, GenerationError
from services.prompt_builder import PromptBuilder, build_response_schema


@pytest.fixture
def sdk(monkeypatch):
    """Replace the Gemini SDK entry points used by the service."""
    model = MagicMock()
    model.generate_content_async = AsyncMock()
    monkeypatch.setattr(settings, "GEMINI_API_KEY", "test-key")
    monkeypatch.setattr(gemini_module.genai, "configure", MagicMock())
    monkeypatch.setattr(gemini_module.genai, "GenerativeModel", MagicMock(return_value=model))
    return model


def _respond(model, text):
    response = MagicMock()
    response.text = text
    model.generate_content_async.return_value = response


class TestGeminiService:
    def test_missing_api_key(self, monkeypatch):
        monkeypatch.setattr(settings, "GEMINI_API_KEY", "")
        with pytest.raises(APIKeyNotConfiguredError):
            asyncio.run(GeminiService().generate_plan("system", "prompt"))

    def test_returns_decoded_json(self, sdk):
        _respond(sdk, '{"summary": {}, "daily_itinerary": []}')
        result = asyncio.run(GeminiService().generate_plan("system", "prompt"))
        assert result == {"summary": {}, "daily_itinerary": []}

    def test_json_wrapped_in_text(self, sdk):
        _respond(sdk, 'Here you go:\n```json\n{"summary": {"duration_days": 2}}\n```')
        result = asyncio.run(GeminiService().generate_plan("system", "prompt"))
        assert result == {"summary": {"duration_days": 2}}

    def test_no_json_in_response(self, sdk):
        _respond(sdk, "Sorry, I can't help with that.")
        with pytest.raises(GenerationError):
            asyncio.run(GeminiService().generate_plan("system", "prompt"))

    def test_sdk_failure_is_wrapped(self, sdk):
        sdk.generate_content_async.side_effect = RuntimeError("quota exceeded")
        with pytest.raises(GenerationError) as exc:
            asyncio.run(GeminiService().generate_plan("system", "prompt"))
        assert "quota exceeded" in str(exc.value)


class TestPromptBuilder:
    def test_prompt_contains_trip_preferences_and_notes(self, trip, preferences):
        note = MagicMock(content="Vegetarian friendly places please")
        prompt = PromptBuilder(trip=trip, preferences=preferences, notes=[note]).build_user_prompt()

        assert "Destination: Lisbon" in prompt
        assert "Duration: 3 days" in prompt
        assert "Standard (mid-range options)" in prompt
        assert "Cultural, Sightseeing" in prompt
        assert "Vegetarian friendly places please" in prompt

    def test_schema_lists_required_sections(self):
        schema = build_response_schema()
        assert set(schema["required"]) == {"summary", "daily_itinerary"}

    def test_schema_follows_content_models(self):
        schema = build_response_schema()
        definitions = schema["$defs"]

        assert "google_maps_url" in definitions["PlanActivity"]["properties"]
        assert "google_maps_url" in definitions["PlanRestaurant"]["properties"]
        assert "hotels" in schema["properties"]
        assert set(definitions["PlanHotel"]["required"]) == {"name", "location", "estimated_cost_per_night_usd"}

    def test_schema_is_embedded_in_prompt(self, trip, preferences):
        prompt = PromptBuilder(trip=trip, preferences=preferences, notes=[]).build_user_prompt()
        assert '"google_maps_url"' in prompt
        assert '"estimated_cost_per_night_usd"' in prompt
