"""
Gemini AI Integration Service

Generation provider for travel plans. Sends the prompt built for a trip to
Google's Gemini model in JSON response mode and returns the decoded, still
unvalidated plan content.
"""

import json
import re
from typing import Any, Optional

import google.generativeai as genai
from google.generativeai.types import GenerationConfig

from config.settings import settings
from models.errors import ProviderError


class GeminiServiceError(ProviderError):
    """Base exception for Gemini service errors."""
    pass


class APIKeyNotConfiguredError(GeminiServiceError):
    """Raised when Gemini API key is not configured."""
    pass


class GenerationError(GeminiServiceError):
    """Raised when content generation fails."""
    pass


class GeminiService:
    """Service for AI-powered travel plan generation."""

    MODEL_NAME = settings.GEMINI_MODEL_NAME or "gemini-2.5-flash"

    def __init__(self):
        """Initialize the Gemini service."""
        self._configured = False
        self._models: dict[str, genai.GenerativeModel] = {}

    def _configure(self):
        """Configure the Gemini API with the API key."""
        if not settings.GEMINI_API_KEY:
            raise APIKeyNotConfiguredError(
                "GEMINI_API_KEY is not configured. Please set it in your environment variables."
            )

        if not self._configured:
            genai.configure(api_key=settings.GEMINI_API_KEY)
            self._configured = True

    def _get_model(self, system_instruction: str) -> genai.GenerativeModel:
        """Get or create a Gemini model bound to a system instruction."""
        self._configure()

        model = self._models.get(system_instruction)
        if model is None:
            model = genai.GenerativeModel(self.MODEL_NAME, system_instruction=system_instruction)
            self._models[system_instruction] = model
        return model

    def _extract_json_from_response(self, text: str) -> dict:
        """
        Extract JSON from a response that may contain additional text.

        Args:
            text: Response text that may contain JSON

        Returns:
            Parsed JSON dictionary
        """
        try:
            data = json.loads(text)
            if isinstance(data, dict):
                return data
        except json.JSONDecodeError:
            pass

        json_match = re.search(r'\{[\s\S]*\}', text)
        if json_match:
            return json.loads(json_match.group())
        raise json.JSONDecodeError("No JSON object found in response", text, 0)

    async def generate_plan(
        self,
        system_instruction: str,
        prompt: str,
        temperature: Optional[float] = None
    ) -> dict[str, Any]:
        """
        Generate raw plan content.

        Args:
            system_instruction: Role and output rules for the model
            prompt: Trip details, preferences, notes and the expected JSON schema
            temperature: Sampling temperature, defaults to GEMINI_TEMPERATURE

        Returns:
            Decoded JSON object, not yet validated

        Raises:
            APIKeyNotConfiguredError: when no API key is configured
            GenerationError: when the call fails or returns no JSON object
        """
        model = self._get_model(system_instruction)

        try:
            response = await model.generate_content_async(
                prompt,
                generation_config=GenerationConfig(
                    temperature=settings.GEMINI_TEMPERATURE if temperature is None else temperature,
                    top_p=0.95,
                    response_mime_type="application/json",
                )
            )

            if not response.text:
                raise GenerationError("Empty response from Gemini API")

            return self._extract_json_from_response(response.text)

        except GeminiServiceError:
            raise
        except json.JSONDecodeError as e:
            raise GenerationError(f"Failed to parse plan response: {str(e)}")
        except Exception as e:
            raise GenerationError(f"Plan generation failed: {str(e)}")

    def close(self):
        """Close the Gemini service and release resources."""
        self._models = {}
        self._configured = False


gemini_service = GeminiService()
