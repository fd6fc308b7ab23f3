"""
Plan Content Validator

Turns the untyped structure decoded from a generation provider into a
GeneratedPlanContent. The rules live on the pydantic models in
models/plan_content.py; this module runs them (with the trip passed as
validation context) and reports every violation at once through
PlanContentError, each with its field path
(e.g. ``daily_itinerary[0].activities[0].rating``).

Validating content that was already normalized returns an equal result.
"""

import logging
from collections.abc import Mapping
from typing import Any, Optional

from pydantic import ValidationError as PydanticValidationError

from config.settings import settings
from models.errors import FieldError, PlanContentError, location_to_path
from models.plan_content import GeneratedPlanContent, TripSummary


logger = logging.getLogger(__name__)

# pydantic error type -> reason template (formatted with the error's ctx)
_REASONS = {
    "missing": "is required",
    "model_type": "must be an object",
    "model_attributes_type": "must be an object",
    "tuple_type": "must be a list",
    "list_type": "must be a list",
    "string_type": "must be a string",
    "string_too_short": "can't be blank",
    "float_type": "must be a number",
    "float_parsing": "must be a number",
    "finite_number": "must be a number",
    "greater_than_equal": "must be greater than or equal to {ge}",
    "int_type": "must be a positive integer",
    "int_parsing": "must be a positive integer",
    "int_from_float": "must be a positive integer",
    "greater_than": "must be a positive integer",
    "literal_error": "must be one of: {expected}",
}


def _field_error(error: dict) -> FieldError:
    ctx = error.get("ctx") or {}
    template = _REASONS.get(error["type"])
    reason = template.format(**ctx) if template else error["msg"]
    return FieldError(field=ctx.get("field") or location_to_path(error["loc"]), reason=reason)


class PlanContentValidator:
    """Validate and normalize generated plan content, optionally against its trip."""

    def __init__(self, trip=None, cost_tolerance: Optional[float] = None):
        self.trip = trip
        self.cost_tolerance = settings.PLAN_COST_TOLERANCE if cost_tolerance is None else cost_tolerance
        self.errors: list[FieldError] = []
        self.warnings: list[str] = []

    def validate(self, raw: Any) -> GeneratedPlanContent:
        """
        Validate raw plan content.

        Args:
            raw: Decoded JSON-like structure

        Returns:
            The normalized GeneratedPlanContent

        Raises:
            PlanContentError: listing every violated field path
        """
        self.errors = []
        self.warnings = []

        if not isinstance(raw, Mapping):
            self.errors.append(FieldError(field="content", reason="must be an object"))
            raise PlanContentError(self.errors)

        try:
            content = GeneratedPlanContent.model_validate(raw, context={"trip": self.trip})
        except PydanticValidationError as e:
            self.errors = [_field_error(error) for error in e.errors()]
            raise PlanContentError(self.errors)

        self._check_costs(content.summary)
        return content

    def _check_costs(self, summary: TripSummary) -> None:
        """Record a warning when per-person cost and total cost disagree."""
        expected_total = summary.cost_per_person_usd * summary.number_of_people
        total = summary.total_cost_usd
        scale = max(abs(expected_total), abs(total))
        if scale == 0 or abs(expected_total - total) <= self.cost_tolerance * scale:
            return

        warning = (
            f"summary.total_cost_usd: {total:.2f} differs from cost_per_person_usd x "
            f"number_of_people ({expected_total:.2f})"
        )
        self.warnings.append(warning)
        logger.warning("[PLAN] Cost mismatch in generated content - %s", warning)


def validate_plan_content(raw: Any, trip=None) -> GeneratedPlanContent:
    """Validate raw plan content, raising PlanContentError on any violation."""
    return PlanContentValidator(trip=trip).validate(raw)
