"""
Error Serializer

Two response shapes:
    {"error": "Trip not found"}
    {"errors": [{"field": "end_date", "reason": "must be after start date"}]}
"""

from typing import Iterable

from models.errors import FieldError, location_to_path


def _reason(message: str) -> str:
    # pydantic prefixes messages raised from validators
    return message.removeprefix("Value error, ")


class ErrorSerializer:

    @staticmethod
    def render_error(message: str) -> dict:
        return {"error": message}

    @staticmethod
    def render_field_errors(errors: Iterable[FieldError]) -> dict:
        return {"errors": [{"field": e.field, "reason": e.reason} for e in errors]}

    @classmethod
    def render_request_errors(cls, errors: Iterable[dict]) -> dict:
        """Render FastAPI/pydantic request validation errors."""
        return cls.render_field_errors(
            FieldError(field=location_to_path(e.get("loc", ())), reason=_reason(str(e.get("msg", "is invalid"))))
            for e in errors
        )
