"""
Generated Plan Model

A generated plan moves through exactly one path:

    pending -> generating -> completed
                          -> failed

The model is frozen: status can only change through start(), complete() and
fail(), each returning a new instance. Persistence of a transition is the job
of services.plan_service, which applies it with a compare-and-set on the
previous status.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from models.errors import IllegalTransitionError, InvalidOperationError, ValidationError
from models.plan_content import GeneratedPlanContent


RATING_MIN = 1
RATING_MAX = 10


class PlanStatus(str, Enum):
    """Status values for AI-generated travel plans."""

    PENDING = "pending"
    GENERATING = "generating"
    COMPLETED = "completed"
    FAILED = "failed"


TERMINAL_STATUSES = frozenset({PlanStatus.COMPLETED, PlanStatus.FAILED})


class GeneratedPlan(BaseModel):
    """Schema for a generated plan stored in the database."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Unique plan ID")
    trip_id: str = Field(..., description="Trip the plan belongs to")
    status: PlanStatus = Field(default=PlanStatus.PENDING)
    rating: Optional[int] = Field(default=None, description="User rating (1-10), completed plans only")
    content: Optional[GeneratedPlanContent] = Field(default=None)
    status_message: Optional[str] = Field(default=None, description="Reason of the last failure")
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    @property
    def is_pending(self) -> bool:
        return self.status is PlanStatus.PENDING

    @property
    def is_generating(self) -> bool:
        return self.status is PlanStatus.GENERATING

    @property
    def is_completed(self) -> bool:
        return self.status is PlanStatus.COMPLETED

    @property
    def is_failed(self) -> bool:
        return self.status is PlanStatus.FAILED

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    def _transition(self, **changes: Any) -> "GeneratedPlan":
        changes["updated_at"] = datetime.utcnow()
        return self.model_copy(update=changes)

    def start(self) -> "GeneratedPlan":
        """Move a pending plan to generating."""
        if not self.is_pending:
            raise IllegalTransitionError(self.status.value, "start")
        return self._transition(status=PlanStatus.GENERATING, status_message=None)

    def complete(self, content: GeneratedPlanContent) -> "GeneratedPlan":
        """Attach validated content and move a generating plan to completed."""
        if not self.is_generating:
            raise IllegalTransitionError(self.status.value, "complete")
        if not isinstance(content, GeneratedPlanContent):
            raise InvalidOperationError("Plan content must be validated before completing a plan")
        return self._transition(status=PlanStatus.COMPLETED, content=content, status_message=None)

    def fail(self, reason: Optional[str] = None) -> "GeneratedPlan":
        """Move a generating plan to failed, dropping any partial content."""
        if not self.is_generating:
            raise IllegalTransitionError(self.status.value, "fail")
        return self._transition(status=PlanStatus.FAILED, content=None, status_message=reason)

    def rate(self, rating: int) -> "GeneratedPlan":
        """Return the plan with a user rating; only completed plans can be rated."""
        if not self.is_completed:
            raise InvalidOperationError(
                f"Rating can only be set on completed plans (status '{self.status.value}')"
            )
        if isinstance(rating, bool) or not isinstance(rating, int) or not RATING_MIN <= rating <= RATING_MAX:
            raise ValidationError.single("rating", f"must be an integer between {RATING_MIN} and {RATING_MAX}")
        return self._transition(rating=rating)

    @classmethod
    def from_document(cls, doc: dict) -> "GeneratedPlan":
        """Build a plan from a stored MongoDB document."""
        content = doc.get("content")
        return cls(
            id=str(doc["_id"]),
            trip_id=str(doc["trip_id"]),
            status=doc.get("status", PlanStatus.PENDING.value),
            rating=doc.get("rating"),
            content=GeneratedPlanContent.model_validate(content) if content else None,
            status_message=doc.get("status_message"),
            created_at=doc.get("created_at", datetime.utcnow()),
            updated_at=doc.get("updated_at", datetime.utcnow()),
        )

    def to_update(self) -> dict:
        """Fields written back by a persisted transition."""
        return {
            "status": self.status.value,
            "rating": self.rating,
            "content": self.content.to_document() if self.content else None,
            "status_message": self.status_message,
            "updated_at": self.updated_at,
        }


class PlanUpdate(BaseModel):
    """Schema for updating a plan (only the rating is user editable)."""

    rating: int = Field(..., ge=RATING_MIN, le=RATING_MAX)
