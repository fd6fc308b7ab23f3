"""Generated plan serializer: content is only part of the detail view."""

from serializers.base import Association, Field, Serializer
from serializers.plan_content import PlanContentSerializer


def _has_content(plan, view: str) -> bool:
    return plan.is_completed and plan.content is not None


class GeneratedPlanSerializer(Serializer):
    fields = (
        Field("id"),
        Field("trip_id"),
        Field("status"),
        Field("rating"),
        Field("status_message", when=lambda plan, view: plan.is_failed),
        Field("created_at"),
        Field("updated_at"),
        Association("content", PlanContentSerializer, views=("detail",), when=_has_content),
    )
