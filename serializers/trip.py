"""
Trip serializer.

Views:
    default  core trip fields
    list     adds notes_count and generated_plans_count
    detail   adds the trip's notes and generated plans (without plan content)
"""

from serializers.base import Association, Field, Serializer
from serializers.generated_plan import GeneratedPlanSerializer
from serializers.note import NoteSerializer


class TripSerializer(Serializer):
    fields = (
        Field("id"),
        Field("name"),
        Field("destination"),
        Field("number_of_people"),
        Field("start_date"),
        Field("end_date"),
        Field("created_at"),
        Field("updated_at"),
        Field("notes_count", views=("list",)),
        Field("generated_plans_count", views=("list",)),
        Association("notes", NoteSerializer, views=("detail",)),
        Association("generated_plans", GeneratedPlanSerializer, views=("detail",)),
    )
