"""Note serializer."""

from serializers.base import Field, Serializer


class NoteSerializer(Serializer):
    fields = (
        Field("id"),
        Field("trip_id"),
        Field("content"),
        Field("created_at"),
        Field("updated_at"),
    )
