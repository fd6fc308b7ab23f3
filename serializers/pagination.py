"""Pagination metadata serializer."""

from serializers.base import Field, Serializer


class PaginationSerializer(Serializer):
    fields = (
        Field("current_page"),
        Field("total_pages"),
        Field("total_count"),
        Field("per_page"),
    )
