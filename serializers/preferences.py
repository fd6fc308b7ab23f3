"""Preference serializers."""

from serializers.base import Field, Serializer


class UserPreferencesSerializer(Serializer):
    fields = (
        Field("id"),
        Field("user_id"),
        Field("budget"),
        Field("accommodation"),
        Field("activities"),
        Field("eating_habits"),
        Field("created_at"),
        Field("updated_at"),
    )


class PreferenceOptionsSerializer(Serializer):
    fields = (
        Field("budget"),
        Field("accommodation"),
        Field("activities"),
        Field("eating_habits"),
    )
