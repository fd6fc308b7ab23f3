"""
Plan Content Serializers

Render validated GeneratedPlanContent as nested dicts. Optional map links (and
hotel descriptions) are only emitted when the provider supplied one.
"""

from serializers.base import Association, Field, Serializer, present


class ActivitySerializer(Serializer):
    fields = (
        Field("time"),
        Field("name"),
        Field("duration_minutes"),
        Field("description"),
        Field("estimated_cost_usd"),
        Field("estimated_cost_per_person_usd"),
        Field("rating"),
        Field("google_maps_url", when=present("google_maps_url")),
    )


class RestaurantSerializer(Serializer):
    fields = (
        Field("meal"),
        Field("name"),
        Field("cuisine"),
        Field("estimated_cost_per_person_usd"),
        Field("rating"),
        Field("google_maps_url", when=present("google_maps_url")),
    )


class DailyItinerarySerializer(Serializer):
    fields = (
        Field("day"),
        Field("date"),
        Association("activities", ActivitySerializer),
        Association("restaurants", RestaurantSerializer),
    )


class HotelSerializer(Serializer):
    fields = (
        Field("name"),
        Field("location"),
        Field("estimated_cost_per_night_usd"),
        Field("rating"),
        Field("google_maps_url", when=present("google_maps_url")),
        Field("description", when=present("description")),
    )


class TripSummarySerializer(Serializer):
    fields = (
        Field("total_cost_usd"),
        Field("cost_per_person_usd"),
        Field("duration_days"),
        Field("number_of_people"),
    )


class PlanContentSerializer(Serializer):
    fields = (
        Association("summary", TripSummarySerializer),
        Association("hotels", HotelSerializer),
        Association("daily_itinerary", DailyItinerarySerializer),
    )
