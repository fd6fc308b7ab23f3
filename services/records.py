"""Helpers shared by the ownership-scoped record services."""

from bson import ObjectId
from bson.errors import InvalidId

from models.errors import NotFoundError


def to_object_id(value: str, resource: str) -> ObjectId:
    """Parse a record id; malformed ids are reported exactly like missing records."""
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        raise NotFoundError(resource)
