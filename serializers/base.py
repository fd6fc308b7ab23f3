"""
Serializer Base

Declarative, view-aware rendering of records into plain JSON-ready dicts.

A serializer lists its fields in output order. Each field or association can
be limited to a set of views and guarded by a predicate ``when(obj, view)``.
Records may be pydantic models, plain objects or dicts.

Example:
    class NoteSerializer(Serializer):
        fields = (
            Field("id"),
            Field("content"),
            Field("created_at"),
        )

    NoteSerializer.render(note)
"""

from typing import Any, Callable, Iterable, Optional

from fastapi.encoders import jsonable_encoder


DEFAULT_VIEW = "default"

Predicate = Callable[[Any, str], bool]


def read_attribute(obj: Any, name: str) -> Any:
    """Read a field from a dict or an object."""
    if isinstance(obj, dict):
        return obj.get(name)
    return getattr(obj, name, None)


class Field:
    """A single output key."""

    def __init__(
        self,
        name: str,
        value: Optional[Callable[[Any], Any]] = None,
        views: Optional[Iterable[str]] = None,
        when: Optional[Predicate] = None
    ):
        self.name = name
        self.value = value
        self.views = frozenset(views) if views else None
        self.when = when

    def included(self, obj: Any, view: str) -> bool:
        if self.views is not None and view not in self.views:
            return False
        return self.when is None or bool(self.when(obj, view))

    def extract(self, obj: Any, view: str) -> Any:
        raw = self.value(obj) if self.value else read_attribute(obj, self.name)
        return jsonable_encoder(raw)


class Association(Field):
    """A nested record (or list of records) rendered with its own serializer."""

    def __init__(
        self,
        name: str,
        serializer: type["Serializer"],
        view: str = DEFAULT_VIEW,
        views: Optional[Iterable[str]] = None,
        when: Optional[Predicate] = None
    ):
        super().__init__(name, views=views, when=when)
        self.serializer = serializer
        self.nested_view = view

    def extract(self, obj: Any, view: str) -> Any:
        value = read_attribute(obj, self.name)
        if value is None:
            return None
        if isinstance(value, (list, tuple)):
            return self.serializer.render_many(value, self.nested_view)
        return self.serializer.render(value, self.nested_view)


class Serializer:
    """Base class; subclasses declare ``fields`` in output order."""

    fields: tuple[Field, ...] = ()

    @classmethod
    def render(cls, obj: Any, view: str = DEFAULT_VIEW) -> dict:
        return {
            field.name: field.extract(obj, view)
            for field in cls.fields
            if field.included(obj, view)
        }

    @classmethod
    def render_many(cls, objs: Iterable[Any], view: str = DEFAULT_VIEW) -> list[dict]:
        return [cls.render(obj, view) for obj in objs]


def present(name: str) -> Predicate:
    """Predicate: include the field only when the record has a non-blank value for it."""
    def check(obj: Any, view: str) -> bool:
        value = read_attribute(obj, name)
        if isinstance(value, str):
            return bool(value.strip())
        return value is not None
    return check
