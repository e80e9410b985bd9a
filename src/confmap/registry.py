"""Type -> serializer lookup."""

from __future__ import annotations

from typing import Any, Callable

from .containers import OBJECT_ARRAY, PRIMITIVE_ARRAYS, SET
from .scalars import (
    BoolSerializer,
    FloatSerializer,
    IntSerializer,
    PrimitiveElementSerializer,
    StringSerializer,
    TypeSerializer,
)
from .types import PrimitiveKind, resolve_type


class TypeSerializerCollection:
    """Ordered serializer entries, searched first to last, then the parent."""

    def __init__(self, parent: TypeSerializerCollection | None = None) -> None:
        self.parent = parent
        self._entries: list[tuple[Callable[[Any], bool], TypeSerializer]] = []

    def register(self, type_: Any, serializer: TypeSerializer) -> TypeSerializerCollection:
        """Register *serializer* for exactly ``type_``."""
        expected = resolve_type(type_)
        return self.register_predicate(lambda t: t == expected, serializer)

    def register_predicate(
        self, predicate: Callable[[Any], bool], serializer: TypeSerializer
    ) -> TypeSerializerCollection:
        self._entries.append((predicate, serializer))
        return self

    def get(self, type_: Any) -> TypeSerializer | None:
        type_ = resolve_type(type_)
        for predicate, serializer in self._entries:
            if predicate(type_):
                return serializer
        if self.parent is not None:
            return self.parent.get(type_)
        return None

    def child(self) -> TypeSerializerCollection:
        """A new collection that falls back to this one."""
        return TypeSerializerCollection(parent=self)


def default_serializers() -> TypeSerializerCollection:
    collection = TypeSerializerCollection()
    collection.register(bool, BoolSerializer())
    collection.register(int, IntSerializer())
    collection.register(float, FloatSerializer())
    collection.register(str, StringSerializer())

    element = PrimitiveElementSerializer()
    for kind in PrimitiveKind:
        collection.register(kind, element)

    for strategy in PRIMITIVE_ARRAYS.values():
        collection.register_predicate(strategy.applies, strategy)
    collection.register_predicate(OBJECT_ARRAY.applies, OBJECT_ARRAY)
    collection.register_predicate(SET.applies, SET)
    return collection
