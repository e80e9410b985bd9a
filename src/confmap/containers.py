"""List-shaped serializers for arrays and sets.

``ListChildSerializer`` holds the single conversion algorithm between a list
node and a container. Each container kind plugs in four operations:

- ``element_type``: the per-item type derived from the declared type
- ``create_new``: allocate an empty container for ``length`` items
- ``for_each_element``: visit stored items in storage order
- ``deserialize_single``: place one converted item at ``index``
"""

from __future__ import annotations

import collections.abc
from abc import ABC, abstractmethod
from typing import Any, Callable, Iterable

import numpy as np

from .errors import CoercionError, MappingError, NoSerializerError, RawTypeError
from .log import get_logger
from .types import ArrayType, PrimitiveKind, SetType

logger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Container types
# ---------------------------------------------------------------------------

class ObjectArray(collections.abc.Sequence):
    """Fixed-length array whose slots accept ``element_type`` values or None."""

    __slots__ = ("element_type", "_items")

    def __init__(self, element_type: Any, length: int = 0) -> None:
        self.element_type = element_type
        self._items: list[Any] = [None] * length

    @classmethod
    def of(cls, element_type: Any, values: Iterable[Any]) -> ObjectArray:
        values = list(values)
        array = cls(element_type, len(values))
        for i, value in enumerate(values):
            array[i] = value
        return array

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, index):
        return self._items[index]

    def __setitem__(self, index: int, value: Any) -> None:
        if (
            value is not None
            and isinstance(self.element_type, type)
            and not isinstance(value, self.element_type)
        ):
            raise TypeError(
                f"Cannot store {type(value).__name__} in array of {self.element_type.__name__}"
            )
        self._items[index] = value

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ObjectArray):
            return self.element_type == other.element_type and self._items == other._items
        return NotImplemented

    def __repr__(self) -> str:
        return f"ObjectArray({self.element_type!r}, {self._items!r})"


class LinkedSet(collections.abc.MutableSet):
    """Mutable set that iterates in insertion order."""

    __slots__ = ("_items",)

    def __init__(self, values: Iterable[Any] = ()) -> None:
        self._items: dict[Any, None] = dict.fromkeys(values)

    def __contains__(self, value: object) -> bool:
        return value in self._items

    def __iter__(self):
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def add(self, value: Any) -> None:
        self._items.setdefault(value, None)

    def discard(self, value: Any) -> None:
        self._items.pop(value, None)

    def __repr__(self) -> str:
        return f"LinkedSet({list(self._items)!r})"


# ---------------------------------------------------------------------------
# Generic list conversion
# ---------------------------------------------------------------------------

class ListChildSerializer(ABC):
    """Converts between a list node and a container of one kind."""

    @abstractmethod
    def applies(self, declared_type: Any) -> bool: ...

    @abstractmethod
    def element_type(self, declared_type: Any) -> Any: ...

    @abstractmethod
    def create_new(self, length: int, element_type: Any) -> Any: ...

    @abstractmethod
    def for_each_element(self, container: Any, action: Callable[[Any], None]) -> None: ...

    @abstractmethod
    def deserialize_single(self, index: int, container: Any, value: Any) -> None: ...

    def finish(self, declared_type: Any, container: Any) -> Any:
        """Turn a fully populated container into the value handed to the caller."""
        return container

    def _element_serializer(self, element_type: Any, node):
        serializer = node.options.serializers.get(element_type)
        if serializer is None:
            raise NoSerializerError(
                f"No applicable type serializer for type {element_type!r}", node.path
            )
        return serializer

    def deserialize(self, declared_type: Any, node) -> Any:
        element_type = self.element_type(declared_type)
        element_serializer = self._element_serializer(element_type, node)

        if node.is_list:
            children = node.children_list()
        elif node.empty:
            children = []
        elif node.options.strict_lists:
            raise CoercionError(
                f"Expected a list for {declared_type!r}, got scalar {node.scalar!r}", node.path
            )
        else:
            children = [node]

        container = self.create_new(len(children), element_type)
        logger.debug("Allocated %s for %d elements of %r", type(container).__name__, len(children), element_type)
        for index, child in enumerate(children):
            try:
                value = element_serializer.deserialize(element_type, child)
                self.deserialize_single(index, container, value)
            except MappingError as err:
                err.init_path(child.path)
                logger.debug("Element %d of %r failed: %s", index, declared_type, err)
                raise
        return self.finish(declared_type, container)

    def serialize(self, declared_type: Any, container: Any, node) -> None:
        element_type = self.element_type(declared_type)
        element_serializer = self._element_serializer(element_type, node)

        # Built on a detached twin so a failure leaves ``node`` untouched
        options = node.options if node.parent is None else None
        staging = type(node)(key=node.key, parent=node.parent, options=options)
        staging.set_list(0)

        def visit(element: Any) -> None:
            child = staging.append_list_node()
            try:
                element_serializer.serialize(element_type, element, child)
            except MappingError as err:
                err.init_path(child.path)
                raise

        if container is not None:
            try:
                self.for_each_element(container, visit)
            except MappingError as err:
                err.init_path(node.path)
                raise
        node.take_children(staging)


# ---------------------------------------------------------------------------
# Arrays
# ---------------------------------------------------------------------------

class _ArraySerializer(ListChildSerializer):
    def element_type(self, declared_type: Any) -> Any:
        if not isinstance(declared_type, ArrayType) or declared_type.component is None:
            raise TypeError(f"Must be array type, got {declared_type!r}")
        return declared_type.component


class ObjectArraySerializer(_ArraySerializer):
    def applies(self, declared_type: Any) -> bool:
        return (
            isinstance(declared_type, ArrayType)
            and declared_type.component is not None
            and not declared_type.is_primitive
        )

    def create_new(self, length: int, element_type: Any) -> ObjectArray:
        return ObjectArray(element_type, length)

    def for_each_element(self, container, action) -> None:
        for value in container:
            action(value)

    def deserialize_single(self, index: int, container: ObjectArray, value: Any) -> None:
        try:
            container[index] = value
        except TypeError as err:
            raise CoercionError(str(err)) from None


class PrimitiveArraySerializer(_ArraySerializer):
    """numpy-backed array of one primitive kind.

    A missing slot value reads as the kind's zero; anything else goes through
    the kind's parser and narrowing rule.
    """

    def __init__(self, kind: PrimitiveKind) -> None:
        self.kind = kind

    def applies(self, declared_type: Any) -> bool:
        return isinstance(declared_type, ArrayType) and declared_type.component is self.kind

    def create_new(self, length: int, element_type: Any) -> np.ndarray:
        return np.zeros(length, dtype=self.kind.dtype)

    def for_each_element(self, container, action) -> None:
        if not isinstance(container, np.ndarray) or container.dtype != self.kind.dtype:
            got = container.dtype if isinstance(container, np.ndarray) else type(container).__name__
            raise CoercionError(
                f"Expected a numpy array of {self.kind.dtype} for {self.kind.name}, got {got}"
            )
        for value in container:
            action(self.kind.box(value))

    def deserialize_single(self, index: int, container: np.ndarray, value: Any) -> None:
        container[index] = self.kind.zero if value is None else self.kind.coerce(value)

    def __repr__(self) -> str:
        return f"PrimitiveArraySerializer({self.kind.name})"


# ---------------------------------------------------------------------------
# Sets
# ---------------------------------------------------------------------------

class SetSerializer(ListChildSerializer):
    def applies(self, declared_type: Any) -> bool:
        return isinstance(declared_type, SetType)

    def element_type(self, declared_type: Any) -> Any:
        if not isinstance(declared_type, SetType) or declared_type.is_raw:
            raise RawTypeError("Raw types are not supported for collections")
        return declared_type.element

    def create_new(self, length: int, element_type: Any) -> LinkedSet:
        return LinkedSet()

    def for_each_element(self, container, action) -> None:
        for value in container:
            action(value)

    def deserialize_single(self, index: int, container: LinkedSet, value: Any) -> None:
        try:
            container.add(value)
        except TypeError:
            raise CoercionError(f"Set element {value!r} is not hashable") from None

    def finish(self, declared_type: Any, container: LinkedSet) -> Any:
        if declared_type.frozen:
            return frozenset(container)
        return container


# ---------------------------------------------------------------------------
# Strategy instances
# ---------------------------------------------------------------------------

OBJECT_ARRAY = ObjectArraySerializer()
PRIMITIVE_ARRAYS: dict[PrimitiveKind, PrimitiveArraySerializer] = {
    kind: PrimitiveArraySerializer(kind) for kind in PrimitiveKind
}
SET = SetSerializer()
