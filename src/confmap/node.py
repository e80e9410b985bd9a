"""ConfigNode: a mutable configuration tree holding scalars and lists."""

from __future__ import annotations

from typing import Any, TYPE_CHECKING

from .errors import CoercionError, NoSerializerError
from .types import resolve_type

if TYPE_CHECKING:
    from .config import MappingOptions


class ConfigNode:
    """A node of the configuration tree.

    A node is empty, holds a scalar, or holds an ordered list of child nodes.
    Children know their key (list index) and parent, so every node can report
    its ``path`` from the root. Options live on the root and are shared by
    every descendant.
    """

    __slots__ = ("key", "parent", "_options", "_value", "_children")

    def __init__(
        self,
        key: Any = None,
        parent: ConfigNode | None = None,
        options: MappingOptions | None = None,
    ) -> None:
        self.key = key
        self.parent = parent
        self._options = options
        self._value: Any = None
        self._children: list[ConfigNode] | None = None

    @classmethod
    def root(cls, value: Any = None, options: MappingOptions | None = None) -> ConfigNode:
        node = cls(options=options)
        node.set_value(value)
        return node

    # -- Structure ------------------------------------------------------

    @property
    def options(self) -> MappingOptions:
        if self.parent is not None:
            return self.parent.options
        if self._options is None:
            from .config import MappingOptions
            self._options = MappingOptions.defaults()
        return self._options

    @property
    def path(self) -> tuple:
        if self.parent is None:
            return ()
        return self.parent.path + (self.key,)

    @property
    def empty(self) -> bool:
        return self._children is None and self._value is None

    @property
    def is_list(self) -> bool:
        return self._children is not None

    @property
    def child_count(self) -> int:
        return len(self._children) if self._children is not None else 0

    def children_list(self) -> list[ConfigNode]:
        return list(self._children) if self._children is not None else []

    def node(self, *path: int) -> ConfigNode:
        """Walk list indices down from this node."""
        current = self
        for index in path:
            if current._children is None or not 0 <= index < len(current._children):
                raise IndexError(f"No child {index} at {current.path!r}")
            current = current._children[index]
        return current

    # -- Values ---------------------------------------------------------

    @property
    def scalar(self) -> Any:
        if self._children is not None:
            raise CoercionError("Expected a scalar value, got a list", self.path)
        return self._value

    def raw(self) -> Any:
        if self._children is not None:
            return [child.raw() for child in self._children]
        return self._value

    def set_value(self, value: Any) -> ConfigNode:
        """Replace this node's content with a plain Python value.

        Lists and tuples become child nodes; None empties the node.
        """
        if isinstance(value, ConfigNode):
            value = value.raw()
        self.clear()
        if isinstance(value, (list, tuple)):
            self._children = []
            for item in value:
                self.append_list_node().set_value(item)
        else:
            self._value = value
        return self

    def set_list(self, length: int) -> ConfigNode:
        self.clear()
        self._children = [ConfigNode(key=i, parent=self) for i in range(length)]
        return self

    def append_list_node(self) -> ConfigNode:
        if self._children is None:
            self._value = None
            self._children = []
        child = ConfigNode(key=len(self._children), parent=self)
        self._children.append(child)
        return child

    def take_children(self, other: ConfigNode) -> ConfigNode:
        """Move *other*'s list children under this node, leaving *other* empty."""
        children = other._children if other._children is not None else []
        other.clear()
        self.clear()
        self._children = children
        for index, child in enumerate(children):
            child.parent = self
            child.key = index
        return self

    def clear(self) -> None:
        self._value = None
        self._children = None

    # -- Typed access ---------------------------------------------------

    def _serializer(self, type_: Any):
        serializer = self.options.serializers.get(type_)
        if serializer is None:
            raise NoSerializerError(f"No applicable type serializer for type {type_!r}", self.path)
        return serializer

    def get(self, type_: Any) -> Any:
        """Deserialize this node as ``type_`` using the registered serializers."""
        type_ = resolve_type(type_)
        return self._serializer(type_).deserialize(type_, self)

    def set(self, type_: Any, value: Any) -> ConfigNode:
        type_ = resolve_type(type_)
        self._serializer(type_).serialize(type_, value, self)
        return self

    def __repr__(self) -> str:
        return f"ConfigNode(path={self.path!r}, value={self.raw()!r})"
