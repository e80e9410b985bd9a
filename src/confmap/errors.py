"""Error types raised while mapping configuration nodes to values."""

from __future__ import annotations


class MappingError(Exception):
    """Base error for every failed node <-> value conversion.

    ``path`` identifies the node that failed. It is attached once, by the
    innermost converter that knows the offending node, and kept as the error
    propagates outwards.
    """

    def __init__(self, message: str, path: tuple | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = path

    def init_path(self, path: tuple) -> None:
        if self.path is None:
            self.path = tuple(path)

    def __str__(self) -> str:
        if self.path is None:
            return self.message
        where = ".".join(str(p) for p in self.path) or "<root>"
        return f"{self.message} (at {where})"


class CoercionError(MappingError):
    """A value could not be coerced to the requested type."""


class RawTypeError(MappingError):
    """A declared collection type carries no element type."""


class NoSerializerError(MappingError):
    """No serializer is registered for a type."""
