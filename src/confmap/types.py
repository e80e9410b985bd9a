"""Declared types: primitive kinds, array types and set types."""

from __future__ import annotations

import collections.abc
import typing
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Callable

import numpy as np

from .scalars import (
    parse_boolean,
    parse_char,
    parse_double,
    parse_float,
    parse_integer,
    parse_long,
)


# ---------------------------------------------------------------------------
# PrimitiveKind
# ---------------------------------------------------------------------------

def _wrap(bits: int) -> Callable[[int], int]:
    """Two's-complement truncation to ``bits`` wide, like a narrowing cast."""
    modulus = 1 << bits
    half = modulus >> 1

    def narrow(value: int) -> int:
        value &= modulus - 1
        return value - modulus if value >= half else value

    return narrow


def _identity(value: Any) -> Any:
    return value


@dataclass(frozen=True, slots=True)
class PrimitiveSpec:
    zero: Any
    dtype: np.dtype
    parse: Callable[[Any], Any]
    narrow: Callable[[Any], Any]
    box: Callable[[Any], Any]


class PrimitiveKind(Enum):
    BOOLEAN = auto()
    BYTE = auto()
    CHAR = auto()
    SHORT = auto()
    INT = auto()
    LONG = auto()
    FLOAT = auto()
    DOUBLE = auto()

    @property
    def spec(self) -> PrimitiveSpec:
        return _SPECS[self]

    @property
    def zero(self) -> Any:
        return self.spec.zero

    @property
    def dtype(self) -> np.dtype:
        return self.spec.dtype

    def coerce(self, value: Any) -> Any:
        """Parse and narrow *value* into a storable slot value."""
        return self.spec.narrow(self.spec.parse(value))

    def box(self, stored: Any) -> Any:
        """Convert a stored numpy scalar back to a plain Python value."""
        return self.spec.box(stored)

    @classmethod
    def from_dtype(cls, dtype: Any) -> PrimitiveKind | None:
        try:
            dtype = np.dtype(dtype)
        except TypeError:
            return None
        for kind, spec in _SPECS.items():
            # CHAR shares uint16 storage but is never inferred from a dtype
            if kind is not cls.CHAR and spec.dtype == dtype:
                return kind
        return None


# CHAR slots hold UTF-16 code units
_SPECS: dict[PrimitiveKind, PrimitiveSpec] = {
    PrimitiveKind.BOOLEAN: PrimitiveSpec(False, np.dtype(np.bool_), parse_boolean, _identity, bool),
    PrimitiveKind.BYTE: PrimitiveSpec(0, np.dtype(np.int8), parse_integer, _wrap(8), int),
    PrimitiveKind.CHAR: PrimitiveSpec(0, np.dtype(np.uint16), parse_char, ord, lambda v: chr(int(v))),
    PrimitiveKind.SHORT: PrimitiveSpec(0, np.dtype(np.int16), parse_integer, _wrap(16), int),
    PrimitiveKind.INT: PrimitiveSpec(0, np.dtype(np.int32), parse_integer, _identity, int),
    PrimitiveKind.LONG: PrimitiveSpec(0, np.dtype(np.int64), parse_long, _identity, int),
    PrimitiveKind.FLOAT: PrimitiveSpec(0.0, np.dtype(np.float32), parse_float, _identity, float),
    PrimitiveKind.DOUBLE: PrimitiveSpec(0.0, np.dtype(np.float64), parse_double, _identity, float),
}


# ---------------------------------------------------------------------------
# Declared container types
# ---------------------------------------------------------------------------

def _is_numpy_scalar_type(component: Any) -> bool:
    if isinstance(component, np.dtype):
        return True
    return isinstance(component, type) and issubclass(component, np.generic)


@dataclass(frozen=True, slots=True)
class ArrayType:
    """Array of ``component``.

    A ``PrimitiveKind`` (or a numpy scalar type naming one) makes a primitive
    array; anything else makes an object array.
    """

    component: Any

    def __post_init__(self) -> None:
        if _is_numpy_scalar_type(self.component):
            kind = PrimitiveKind.from_dtype(self.component)
            if kind is None:
                raise TypeError(f"No primitive kind for dtype {self.component!r}")
            object.__setattr__(self, "component", kind)

    @property
    def is_primitive(self) -> bool:
        return isinstance(self.component, PrimitiveKind)


@dataclass(frozen=True, slots=True)
class SetType:
    """``Set<element>``; ``element`` is None for a raw set type.

    A ``frozen`` set is built in insertion order, then returned as a
    ``frozenset`` so it can itself be a set element.
    """

    element: Any = None
    frozen: bool = False

    @property
    def is_raw(self) -> bool:
        return self.element is None


_SET_ORIGINS = (set, collections.abc.Set, collections.abc.MutableSet)
_FROZEN_SET_ORIGINS = (frozenset,)


def resolve_type(hint: Any) -> Any:
    """Translate a Python typing hint into a declared type.

    ``set[int]`` becomes ``SetType(int)`` and ``frozenset[int]`` becomes
    ``SetType(int, frozen=True)``; an unparameterised set hint becomes a raw
    ``SetType()``. Other hints are returned unchanged.
    """
    if isinstance(hint, (ArrayType, SetType)):
        return hint
    origin = typing.get_origin(hint)
    if origin in _SET_ORIGINS or origin in _FROZEN_SET_ORIGINS:
        args = typing.get_args(hint)
        element = resolve_type(args[0]) if args else None
        return SetType(element, frozen=origin in _FROZEN_SET_ORIGINS)
    if hint in _SET_ORIGINS:
        return SetType()
    if hint in _FROZEN_SET_ORIGINS:
        return SetType(frozen=True)
    return hint
