"""Scalar parsers and element serializers for leaf values."""

from __future__ import annotations

import re
from typing import Any, Protocol

import numpy as np

from .errors import CoercionError

_INT32 = (-(1 << 31), (1 << 31) - 1)
_INT64 = (-(1 << 63), (1 << 63) - 1)

_TRUE = {"true", "t", "yes", "y", "on", "1"}
_FALSE = {"false", "f", "no", "n", "off", "0"}

_HEX_RE = re.compile(r"^([+-]?)(?:0[xX]|#)([0-9a-fA-F]+)$")
_BIN_RE = re.compile(r"^([+-]?)0[bB]([01]+)$")


# ---------------------------------------------------------------------------
# Parsers
# ---------------------------------------------------------------------------

def parse_boolean(value: Any) -> bool:
    if isinstance(value, (bool, np.bool_)):
        return bool(value)
    if isinstance(value, (int, float, np.number)):
        return value != 0
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise CoercionError(f"Value {value!r} is not a boolean")


def _parse_whole(value: Any, bounds: tuple[int, int], type_name: str) -> int:
    if isinstance(value, (bool, np.bool_)):
        raise CoercionError(f"Value {value!r} is not a number")
    if isinstance(value, (int, np.integer)):
        result = int(value)
    elif isinstance(value, (float, np.floating)):
        if not float(value).is_integer():
            raise CoercionError(f"Value {value!r} has a fractional part")
        result = int(value)
    else:
        result = _parse_whole_text(str(value).strip())
    low, high = bounds
    if not low <= result <= high:
        raise CoercionError(f"Value {value!r} is out of range for {type_name}")
    return result


def _parse_whole_text(text: str) -> int:
    match = _HEX_RE.match(text)
    if match:
        return int(match.group(1) + match.group(2), 16)
    match = _BIN_RE.match(text)
    if match:
        return int(match.group(1) + match.group(2), 2)
    try:
        return int(text, 10)
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        raise CoercionError(f"Value {text!r} is not a whole number") from None
    if not number.is_integer():
        raise CoercionError(f"Value {text!r} has a fractional part")
    return int(number)


def parse_integer(value: Any) -> int:
    return _parse_whole(value, _INT32, "int")


def parse_long(value: Any) -> int:
    return _parse_whole(value, _INT64, "long")


def parse_char(value: Any) -> str:
    """Coerce to a single UTF-16 code unit.

    Accepts a one-character string or an integer code in ``0..0xFFFF``.
    """
    if isinstance(value, str):
        if len(value) == 1 and ord(value) <= 0xFFFF:
            return value
        raise CoercionError(f"Value {value!r} is not a single character")
    if isinstance(value, (int, np.integer)) and not isinstance(value, (bool, np.bool_)):
        if 0 <= value <= 0xFFFF:
            return chr(value)
        raise CoercionError(f"Value {value!r} is out of range for char")
    raise CoercionError(f"Value {value!r} is not a character")


def parse_double(value: Any) -> float:
    if isinstance(value, (bool, np.bool_)):
        raise CoercionError(f"Value {value!r} is not a number")
    if isinstance(value, (int, float, np.number)):
        return float(value)
    try:
        return float(str(value).strip())
    except ValueError:
        raise CoercionError(f"Value {value!r} is not a number") from None


def parse_float(value: Any) -> float:
    """Parse as a double, then round to single precision."""
    return float(np.float32(parse_double(value)))


# ---------------------------------------------------------------------------
# Element serializers
# ---------------------------------------------------------------------------

class TypeSerializer(Protocol):
    def deserialize(self, type_: Any, node) -> Any: ...

    def serialize(self, type_: Any, value: Any, node) -> None: ...


class _ScalarSerializer:
    """Reads a scalar node through ``parse``; an empty node reads as None."""

    parse = staticmethod(str)

    def deserialize(self, type_, node):
        if node.empty:
            return None
        return self.parse(node.scalar)

    def serialize(self, type_, value, node) -> None:
        node.set_value(None if value is None else self.parse(value))


class StringSerializer(_ScalarSerializer):
    pass


class IntSerializer(_ScalarSerializer):
    parse = staticmethod(parse_long)


class FloatSerializer(_ScalarSerializer):
    parse = staticmethod(parse_double)


class BoolSerializer(_ScalarSerializer):
    parse = staticmethod(parse_boolean)


class PrimitiveElementSerializer:
    """Element serializer for primitive array slots.

    The raw scalar is passed through unparsed: coercion and narrowing belong
    to the array strategy, which knows the slot width.
    """

    def deserialize(self, type_, node):
        if node.empty:
            return None
        return node.scalar

    def serialize(self, type_, value, node) -> None:
        node.set_value(value)
