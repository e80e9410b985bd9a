"""confmap: list-shaped serializers between configuration nodes and arrays/sets."""

from .config import LogLevel, MappingOptions, Settings
from .containers import (
    LinkedSet,
    ListChildSerializer,
    ObjectArray,
    ObjectArraySerializer,
    PrimitiveArraySerializer,
    SetSerializer,
)
from .errors import CoercionError, MappingError, NoSerializerError, RawTypeError
from .log import setup_logging
from .node import ConfigNode
from .registry import TypeSerializerCollection, default_serializers
from .types import ArrayType, PrimitiveKind, SetType, resolve_type

__all__ = [
    "ArrayType",
    "CoercionError",
    "ConfigNode",
    "LinkedSet",
    "ListChildSerializer",
    "LogLevel",
    "MappingError",
    "MappingOptions",
    "NoSerializerError",
    "ObjectArray",
    "ObjectArraySerializer",
    "PrimitiveArraySerializer",
    "PrimitiveKind",
    "RawTypeError",
    "SetSerializer",
    "SetType",
    "Settings",
    "TypeSerializerCollection",
    "default_serializers",
    "resolve_type",
    "setup_logging",
]
