"""Settings and per-tree mapping options.

Environment variables:
- CONFMAP_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR
- CONFMAP_STRICT_LISTS: "false" lets a scalar node read as a one-element list
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum

from .registry import TypeSerializerCollection, default_serializers


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


@dataclass
class Settings:
    """Process-wide defaults read from the environment."""

    log_level: LogLevel = field(
        default_factory=lambda: LogLevel(os.getenv("CONFMAP_LOG_LEVEL", "WARNING").upper())
    )
    strict_lists: bool = field(
        default_factory=lambda: os.getenv("CONFMAP_STRICT_LISTS", "true").lower() == "true"
    )


@dataclass(frozen=True)
class MappingOptions:
    """Options shared by every node of one configuration tree."""

    serializers: TypeSerializerCollection
    strict_lists: bool = True

    @classmethod
    def defaults(cls, settings: Settings | None = None) -> MappingOptions:
        settings = settings or Settings()
        return cls(serializers=default_serializers(), strict_lists=settings.strict_lists)
