"""Data models shared across the preprocessor."""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any

DEFAULT_VERSION_DIRECTIVE = "#version 450 core"


class SourceType(Enum):
    """Role of a shader file in a resolution.

    SOURCE files are entry points and receive the version directive and the
    definition block. INCLUDE files are fragments pulled in by ``#include``.
    """

    SOURCE = auto()
    INCLUDE = auto()


@dataclass
class ProcessorConfig:
    """Configuration for a shader source processor."""

    version_directive: str = DEFAULT_VERSION_DIRECTIVE
    # None registers a flag-only macro
    definitions: dict[str, Any] = field(default_factory=dict)
