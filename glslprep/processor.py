"""
GLSL source processor.

Resolves ``#include`` directives recursively and prepends the version
directive and ``#define`` block to top-level sources, producing one flattened
string ready for compilation.
"""

from typing import Any

import numpy as np
from loguru import logger

from glslprep.diagnostics import DiagnosticSink, disabled_logging
from glslprep.directives import format_define, is_include_directive, parse_include_name
from glslprep.errors import IncludeSyntaxError
from glslprep.models import DEFAULT_VERSION_DIRECTIVE, ProcessorConfig, SourceType
from glslprep.providers import FileSourceProvider, SourceProvider


def format_definition_value(value: Any) -> str:
    """Convert a definition value to its GLSL text.

    Args:
        value: Value passed to ``define``; None means a flag-only macro

    Returns:
        Text placed after the macro name
    """
    if value is None:
        return ""
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, bool):
        # Preprocessor conditionals only understand integers
        return "1" if value else "0"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return np.format_float_positional(value, trim="0")
    return str(value)


class ShaderSourceProcessor:
    """Flatten GLSL sources by inlining their includes.

    Each included file is inlined at most once per call to
    :meth:`resolve_source`; later references to the same name are dropped.
    This also stops self-referencing includes from recursing forever.

    Examples:
        >>> from glslprep.providers import InMemorySourceProvider
        >>> processor = ShaderSourceProcessor(InMemorySourceProvider({
        ...     "a.glsl": '#include "b.glsl"\\nmain(){}',
        ...     "b.glsl": "X",
        ... }), version_directive="V")
        >>> processor.resolve_source("a.glsl")
        'V\\nX\\nmain(){}\\n'
    """

    def __init__(
        self,
        source_provider: SourceProvider | None = None,
        version_directive: str = DEFAULT_VERSION_DIRECTIVE,
        log: DiagnosticSink = disabled_logging,
    ):
        """Initialize the processor.

        Args:
            source_provider: Where shader text comes from, files under
                ``./src`` and ``./include`` by default
            version_directive: Line emitted first in every top-level source
            log: Sink for syntax diagnostics
        """
        self.source_provider = (
            source_provider
            if source_provider is not None
            else FileSourceProvider(log=log)
        )
        self.version_directive = version_directive
        self.log = log
        self._definitions: dict[str, str] = {}

    @classmethod
    def from_config(
        cls,
        config: ProcessorConfig,
        source_provider: SourceProvider | None = None,
        log: DiagnosticSink = disabled_logging,
    ) -> "ShaderSourceProcessor":
        """Create a processor from a configuration object.

        Args:
            config: Version directive and initial definitions
            source_provider: Where shader text comes from
            log: Sink for syntax diagnostics

        Returns:
            A configured processor
        """
        processor = cls(source_provider, config.version_directive, log)
        for name, value in config.definitions.items():
            processor.define(name, value)
        return processor

    @property
    def definitions(self) -> dict[str, str]:
        """Copy of the current definitions as name to text value."""
        return dict(self._definitions)

    def define(self, name: str, value: Any = None) -> None:
        """Add or replace a definition.

        Args:
            name: Macro name
            value: Macro value, or None for a flag-only macro
        """
        self._definitions[name] = format_definition_value(value)

    def undefine(self, name: str) -> None:
        """Remove a definition if it exists."""
        self._definitions.pop(name, None)

    def clear_definitions(self) -> None:
        """Remove all definitions."""
        self._definitions.clear()

    def resolve_source(self, name: str) -> str | None:
        """Resolve a top-level shader source.

        Args:
            name: Name of the source, passed to the source provider

        Returns:
            The flattened shader text, or None if the source, any include, or
            any include directive could not be processed
        """
        source = self.source_provider.get_source(SourceType.SOURCE, name)
        if source is None:
            return None

        logger.debug(f"Resolving shader source: {name}")
        included: set[str] = set()
        return self._process(source, SourceType.SOURCE, included)

    def _resolve_include(self, name: str, included: set[str]) -> str | None:
        source = self.source_provider.get_source(SourceType.INCLUDE, name)
        if source is None:
            return None
        return self._process(source, SourceType.INCLUDE, included)

    def _process(
        self, source: str, source_type: SourceType, included: set[str]
    ) -> str | None:
        parts: list[str] = []

        if source_type == SourceType.SOURCE:
            parts.append(self.version_directive + "\n")
            for name, value in self._definitions.items():
                parts.append(format_define(name, value) + "\n")

        for line in source.split("\n"):
            if not is_include_directive(line):
                parts.append(line + "\n")
                continue

            try:
                include_name = parse_include_name(line)
            except IncludeSyntaxError as e:
                self.log(e.message)
                return None

            if include_name in included:
                logger.debug(f"Skipping repeated include: {include_name}")
                continue

            # Mark before descending so a self-reference is skipped
            included.add(include_name)
            include = self._resolve_include(include_name, included)
            if include is None:
                return None
            parts.append(include)

        return "".join(parts)
