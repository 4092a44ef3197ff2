"""Source providers: turn a (source type, name) pair into shader text."""

from collections.abc import Mapping
from typing import Protocol

from glslprep.diagnostics import DiagnosticSink, disabled_logging
from glslprep.files import FileProvider, UncachedFileProvider
from glslprep.models import SourceType
from glslprep.paths import PathPolicy, SplitDirectories


class SourceProvider(Protocol):
    """Interface for retrieving raw shader text."""

    def get_source(self, source_type: SourceType, name: str) -> str | None:
        """Get the raw text of a shader file.

        Args:
            source_type: Whether a top-level source or an include is requested
            name: Name of the file

        Returns:
            The file's text, or None if it is not available
        """
        ...


class FileSourceProvider:
    """Read shader sources from the file system.

    Combines a path policy, which decides where a file lives, with a file
    provider, which decides how (and whether to cache) it is read.
    """

    def __init__(
        self,
        file_provider: FileProvider | None = None,
        path_policy: PathPolicy | None = None,
        log: DiagnosticSink = disabled_logging,
    ):
        """Initialize the provider.

        Args:
            file_provider: Reading strategy, uncached by default
            path_policy: Path mapping, split ``src``/``include`` directories
                under the working directory by default
            log: Sink for read failures
        """
        self.file_provider = (
            file_provider if file_provider is not None else UncachedFileProvider()
        )
        self.path_policy = path_policy if path_policy is not None else SplitDirectories()
        self.log = log

    def get_source(self, source_type: SourceType, name: str) -> str | None:
        filepath = self.path_policy.get_filepath(source_type, name)
        source = self.file_provider.get_string(filepath)
        if source is None:
            self.log(f"Failed to open/read shader file: {filepath}")
        return source


class InMemorySourceProvider:
    """Serve shader sources from a mapping.

    Keys may be plain names, shared by both source types, or
    ``(SourceType, name)`` tuples for role-specific entries. Role-specific
    entries win over plain names.
    """

    def __init__(
        self,
        sources: Mapping[str | tuple[SourceType, str], str] | None = None,
        log: DiagnosticSink = disabled_logging,
    ):
        self.sources: dict[str | tuple[SourceType, str], str] = dict(sources or {})
        self.log = log

    def add(
        self, name: str, text: str, source_type: SourceType | None = None
    ) -> None:
        """Register shader text.

        Args:
            name: Name the text is retrieved under
            text: Shader text
            source_type: Restrict the entry to one source type, or None for both
        """
        key: str | tuple[SourceType, str] = (
            name if source_type is None else (source_type, name)
        )
        self.sources[key] = text

    def get_source(self, source_type: SourceType, name: str) -> str | None:
        source = self.sources.get((source_type, name))
        if source is None:
            source = self.sources.get(name)
        if source is None:
            self.log(f"Failed to open/read shader file: {name}")
        return source
