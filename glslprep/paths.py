"""Path policies mapping a (source type, name) pair to a file on disk."""

from os import PathLike
from pathlib import Path
from typing import Protocol

from glslprep.models import SourceType


class PathPolicy(Protocol):
    """Interface for locating shader files."""

    def get_filepath(self, source_type: SourceType, name: str) -> Path:
        """Get the path of a shader file.

        Args:
            source_type: Whether the file is a top-level source or an include
            name: Name of the file as requested by the caller or directive

        Returns:
            Path of the file to read
        """
        ...


class SplitDirectories:
    """Keep sources and includes in two separate directory trees.

    By default both live under a common root, as ``<root>/src`` and
    ``<root>/include``.
    """

    def __init__(
        self,
        root: str | PathLike[str] = ".",
        *,
        src_root: str | PathLike[str] | None = None,
        include_root: str | PathLike[str] | None = None,
    ):
        """Initialize the policy.

        Args:
            root: Common parent of the ``src`` and ``include`` directories
            src_root: Explicit directory for top-level sources, overrides root
            include_root: Explicit directory for include fragments, overrides root
        """
        root = Path(root)
        self.src_root = Path(src_root) if src_root is not None else root / "src"
        self.include_root = (
            Path(include_root) if include_root is not None else root / "include"
        )

    @classmethod
    def from_roots(
        cls, src_root: str | PathLike[str], include_root: str | PathLike[str]
    ) -> "SplitDirectories":
        """Create a policy from two unrelated directories.

        Args:
            src_root: Directory holding top-level sources
            include_root: Directory holding include fragments

        Returns:
            A new path policy
        """
        return cls(src_root=src_root, include_root=include_root)

    def get_filepath(self, source_type: SourceType, name: str) -> Path:
        if source_type == SourceType.INCLUDE:
            return self.include_root / name
        return self.src_root / name

    def __repr__(self) -> str:
        return f"SplitDirectories(src={self.src_root}, include={self.include_root})"


class SharedDirectory:
    """Resolve sources and includes against one shared root."""

    def __init__(self, root: str | PathLike[str] = "."):
        self.root = Path(root)

    def get_filepath(self, source_type: SourceType, name: str) -> Path:
        return self.root / name

    def __repr__(self) -> str:
        return f"SharedDirectory({self.root})"
