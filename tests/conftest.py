"""Fixtures and configuration for pytest."""

from pathlib import Path

import pytest

from glslprep.diagnostics import CollectingSink


class ShaderTree:
    """Temporary shader tree with ``src`` and ``include`` directories."""

    def __init__(self, root: Path):
        self.root = root
        (root / "src").mkdir()
        (root / "include").mkdir()

    def write(self, directory: str, name: str, text: str) -> Path:
        path = self.root / directory / name
        path.parent.mkdir(parents=True, exist_ok=True)
        # Bytes keep line endings as written
        path.write_bytes(text.encode("utf-8"))
        return path

    def source(self, name: str, text: str) -> Path:
        return self.write("src", name, text)

    def include(self, name: str, text: str) -> Path:
        return self.write("include", name, text)


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "cli: mark test as a command line test")


@pytest.fixture
def sink():
    """Fixture providing a sink that records diagnostics."""
    return CollectingSink()


@pytest.fixture
def shader_tree(tmp_path):
    """Fixture providing an empty split-directory shader tree."""
    return ShaderTree(tmp_path)
