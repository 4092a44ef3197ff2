"""Command line interface for glslprep.

This module provides a command-line interface for flattening GLSL shaders,
either once or continuously while the shader files are edited.
"""

import os
import sys
import time
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar, cast

import arrow
import typer
import watchdog.events
import watchdog.observers
from loguru import logger
from watchdog.events import FileSystemEventHandler

from glslprep.diagnostics import loguru_logging
from glslprep.errors import ShaderResolutionError
from glslprep.files import (
    CachedFileProvider,
    FileProvider,
    SmartCachedFileProvider,
    UncachedFileProvider,
)
from glslprep.models import DEFAULT_VERSION_DIRECTIVE, ProcessorConfig
from glslprep.paths import PathPolicy, SharedDirectory, SplitDirectories
from glslprep.processor import ShaderSourceProcessor
from glslprep.providers import FileSourceProvider

F = TypeVar("F", bound=Callable[..., Any])


def typed_command(app_command: Any) -> Callable[[F], F]:
    """Wrap typer command with proper typing for mypy."""

    def decorator(func: F) -> F:
        return cast(F, app_command(func))

    return decorator


app = typer.Typer(
    name="glslprep",
    help=(
        "Flatten GLSL shaders by resolving #include directives. "
        "Commands: resolve, watch."
    ),
    add_completion=False,
)

_FILE_PROVIDERS: dict[str, type[FileProvider]] = {
    "none": UncachedFileProvider,
    "forever": CachedFileProvider,
    "smart": SmartCachedFileProvider,
}


def _configure_logging(verbose: bool) -> None:
    logger.enable("glslprep")
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "INFO")


def _parse_define(text: str) -> tuple[str, str | None]:
    """Parse a ``NAME`` or ``NAME=VALUE`` command line definition.

    Args:
        text: Raw option value

    Returns:
        Tuple of (name, value), value is None for a flag-only macro

    Raises:
        typer.BadParameter: If the name is empty
    """
    name, sep, value = text.partition("=")
    name = name.strip()
    if not name:
        raise typer.BadParameter(f"Invalid definition: {text!r}")
    return name, value if sep else None


def _build_config(version: str, defines: list[str] | None) -> ProcessorConfig:
    definitions = dict(_parse_define(text) for text in defines or [])
    return ProcessorConfig(version_directive=version, definitions=definitions)


def _build_processor(
    root: Path, shared: bool, cache: str, config: ProcessorConfig
) -> ShaderSourceProcessor:
    """Create a processor reading files under ``root``.

    Args:
        root: Root directory of the shader tree
        shared: Use one directory for sources and includes instead of
            ``src``/``include`` subdirectories
        cache: File caching strategy (none, forever, smart)
        config: Version directive and definitions

    Returns:
        Configured processor

    Raises:
        typer.BadParameter: If the cache strategy is unknown
    """
    if cache not in _FILE_PROVIDERS:
        raise typer.BadParameter(
            f"Unknown cache mode: {cache}. Expected one of: "
            f"{', '.join(_FILE_PROVIDERS)}"
        )

    policy: PathPolicy = SharedDirectory(root) if shared else SplitDirectories(root)
    provider = FileSourceProvider(_FILE_PROVIDERS[cache](), policy, loguru_logging)
    logger.debug(f"Using {policy!r} with {cache} cache")
    return ShaderSourceProcessor.from_config(config, provider, loguru_logging)


def _add_header_comments(code: str, shader_name: str) -> str:
    """Prepend comments identifying the tool and generation time."""
    timestamp = arrow.utcnow().format("YYYY-MM-DD HH:mm:ss UTC")
    header = f"// Generated by glslprep v{__import__('glslprep').__version__}\n"
    header += f"// Generation time: {timestamp}\n"
    header += f"// Source file: {shader_name}\n"
    header += "\n"
    return header + code


def _resolve(processor: ShaderSourceProcessor, shader_name: str, header: bool) -> str:
    """Resolve a shader, raising if it fails.

    Raises:
        ShaderResolutionError: If the processor could not resolve the shader
    """
    code = processor.resolve_source(shader_name)
    if code is None:
        raise ShaderResolutionError(shader_name)
    if header:
        code = _add_header_comments(code, shader_name)
    return code


def _write_output(code: str, output: Path | None) -> None:
    if output is None:
        typer.echo(code, nl=False)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    # newline="" keeps line endings exactly as resolved
    with open(output, "w", encoding="utf-8", newline="") as f:
        f.write(code)
    logger.info(f"Shader written to {output}")


SHADER_ARG = typer.Argument(..., help="Name of the top-level shader to resolve")
ROOT_OPTION = typer.Option(
    Path("."), "--root", "-r", help="Root directory of the shader tree"
)
SHARED_OPTION = typer.Option(
    False,
    "--shared",
    help="Look up sources and includes in the root itself, not in src/ and include/",
)
VERSION_OPTION = typer.Option(
    DEFAULT_VERSION_DIRECTIVE,
    "--glsl-version",
    "-g",
    help="Version directive emitted at the top of the shader",
)
DEFINE_OPTION = typer.Option(
    None, "--define", "-D", help="Definition as NAME or NAME=VALUE (repeatable)"
)
VERBOSE_OPTION = typer.Option(False, "--verbose", "-v", help="Enable debug logging")


@typed_command(app.command("resolve"))
def resolve_shader(
    shader: str = SHADER_ARG,
    output: Path | None = typer.Argument(
        None, help="Output file path (stdout if omitted)"
    ),
    root: Path = ROOT_OPTION,
    shared: bool = SHARED_OPTION,
    version: str = VERSION_OPTION,
    defines: list[str] | None = DEFINE_OPTION,
    cache: str = typer.Option(
        "none", "--cache", "-c", help="File caching strategy (none, forever, smart)"
    ),
    header: bool = typer.Option(
        False, "--header", help="Prepend generator and timestamp comments"
    ),
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Resolve a shader and write the flattened source.

    Example: glslprep resolve main.frag out/main.frag --root shaders -D USE_FOG
    """
    _configure_logging(verbose)
    config = _build_config(version, defines)
    processor = _build_processor(root, shared, cache, config)

    try:
        code = _resolve(processor, shader, header)
    except ShaderResolutionError as e:
        logger.error(str(e))
        raise typer.Exit(1) from e

    _write_output(code, output)


class ShaderChangeHandler(FileSystemEventHandler):  # type: ignore
    """Event handler flagging any change in the shader tree."""

    def __init__(self, output: Path):
        """Initialize shader change handler.

        Args:
            output: Output file, its own changes are ignored
        """
        self.output = os.path.abspath(output)
        self.needs_reload = False

    def on_any_event(self, event: watchdog.events.FileSystemEvent) -> None:
        """Handle file system event.

        Args:
            event: File system event
        """
        if event.is_directory or event.event_type in ("opened", "closed_no_write"):
            return
        if os.path.abspath(event.src_path) == self.output:
            return
        logger.info(f"Detected changes in {event.src_path}")
        self.needs_reload = True

    def consume_reload(self) -> bool:
        """Return whether a reload is pending and clear the flag."""
        if self.needs_reload:
            self.needs_reload = False
            return True
        return False


def _rebuild(
    processor: ShaderSourceProcessor, shader: str, output: Path, header: bool
) -> bool:
    """Resolve and write the shader, keeping the old output on failure."""
    try:
        code = _resolve(processor, shader, header)
    except ShaderResolutionError as e:
        logger.error(f"{e}, keeping previous output")
        return False
    _write_output(code, output)
    return True


@typed_command(app.command("watch"))
def watch_shader(
    shader: str = SHADER_ARG,
    output: Path = typer.Argument(..., help="Output file path"),
    root: Path = ROOT_OPTION,
    shared: bool = SHARED_OPTION,
    version: str = VERSION_OPTION,
    defines: list[str] | None = DEFINE_OPTION,
    header: bool = typer.Option(
        False, "--header", help="Prepend generator and timestamp comments"
    ),
    interval: float = typer.Option(
        0.1, "--interval", help="Seconds between checks for pending changes"
    ),
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Watch the shader tree and re-resolve on changes.

    Uses a cache that re-reads only files whose size or modification time
    changed.

    Example: glslprep watch main.frag out/main.frag --root shaders
    """
    _configure_logging(verbose)
    config = _build_config(version, defines)
    processor = _build_processor(root, shared, "smart", config)

    _rebuild(processor, shader, output, header)

    handler = ShaderChangeHandler(output)
    observer = watchdog.observers.Observer()
    observer.schedule(handler, path=str(root), recursive=True)
    observer.start()
    logger.info(f"Watching {root} for changes (press Ctrl+C to exit)...")

    try:
        while True:
            time.sleep(interval)
            if handler.consume_reload():
                _rebuild(processor, shader, output, header)
    except KeyboardInterrupt:
        logger.info("Keyboard interrupt received, stopping...")
    finally:
        observer.stop()
        observer.join()


if __name__ == "__main__":
    app()
