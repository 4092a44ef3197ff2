"""Diagnostic sinks.

A sink is any callable taking a single message string. The processor and the
source providers call it for every problem they detect; it cannot influence
control flow.
"""

from collections.abc import Callable

from loguru import logger

DiagnosticSink = Callable[[str], None]


def disabled_logging(message: str) -> None:
    """Discard the diagnostic."""


def loguru_logging(message: str) -> None:
    """Report the diagnostic as a loguru warning."""
    logger.warning(f"[GLSL] {message}")


def loguru_error_logging(message: str) -> None:
    """Report the diagnostic as a loguru error."""
    logger.error(f"[GLSL] {message}")


class CollectingSink:
    """Sink that keeps every diagnostic it receives.

    Useful when the caller wants to show all problems at once, e.g. in an
    editor panel, instead of streaming them to a log.
    """

    def __init__(self) -> None:
        self.messages: list[str] = []

    def __call__(self, message: str) -> None:
        self.messages.append(message)

    def clear(self) -> None:
        self.messages.clear()
