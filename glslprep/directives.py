"""Recognition of preprocessor directive lines."""

from glslprep.errors import IncludeSyntaxError

INCLUDE_PREFIX = "#include"
DEFINE_PREFIX = "#define "


def is_include_directive(line: str) -> bool:
    """Check whether a line is an include directive.

    Matching is anchored at column zero and case sensitive.
    """
    return line.startswith(INCLUDE_PREFIX)


def parse_include_name(line: str) -> str:
    """Extract the quoted file name from an include directive.

    Everything between the first and the last double quote is taken verbatim,
    so trailing text after the closing quote is not validated.

    Args:
        line: A line starting with ``#include``

    Returns:
        The name between the quotes

    Raises:
        IncludeSyntaxError: If the line has no opening quote or no closing
            quote after it
    """
    start = line.find('"')
    end = line.rfind('"')
    if start == -1 or end <= start:
        raise IncludeSyntaxError(line)
    return line[start + 1 : end]


def format_define(name: str, value: str) -> str:
    """Format a ``#define`` line, without the trailing newline."""
    return f"{DEFINE_PREFIX}{name} {value}"
