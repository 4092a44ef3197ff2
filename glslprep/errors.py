"""
Exceptions raised by the GLSL preprocessor.

The public resolution API reports failures as ``None`` and sends a diagnostic
to the configured sink. These exceptions are used internally to carry the
failure up to that boundary, and by the command line interface.
"""


class PreprocessorError(Exception):
    """Base class for preprocessor errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class IncludeSyntaxError(PreprocessorError):
    """Raised for an ``#include`` line without a well-formed quoted name.

    Examples:
        >>> raise IncludeSyntaxError('#include foo')
        IncludeSyntaxError: Invalid include directive: #include foo
    """

    def __init__(self, line: str):
        """Initialize the exception with the offending line.

        Args:
            line: The full text of the malformed directive line
        """
        self.line = line
        super().__init__(f"Invalid include directive: {line}")


class ShaderResolutionError(PreprocessorError):
    """Raised when a top-level shader could not be resolved."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Failed to resolve shader source: {name}")
