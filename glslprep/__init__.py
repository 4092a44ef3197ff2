from loguru import logger

from glslprep.diagnostics import (
    CollectingSink,
    disabled_logging,
    loguru_error_logging,
    loguru_logging,
)
from glslprep.errors import IncludeSyntaxError, PreprocessorError
from glslprep.files import (
    CachedFileProvider,
    SmartCachedFileProvider,
    UncachedFileProvider,
)
from glslprep.models import ProcessorConfig, SourceType
from glslprep.paths import SharedDirectory, SplitDirectories
from glslprep.processor import ShaderSourceProcessor
from glslprep.providers import FileSourceProvider, InMemorySourceProvider

__version__ = "0.1.0"

# Library traces stay silent until an application enables them
logger.disable("glslprep")
logger.enable("glslprep.diagnostics")


__all__ = [
    "CachedFileProvider",
    "CollectingSink",
    "FileSourceProvider",
    "InMemorySourceProvider",
    "IncludeSyntaxError",
    "PreprocessorError",
    "ProcessorConfig",
    "ShaderSourceProcessor",
    "SharedDirectory",
    "SmartCachedFileProvider",
    "SourceType",
    "SplitDirectories",
    "UncachedFileProvider",
    "disabled_logging",
    "loguru_error_logging",
    "loguru_logging",
]
