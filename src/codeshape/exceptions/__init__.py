"""Exception hierarchy for codeshape."""

from .analysis import AnalysisError, FileAccessError, ParsingError
from .base import CodeshapeError
from .config import ConfigurationError, InvalidConfigError, InvalidPathError

__all__ = [
    "CodeshapeError",
    "AnalysisError",
    "FileAccessError",
    "ParsingError",
    "ConfigurationError",
    "InvalidPathError",
    "InvalidConfigError",
]
