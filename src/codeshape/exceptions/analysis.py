"""Analysis-related exceptions: file access and parsing."""

from pathlib import Path
from typing import Union

from .base import CodeshapeError


class AnalysisError(CodeshapeError):
    """Base class for analysis-related errors."""

    pass


class FileAccessError(AnalysisError):
    """Raised when a file cannot be read for a single-file analysis."""

    def __init__(self, filepath: Union[str, Path], reason: str):
        super().__init__(
            f"Cannot access file: {filepath}",
            details={"filepath": str(filepath), "reason": reason},
        )
        self.filepath = filepath
        self.reason = reason


class ParsingError(AnalysisError):
    """Raised when the parser cannot produce a syntax tree."""

    def __init__(self, filepath: Union[str, Path], language: str, reason: str):
        super().__init__(
            f"Failed to parse {language} file: {filepath}",
            details={"filepath": str(filepath), "language": language, "reason": reason},
        )
        self.filepath = filepath
        self.language = language
        self.reason = reason
