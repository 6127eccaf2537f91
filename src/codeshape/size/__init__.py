"""Effective-line counting and file split suggestions."""

from .advisor import SizeAdvisor, generic_split
from .counter import count_effective_lines
from .models import FileSizeReport, FileSizeResult, SizeReport, SizeSummary, SplitStrategy

__all__ = [
    "SizeAdvisor",
    "generic_split",
    "count_effective_lines",
    "FileSizeReport",
    "FileSizeResult",
    "SizeReport",
    "SizeSummary",
    "SplitStrategy",
]
