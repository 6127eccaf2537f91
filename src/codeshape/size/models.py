"""Data models for the size advisor."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

SplitType = Literal["component", "hook", "utility", "type"]


@dataclass
class SplitStrategy:
    """A proposed decomposition of an oversized file."""

    type: SplitType
    target_files: list[str]
    description: str
    estimated_effort: Literal["low", "medium", "high"]

    def to_dict(self) -> dict:
        return {
            "type": self.type,
            "target_files": list(self.target_files),
            "description": self.description,
            "estimated_effort": self.estimated_effort,
        }


@dataclass
class SizeReport:
    line_count: int
    exceeds_threshold: bool
    split_suggestions: list[SplitStrategy] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "line_count": self.line_count,
            "exceeds_threshold": self.exceeds_threshold,
            "split_suggestions": [s.to_dict() for s in self.split_suggestions],
        }


@dataclass
class FileSizeResult:
    file_path: str
    report: SizeReport

    def to_dict(self) -> dict:
        return {"file_path": self.file_path, **self.report.to_dict()}


@dataclass
class SizeSummary:
    total_files: int
    oversized_files: int
    average_file_size: int
    total_suggestions: int
    threshold: int

    def to_dict(self) -> dict:
        return {
            "total_files": self.total_files,
            "oversized_files": self.oversized_files,
            "average_file_size": self.average_file_size,
            "total_suggestions": self.total_suggestions,
            "threshold": self.threshold,
        }


@dataclass
class FileSizeReport:
    results: list[FileSizeResult]
    summary: SizeSummary

    def to_dict(self) -> dict:
        return {
            "results": [r.to_dict() for r in self.results],
            "summary": self.summary.to_dict(),
        }
