"""Data models for responsibility classification."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from ..models import Issue, Recommendation


@dataclass
class ResponsibilityIndicator:
    """One scored piece of evidence that a file does a kind of work."""

    category: str
    description: str
    line: int
    column: int
    confidence: float
    evidence: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.confidence = min(max(self.confidence, 0.0), 1.0)

    def to_dict(self) -> dict:
        return {
            "category": self.category,
            "description": self.description,
            "location": {"line": self.line, "column": self.column},
            "confidence": self.confidence,
            "evidence": list(self.evidence),
        }


@dataclass
class SeparationStrategy:
    type: Literal["domain", "layer", "feature"]
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
class ClassificationResult:
    """Responsibility labels present in a file, in first-seen order."""

    responsibilities: list[str] = field(default_factory=list)
    has_multiple_responsibilities: bool = False
    separation_suggestions: list[SeparationStrategy] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "responsibilities": list(self.responsibilities),
            "has_multiple_responsibilities": self.has_multiple_responsibilities,
            "separation_suggestions": [s.to_dict() for s in self.separation_suggestions],
        }


@dataclass
class ResponsibilityResult:
    file_path: str
    analysis: ClassificationResult
    issues: list[Issue] = field(default_factory=list)
    recommendations: list[Recommendation] = field(default_factory=list)
    confidence: float = 0.0
    indicators: list[ResponsibilityIndicator] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "file_path": self.file_path,
            "analysis": self.analysis.to_dict(),
            "issues": [i.to_dict() for i in self.issues],
            "recommendations": [r.to_dict() for r in self.recommendations],
            "confidence": self.confidence,
            "indicators": [i.to_dict() for i in self.indicators],
        }


@dataclass
class ResponsibilityReport:
    total_files: int
    files_with_multiple_responsibilities: int
    average_responsibilities: float
    results: list[ResponsibilityResult]
    most_common_issues: list[str] = field(default_factory=list)
    recommended_actions: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "total_files": self.total_files,
            "files_with_multiple_responsibilities": self.files_with_multiple_responsibilities,
            "average_responsibilities": self.average_responsibilities,
            "results": [r.to_dict() for r in self.results],
            "summary": {
                "most_common_issues": list(self.most_common_issues),
                "recommended_actions": list(self.recommended_actions),
            },
        }
