"""Issue and recommendation records shared by every analyzer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

Severity = Literal["low", "medium", "high"]
Effort = Literal["low", "medium", "high"]

SEVERITY_RANK: dict[str, int] = {"low": 0, "medium": 1, "high": 2}


@dataclass
class Issue:
    """A problem found in one file.

    ``type`` names the analyzer concern (dependency, circular-dependency,
    responsibility, size); ``location`` is the file path.
    """

    type: str
    severity: Severity
    description: str
    location: str

    def to_dict(self) -> dict:
        return {
            "type": self.type,
            "severity": self.severity,
            "description": self.description,
            "location": self.location,
        }


@dataclass
class Recommendation:
    """A suggested change, ranked by ``priority`` (higher first)."""

    type: str
    priority: int
    description: str
    estimated_effort: Effort
    benefits: list[str] = field(default_factory=list)
    risks: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "type": self.type,
            "priority": self.priority,
            "description": self.description,
            "estimated_effort": self.estimated_effort,
            "benefits": list(self.benefits),
            "risks": list(self.risks),
        }
