"""Heuristic multi-label classification of what a file is responsible for."""

from .classifier import ResponsibilityClassifier, build_report, empty_result, overall_confidence
from .models import (
    ClassificationResult,
    ResponsibilityIndicator,
    ResponsibilityReport,
    ResponsibilityResult,
    SeparationStrategy,
)
from .predicates import compile_dispatch
from .rules import CATEGORIES

__all__ = [
    "ResponsibilityClassifier",
    "build_report",
    "empty_result",
    "overall_confidence",
    "ClassificationResult",
    "ResponsibilityIndicator",
    "ResponsibilityReport",
    "ResponsibilityResult",
    "SeparationStrategy",
    "compile_dispatch",
    "CATEGORIES",
]
