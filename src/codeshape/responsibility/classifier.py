"""Responsibility classification.

One walk over the shared syntax tree collects indicators; aggregation
turns them into responsibility labels, issues, recommendations and a
confidence score.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Iterable, Optional

from ..config import ResponsibilityConfig
from ..models import Issue, Recommendation
from ..scanning.syntax import ParsedSource
from . import rules
from .models import (
    ClassificationResult,
    ResponsibilityIndicator,
    ResponsibilityReport,
    ResponsibilityResult,
    SeparationStrategy,
)
from .predicates import compile_dispatch

logger = logging.getLogger(__name__)

READ_FAILURE = "Failed to read file"
REPORT_TOP_N = 5


class ResponsibilityClassifier:
    """Scores a parsed file against the category predicates.

    Usage:
        classifier = ResponsibilityClassifier()
        result = classifier.classify(parsed)
        result.analysis.responsibilities   # ["UI Rendering", "Data Access"]
    """

    def __init__(self, config: Optional[ResponsibilityConfig] = None):
        self.config = config or ResponsibilityConfig()
        self._dispatch = compile_dispatch(self.config.enable_heuristics)

    def collect_indicators(self, parsed: ParsedSource) -> list[ResponsibilityIndicator]:
        indicators = []
        for node in parsed.walk():
            for tag, predicate in self._dispatch.get(node.kind, ()):
                if predicate(node):
                    rule = rules.CATEGORIES[tag]
                    indicators.append(
                        ResponsibilityIndicator(
                            category=tag,
                            description=rule.description,
                            line=node.line,
                            column=node.column,
                            confidence=rule.confidence,
                            evidence=list(rule.evidence),
                        )
                    )
        return indicators

    def classify(self, parsed: ParsedSource) -> ResponsibilityResult:
        indicators = self.collect_indicators(parsed)
        analysis = self.aggregate(indicators)
        categories = {i.category for i in indicators}

        result = ResponsibilityResult(
            file_path=parsed.path,
            analysis=analysis,
            issues=self._issues(parsed.path, analysis, categories),
            recommendations=self._recommendations(analysis, categories),
            confidence=overall_confidence(indicators),
            indicators=indicators,
        )
        logger.debug(
            "%s: %d indicators -> %s",
            parsed.path,
            len(indicators),
            ", ".join(analysis.responsibilities) or "none",
        )
        return result

    def aggregate(self, indicators: list[ResponsibilityIndicator]) -> ClassificationResult:
        groups: dict[str, list[ResponsibilityIndicator]] = {}
        for indicator in indicators:
            groups.setdefault(indicator.category, []).append(indicator)

        responsibilities = []
        suggestions = []
        for tag, group in groups.items():
            average = sum(i.confidence for i in group) / len(group)
            if len(group) * average <= rules.PRESENCE_THRESHOLD:
                continue
            rule = rules.CATEGORIES[tag]
            responsibilities.append(rule.label)
            if len(group) > 1 or average > rules.SEPARATION_CONFIDENCE:
                suggestions.append(
                    SeparationStrategy(
                        type=rule.strategy,
                        target_files=[f"{tag}-extracted.ts"],
                        description=rule.strategy_description,
                        estimated_effort=(
                            "high" if len(group) > rules.HIGH_EFFORT_INDICATORS else "medium"
                        ),
                    )
                )

        return ClassificationResult(
            responsibilities=responsibilities,
            has_multiple_responsibilities=len(responsibilities) > self.config.effective_max,
            separation_suggestions=suggestions,
        )

    def _issues(
        self, path: str, analysis: ClassificationResult, categories: set[str]
    ) -> list[Issue]:
        issues = []
        if analysis.has_multiple_responsibilities:
            count = len(analysis.responsibilities)
            severity = "high" if count > rules.HIGH_SEVERITY_RESPONSIBILITIES else "medium"
            issues.append(
                Issue(
                    "responsibility",
                    severity,
                    f"File has {count} different responsibilities: "
                    + ", ".join(analysis.responsibilities),
                    path,
                )
            )

        for required, severity, description in rules.COMBINATION_ISSUES:
            if required <= categories:
                issues.append(Issue("responsibility", severity, description, path))
        return issues

    def _recommendations(
        self, analysis: ClassificationResult, categories: set[str]
    ) -> list[Recommendation]:
        if not analysis.has_multiple_responsibilities:
            return []

        recommendations = []
        for template in rules.RECOMMENDATIONS:
            if template.category not in categories:
                continue
            if template.needs_company and len(categories) < 2:
                continue
            recommendations.append(
                Recommendation(
                    type="split",
                    priority=template.priority,
                    description=template.description,
                    estimated_effort=template.effort,
                    benefits=list(template.benefits),
                    risks=list(template.risks),
                )
            )
        return recommendations


def overall_confidence(indicators: list[ResponsibilityIndicator]) -> float:
    """Average indicator confidence plus a diversity bonus, capped at 1."""
    if not indicators:
        return 0.0
    average = sum(i.confidence for i in indicators) / len(indicators)
    bonus = min(len(indicators) / rules.DIVERSITY_STEP, rules.DIVERSITY_BONUS_CAP)
    return min(average + bonus, 1.0)


def empty_result(path: str, reason: str) -> ResponsibilityResult:
    """Result for a file that could not be read or parsed."""
    return ResponsibilityResult(
        file_path=path,
        analysis=ClassificationResult(),
        issues=[Issue("responsibility", "low", reason, path)],
        confidence=0.0,
    )


def build_report(results: Iterable[ResponsibilityResult]) -> ResponsibilityReport:
    results = list(results)
    total = len(results)
    multiple = sum(1 for r in results if r.analysis.has_multiple_responsibilities)
    labels = sum(len(r.analysis.responsibilities) for r in results)

    issue_counts: Counter = Counter()
    action_counts: Counter = Counter()
    for result in results:
        issue_counts.update(i.description for i in result.issues)
        action_counts.update(r.description for r in result.recommendations)

    return ResponsibilityReport(
        total_files=total,
        files_with_multiple_responsibilities=multiple,
        average_responsibilities=labels / total if total else 0.0,
        results=results,
        most_common_issues=[d for d, _ in issue_counts.most_common(REPORT_TOP_N)],
        recommended_actions=[d for d, _ in action_counts.most_common(REPORT_TOP_N)],
    )
