"""Size advisor: flags oversized files and proposes how to split them."""

from __future__ import annotations

import logging
import math
import os
import re
from dataclasses import replace
from typing import Any, Iterable, Optional

from ..config import FileSizeConfig
from ..models import Issue, Recommendation
from .counter import count_effective_lines
from .models import FileSizeReport, FileSizeResult, SizeReport, SizeSummary, SplitStrategy

logger = logging.getLogger(__name__)

_COMPONENT = re.compile(r"(?:function|const)\s+([A-Z][a-zA-Z0-9]*)\s*(?:\(|=)")
_HOOK = re.compile(r"const\s+(use[A-Z][a-zA-Z0-9]*)\s*=")
_EXPORTED_FUNCTION = re.compile(r"export\s+(?:function|const)\s+([a-zA-Z][a-zA-Z0-9]*)")
_TYPE_DECLARATION = re.compile(r"(?:interface|type|enum)\s+[A-Z][a-zA-Z0-9]*")

MIN_COMPONENTS = 2
MANY_COMPONENTS = 3
MIN_UTILITY_EXPORTS = 6
MIN_TYPE_DECLARATIONS = 4
LARGE_GENERIC_SPLIT = 800


def _split_name(path: str) -> tuple[str, str]:
    """(path without extension, extension without dot)."""
    base, ext = os.path.splitext(path)
    return base, ext.lstrip(".")


def component_splits(path: str, text: str) -> list[SplitStrategy]:
    """Component and hook extraction for JSX files."""
    suggestions = []
    base, ext = _split_name(path)

    components = _COMPONENT.findall(text)
    if len(components) >= MIN_COMPONENTS:
        suggestions.append(
            SplitStrategy(
                type="component",
                target_files=[f"{base}-{i}.{ext}" for i in range(1, len(components) + 1)],
                description=f"Split into {len(components)} separate component files",
                estimated_effort="high" if len(components) > MANY_COMPONENTS else "medium",
            )
        )

    hooks = _HOOK.findall(text)
    if hooks:
        hooks_dir = os.path.join(os.path.dirname(path), "hooks")
        suggestions.append(
            SplitStrategy(
                type="hook",
                target_files=[os.path.join(hooks_dir, f"{hook}.ts") for hook in hooks],
                description=f"Extract {len(hooks)} custom hooks to separate files",
                estimated_effort="medium",
            )
        )
    return suggestions


def utility_splits(path: str, text: str) -> list[SplitStrategy]:
    functions = _EXPORTED_FUNCTION.findall(text)
    if len(functions) < MIN_UTILITY_EXPORTS:
        return []
    base, ext = _split_name(path)
    return [
        SplitStrategy(
            type="utility",
            target_files=[f"{base}-core.{ext}", f"{base}-helpers.{ext}"],
            description=f"Split {len(functions)} utility functions into focused modules",
            estimated_effort="medium",
        )
    ]


def type_split(path: str, text: str) -> Optional[SplitStrategy]:
    declarations = _TYPE_DECLARATION.findall(text)
    if len(declarations) < MIN_TYPE_DECLARATIONS:
        return None
    base, _ = _split_name(path)
    return SplitStrategy(
        type="type",
        target_files=[f"{base}.types.ts"],
        description=f"Extract {len(declarations)} type definitions to separate types file",
        estimated_effort="low",
    )


def generic_split(path: str, line_count: int, threshold: int) -> SplitStrategy:
    base, ext = _split_name(path)
    parts = math.ceil(line_count / threshold)
    return SplitStrategy(
        type="utility",
        target_files=[f"{base}-part{i}.{ext}" for i in range(1, parts + 1)],
        description=f"Split large file ({line_count} lines) into {parts} smaller files",
        estimated_effort="high" if line_count > LARGE_GENERIC_SPLIT else "medium",
    )


class SizeAdvisor:
    """Counts effective lines and proposes splits above the threshold."""

    def __init__(self, config: Optional[FileSizeConfig] = None):
        self.config = config or FileSizeConfig()

    def get_config(self) -> FileSizeConfig:
        return self.config

    def update_config(self, **changes: Any) -> FileSizeConfig:
        self.config = replace(self.config, **changes)
        return self.config

    def measure(self, path: str, text: Optional[str]) -> SizeReport:
        """Size report for one file; unreadable or empty text measures as zero."""
        if not text:
            return SizeReport(line_count=0, exceeds_threshold=False)

        line_count = count_effective_lines(text, self.config)
        exceeds = line_count > self.config.threshold
        suggestions = self.split_suggestions(path, text, line_count) if exceeds else []
        if exceeds:
            logger.debug("%s: %d effective lines over %d", path, line_count, self.config.threshold)
        return SizeReport(
            line_count=line_count, exceeds_threshold=exceeds, split_suggestions=suggestions
        )

    def split_suggestions(self, path: str, text: str, line_count: int) -> list[SplitStrategy]:
        ext = os.path.splitext(path)[1].lower()
        suggestions: list[SplitStrategy] = []

        if ext in (".tsx", ".jsx"):
            suggestions.extend(component_splits(path, text))
        if ext in (".ts", ".js"):
            suggestions.extend(utility_splits(path, text))
        if ext in (".ts", ".tsx"):
            extracted = type_split(path, text)
            if extracted is not None:
                suggestions.append(extracted)

        if not suggestions:
            suggestions.append(generic_split(path, line_count, self.config.threshold))
        return suggestions

    def issues_for(self, path: str, report: SizeReport) -> list[Issue]:
        if not report.exceeds_threshold:
            return []
        severity = "high" if report.line_count > 2 * self.config.threshold else "medium"
        return [
            Issue(
                "size",
                severity,
                f"File has {report.line_count} effective lines "
                f"(threshold {self.config.threshold})",
                path,
            )
        ]

    def recommendations_for(self, report: SizeReport) -> list[Recommendation]:
        if not report.exceeds_threshold or not report.split_suggestions:
            return []
        first = report.split_suggestions[0]
        return [
            Recommendation(
                type="split",
                priority=7,
                description=first.description,
                estimated_effort=first.estimated_effort,
                benefits=["Smaller review surface", "Easier navigation"],
                risks=["Import paths change for existing callers"],
            )
        ]

    def build_report(self, results: Iterable[FileSizeResult]) -> FileSizeReport:
        results = list(results)
        total = len(results)
        lines = sum(r.report.line_count for r in results)
        oversized = [r for r in results if r.report.exceeds_threshold]
        return FileSizeReport(
            results=results,
            summary=SizeSummary(
                total_files=total,
                oversized_files=len(oversized),
                # Half-up rounding
                average_file_size=math.floor(lines / total + 0.5) if total else 0,
                total_suggestions=sum(len(r.report.split_suggestions) for r in oversized),
                threshold=self.config.threshold,
            ),
        )
