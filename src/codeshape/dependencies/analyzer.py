"""Per-file dependency analysis: imports, exports, unused imports, issues."""

from __future__ import annotations

import logging
import os
from typing import Iterable, Optional

from ..config import DependencyConfig
from ..models import Issue, Recommendation
from ..scanning.syntax import ParsedSource
from .extractor import extract_exports, extract_imports
from .models import CircularDependency, DependencyAnalysis, DependencyResult
from .usage import find_unused_imports

logger = logging.getLogger(__name__)

CYCLE_ISSUE = "circular-dependency"
CYCLE_RECOMMENDATION = "break-cycle"

# Import-count limits
HEAVY_IMPORTS = 20
BUSY_IMPORTS = 10
SPLIT_IMPORTS = 15
COMPONENT_EXTERNAL_IMPORTS = 5
BARREL_EXPORTS = 5


class DependencyAnalyzer:
    """Turns one parsed file into a DependencyResult."""

    def __init__(self, config: Optional[DependencyConfig] = None):
        self.config = config or DependencyConfig()

    def analyze(self, parsed: ParsedSource) -> DependencyResult:
        imports = extract_imports(parsed)
        analysis = DependencyAnalysis(
            imports=imports,
            exports=extract_exports(parsed),
            unused_imports=find_unused_imports(parsed, imports),
        )
        logger.debug(
            "%s: %d imports, %d exports, %d unused",
            parsed.path,
            len(analysis.imports),
            len(analysis.exports),
            len(analysis.unused_imports),
        )
        return DependencyResult(
            file_path=parsed.path,
            analysis=analysis,
            issues=self._issues(parsed.path, analysis),
            recommendations=self._recommendations(analysis),
        )

    def _issues(self, path: str, analysis: DependencyAnalysis) -> list[Issue]:
        issues = []

        unused = len(analysis.unused_imports)
        if unused > self.config.unused_import_threshold:
            issues.append(
                Issue("dependency", "medium", f"Found {unused} unused imports", path)
            )

        total = len(analysis.imports)
        if total > HEAVY_IMPORTS:
            message = f"File has {total} dependencies, consider splitting"
            issues.append(Issue("dependency", "high", message, path))
        elif total > BUSY_IMPORTS:
            message = f"File has {total} dependencies, monitor complexity"
            issues.append(Issue("dependency", "medium", message, path))

        if "/components/" in path.replace("\\", "/"):
            external = len(analysis.external_imports)
            if external > COMPONENT_EXTERNAL_IMPORTS:
                issues.append(
                    Issue(
                        "dependency",
                        "medium",
                        f"Component has {external} external dependencies, consider abstraction",
                        path,
                    )
                )

        return issues

    def _recommendations(self, analysis: DependencyAnalysis) -> list[Recommendation]:
        recommendations = []

        unused = len(analysis.unused_imports)
        if unused > 0:
            recommendations.append(
                Recommendation(
                    type="remove",
                    priority=6,
                    description=f"Remove {unused} unused imports to clean up dependencies",
                    estimated_effort="low",
                    benefits=["Cleaner code", "Smaller bundle size", "Better performance"],
                    risks=["Minimal risk if imports are truly unused"],
                )
            )

        total = len(analysis.imports)
        if total > SPLIT_IMPORTS:
            recommendations.append(
                Recommendation(
                    type="refactor",
                    priority=7,
                    description=f"Consider splitting file or reducing dependencies (currently {total})",
                    estimated_effort="medium",
                    benefits=["Better maintainability", "Reduced coupling", "Easier testing"],
                    risks=["Requires careful refactoring", "May need architecture changes"],
                )
            )

        exported = len(analysis.exports)
        if exported > BARREL_EXPORTS:
            recommendations.append(
                Recommendation(
                    type="refactor",
                    priority=4,
                    description=f"Consider using barrel exports (index.ts) for {exported} exports",
                    estimated_effort="low",
                    benefits=["Cleaner imports", "Better organization", "Easier refactoring"],
                    risks=["Additional indirection", "Potential circular dependencies"],
                )
            )

        return recommendations


def annotate_cycles(
    results: Iterable[DependencyResult], cycles: list[CircularDependency]
) -> None:
    """Attach each cycle to the results of the files on it.

    Replaces whatever an earlier project pass attached, so repeated
    project analysis over cached results does not pile up duplicates.
    """
    by_path = {r.file_path: r for r in results}
    for result in by_path.values():
        result.analysis.circular_dependencies = []
        result.issues = [i for i in result.issues if i.type != CYCLE_ISSUE]
        result.recommendations = [
            r for r in result.recommendations if r.type != CYCLE_RECOMMENDATION
        ]

    for cycle in cycles:
        loop = " -> ".join(os.path.basename(p) for p in cycle.cycle + cycle.cycle[:1])
        for path in dict.fromkeys(cycle.cycle):
            result = by_path.get(path)
            if result is None:
                continue
            result.analysis.circular_dependencies.append(cycle)
            result.issues.append(
                Issue(CYCLE_ISSUE, cycle.severity, f"Circular dependency: {loop}", path)
            )
            result.recommendations.append(
                Recommendation(
                    type=CYCLE_RECOMMENDATION,
                    priority=8,
                    description=f"Break circular dependency between {len(cycle.cycle)} files",
                    estimated_effort="medium",
                    benefits=["Predictable module initialization", "Independent testing"],
                    risks=["May require extracting shared code into a new module"],
                )
            )
