"""Project report: per-file findings from every analyzer plus totals."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

from .dependencies import DependencyNode, DependencyReport, DependencyResult, GraphSummary
from .models import SEVERITY_RANK, Issue, Recommendation
from .responsibility import ResponsibilityReport, ResponsibilityResult
from .session import AnalysisSession
from .size import FileSizeReport, SizeReport

logger = logging.getLogger(__name__)


@dataclass
class FileReport:
    """Everything known about one file. Issues run most severe first,
    recommendations highest priority first."""

    file_path: str
    dependency: Optional[DependencyResult]
    responsibility: ResponsibilityResult
    size: SizeReport
    issues: list[Issue] = field(default_factory=list)
    recommendations: list[Recommendation] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "file_path": self.file_path,
            "line_count": self.size.line_count,
            "responsibilities": list(self.responsibility.analysis.responsibilities),
            "issues": [i.to_dict() for i in self.issues],
            "recommendations": [r.to_dict() for r in self.recommendations],
        }


@dataclass
class ProjectTotals:
    file_count: int = 0
    total_imports: int = 0
    total_exports: int = 0
    total_unused_imports: int = 0
    total_cycles: int = 0
    oversized_files: int = 0
    files_with_multiple_responsibilities: int = 0
    skipped_files: int = 0

    def to_dict(self) -> dict:
        return dict(self.__dict__)


@dataclass
class ProjectReport:
    files: list[FileReport]
    totals: ProjectTotals
    summary: GraphSummary
    dependencies: DependencyReport
    responsibilities: ResponsibilityReport
    sizes: FileSizeReport
    dot: str = ""

    def to_dict(self) -> dict:
        return {
            "totals": self.totals.to_dict(),
            "summary": self.summary.to_dict(),
            "cycles": [c.to_dict() for c in self.dependencies.circular_dependencies],
            "files": [f.to_dict() for f in self.files],
        }


def merge_findings(
    *sources: tuple[Iterable[Issue], Iterable[Recommendation]],
) -> tuple[list[Issue], list[Recommendation]]:
    """Concatenate issue and recommendation lists and rank them."""
    issues: list[Issue] = []
    recommendations: list[Recommendation] = []
    for source_issues, source_recommendations in sources:
        issues.extend(source_issues)
        recommendations.extend(source_recommendations)
    issues.sort(key=lambda i: SEVERITY_RANK.get(i.severity, 0), reverse=True)
    recommendations.sort(key=lambda r: r.priority, reverse=True)
    return issues, recommendations


class ReportAggregator:
    """Runs all three analyzers through a session and merges the results.

    Nothing is computed until ``build()`` is called.
    """

    def __init__(self, session: AnalysisSession):
        self.session = session

    def build(
        self, root: Optional[str] = None, files: Optional[Iterable[str]] = None
    ) -> ProjectReport:
        session = self.session
        if files is not None:
            paths = [session.key(p) for p in files]
        else:
            paths = session.discover_files(root)
            if root is not None and session.root is None:
                session.root = session.key(root)
        logger.info("Analyzing %d files", len(paths))

        dependencies = session.analyze_project(files=paths)
        responsibilities = session.classify_files(paths)
        sizes = session.measure_files(paths)

        by_path = {r.file_path: r for r in dependencies.results}
        classified = {r.file_path: r for r in responsibilities.results}
        measured = {r.file_path: r.report for r in sizes.results}
        advisor = session.size_advisor

        reports = []
        for path in paths:
            dependency = by_path.get(path)
            responsibility = classified[path]
            size = measured[path]
            issues, recommendations = merge_findings(
                (
                    dependency.issues if dependency else [],
                    dependency.recommendations if dependency else [],
                ),
                (responsibility.issues, responsibility.recommendations),
                (advisor.issues_for(path, size), advisor.recommendations_for(size)),
            )
            reports.append(
                FileReport(
                    file_path=path,
                    dependency=dependency,
                    responsibility=responsibility,
                    size=size,
                    issues=issues,
                    recommendations=recommendations,
                )
            )

        totals = ProjectTotals(
            file_count=dependencies.total_files,
            total_imports=dependencies.total_imports,
            total_exports=dependencies.total_exports,
            total_unused_imports=dependencies.unused_imports,
            total_cycles=dependencies.cycle_count,
            oversized_files=sizes.summary.oversized_files,
            files_with_multiple_responsibilities=(
                responsibilities.files_with_multiple_responsibilities
            ),
            skipped_files=len(paths) - dependencies.total_files,
        )

        return ProjectReport(
            files=reports,
            totals=totals,
            summary=dependencies.summary,
            dependencies=dependencies,
            responsibilities=responsibilities,
            sizes=sizes,
            dot=session.export_dot(),
        )

    def get_cached_results(self) -> dict[str, DependencyResult]:
        return self.session.get_cached_results()

    def get_dependency_graph(self) -> dict[str, DependencyNode]:
        return self.session.get_dependency_graph()

    def clear_cache(self) -> None:
        self.session.clear_cache()
