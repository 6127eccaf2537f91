"""Data models for import/export analysis and the dependency graph.

Edges are directed: a node's ``dependencies`` are the files it imports,
its ``dependents`` are the paths of files importing it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Optional

from ..models import Issue, Recommendation

ExportKind = Literal["named", "default"]


@dataclass
class ImportEdge:
    """One import statement.

    ``names`` are the local bindings it introduces (aliases when renamed),
    empty for side-effect imports. ``resolved_path`` is filled in by the
    graph builder when the specifier matches a scanned file.
    """

    source_file: str
    specifier: str
    names: list[str]
    line: int
    resolved_path: Optional[str] = None
    is_type_only: bool = False

    @property
    def is_relative(self) -> bool:
        return self.specifier.startswith(".") or self.specifier.startswith("/")

    def to_dict(self) -> dict:
        return {
            "specifier": self.specifier,
            "names": list(self.names),
            "line": self.line,
            "resolved_path": self.resolved_path,
            "is_type_only": self.is_type_only,
        }


@dataclass
class ExportSymbol:
    name: str
    kind: ExportKind
    line: int
    # Set for re-exports (``export ... from 'm'``)
    source: Optional[str] = None

    def to_dict(self) -> dict:
        return {"name": self.name, "kind": self.kind, "line": self.line, "source": self.source}


@dataclass
class CircularDependency:
    """A closed import loop, listed from the first revisited file."""

    cycle: list[str]
    severity: Literal["medium", "high"]

    def to_dict(self) -> dict:
        return {"cycle": list(self.cycle), "severity": self.severity}


@dataclass
class DependencyAnalysis:
    imports: list[ImportEdge] = field(default_factory=list)
    exports: list[ExportSymbol] = field(default_factory=list)
    unused_imports: list[str] = field(default_factory=list)
    # Filled in by project-wide analysis
    circular_dependencies: list[CircularDependency] = field(default_factory=list)

    @property
    def external_imports(self) -> list[ImportEdge]:
        return [imp for imp in self.imports if not imp.is_relative]

    def to_dict(self) -> dict:
        return {
            "imports": [imp.to_dict() for imp in self.imports],
            "exports": [exp.to_dict() for exp in self.exports],
            "unused_imports": list(self.unused_imports),
            "circular_dependencies": [c.to_dict() for c in self.circular_dependencies],
        }


@dataclass
class DependencyResult:
    """Dependency analysis of one file."""

    file_path: str
    analysis: DependencyAnalysis
    issues: list[Issue] = field(default_factory=list)
    recommendations: list[Recommendation] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "file_path": self.file_path,
            "analysis": self.analysis.to_dict(),
            "issues": [i.to_dict() for i in self.issues],
            "recommendations": [r.to_dict() for r in self.recommendations],
        }


@dataclass(eq=False)
class DependencyNode:
    """A file in the dependency graph.

    ``dependencies`` hold references to other nodes in the same graph map;
    ``dependents`` is a lookup list of importer paths only.
    """

    file_path: str
    imports: list[ImportEdge] = field(default_factory=list)
    exports: list[ExportSymbol] = field(default_factory=list)
    dependencies: list[DependencyNode] = field(default_factory=list, repr=False)
    dependents: list[str] = field(default_factory=list)
    is_external: bool = False

    @property
    def dependency_paths(self) -> list[str]:
        return [d.file_path for d in self.dependencies]

    def to_dict(self) -> dict:
        # Dependencies are emitted as paths; nodes can reference each other in cycles.
        return {
            "file_path": self.file_path,
            "imports": [imp.specifier for imp in self.imports],
            "exports": [exp.name for exp in self.exports],
            "dependencies": self.dependency_paths,
            "dependents": list(self.dependents),
            "is_external": self.is_external,
        }


@dataclass
class FileCount:
    file: str
    count: int

    def to_dict(self) -> dict:
        return {"file": self.file, "count": self.count}


@dataclass
class GraphSummary:
    most_imported: list[FileCount] = field(default_factory=list)
    most_exporting: list[FileCount] = field(default_factory=list)
    heaviest_files: list[FileCount] = field(default_factory=list)
    orphaned_files: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "most_imported": [c.to_dict() for c in self.most_imported],
            "most_exporting": [c.to_dict() for c in self.most_exporting],
            "heaviest_files": [c.to_dict() for c in self.heaviest_files],
            "orphaned_files": list(self.orphaned_files),
        }


@dataclass
class DependencyReport:
    """Project-wide dependency analysis."""

    total_files: int
    total_imports: int
    total_exports: int
    unused_imports: int
    circular_dependencies: list[CircularDependency]
    results: list[DependencyResult]
    summary: GraphSummary

    @property
    def cycle_count(self) -> int:
        return len(self.circular_dependencies)

    def to_dict(self) -> dict:
        return {
            "total_files": self.total_files,
            "total_imports": self.total_imports,
            "total_exports": self.total_exports,
            "unused_imports": self.unused_imports,
            "circular_dependencies": [c.to_dict() for c in self.circular_dependencies],
            "results": [r.to_dict() for r in self.results],
            "summary": self.summary.to_dict(),
        }
