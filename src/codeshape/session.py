"""Analysis session: the owner of every cache and of the dependency graph.

A session is created by the caller and passed around explicitly; nothing
in codeshape keeps module-level state. Within one session a file is read
and parsed at most once, and each analyzer result is computed at most
once, until ``clear_cache()`` is called.

Example:
    >>> session = AnalysisSession(root="/path/to/app")
    >>> report = session.analyze_project()
    >>> report.cycle_count
    0
    >>> session.classify_file("/path/to/app/src/page.tsx").analysis.responsibilities
    ['UI Rendering', 'State Management']

Sessions are not thread-safe. Use one session per thread.
"""

from __future__ import annotations

import logging
import os
from typing import Iterable, Optional

from .config import AnalysisConfig
from .dependencies import (
    CircularDependency,
    DependencyAnalyzer,
    DependencyNode,
    DependencyReport,
    DependencyResult,
    annotate_cycles,
    build_dependency_graph,
    classify_cycles,
    find_cycles,
    internal_adjacency,
    summarize_graph,
    to_dot,
    visualization_data,
)
from .exceptions import AnalysisError, FileAccessError, InvalidPathError, ParsingError
from .responsibility import (
    ResponsibilityClassifier,
    ResponsibilityReport,
    ResponsibilityResult,
    build_report,
    empty_result,
)
from .responsibility.classifier import READ_FAILURE
from .scanning import ParsedSource, SourceAccess, SourceReader, TreeSitterParser
from .size import FileSizeReport, FileSizeResult, SizeAdvisor

logger = logging.getLogger(__name__)


class AnalysisSession:
    """Session-scoped caches plus the analyzers configured for them.

    Args:
        config: Analysis configuration (defaults apply when omitted)
        reader: Source access; anything with ``read`` and ``scan``
        root: Project root used for scanning and path-alias resolution
        parser: Shared tree-sitter parser
    """

    def __init__(
        self,
        config: Optional[AnalysisConfig] = None,
        reader: Optional[SourceAccess] = None,
        root: Optional[str] = None,
        parser: Optional[TreeSitterParser] = None,
    ):
        self.config = config or AnalysisConfig()
        self.reader = reader or SourceReader()
        self.root = os.path.abspath(root) if root else None
        self.parser = parser or TreeSitterParser()

        self.dependency_analyzer = DependencyAnalyzer(self.config.dependencies)
        self.classifier = ResponsibilityClassifier(self.config.responsibility)
        self.size_advisor = SizeAdvisor(self.config.size)

        self._texts: dict[str, str] = {}
        self._parsed: dict[str, ParsedSource] = {}
        self._dependency_results: dict[str, DependencyResult] = {}
        self._responsibility_results: dict[str, ResponsibilityResult] = {}
        self._size_results: dict[str, FileSizeResult] = {}
        self._graph: dict[str, DependencyNode] = {}
        self._cycles: list[CircularDependency] = []

    # ── file access ───────────────────────────────────────────────

    @staticmethod
    def key(path: str) -> str:
        return os.path.abspath(path)

    def read_text(self, path: str) -> Optional[str]:
        """Cached file text, or None when the reader cannot supply it."""
        path = self.key(path)
        text = self._texts.get(path)
        if text is None:
            text = self.reader.read(path)
            if text is None:
                return None
            self._texts[path] = text
        return text

    def parse(self, path: str) -> ParsedSource:
        """Cached parse of ``path``.

        Raises:
            FileAccessError: If the file cannot be read
            ParsingError: If the parser rejects it
        """
        path = self.key(path)
        parsed = self._parsed.get(path)
        if parsed is not None:
            return parsed

        text = self.read_text(path)
        if text is None:
            raise FileAccessError(path, "file is missing or unreadable")
        parsed = self.parser.parse_source(path, text)
        self._parsed[path] = parsed
        return parsed

    def discover_files(self, root: Optional[str] = None) -> list[str]:
        root = root or self.root
        if root is None:
            raise InvalidPathError(".", "no project root given")
        return self.reader.scan(
            os.path.abspath(root),
            include=self.config.include_patterns,
            exclude=self.config.dependencies.exclude_patterns,
            max_depth=self.config.max_scan_depth,
        )

    # ── dependencies ──────────────────────────────────────────────

    def analyze_file(self, path: str) -> DependencyResult:
        """Dependency analysis of one file, cached for the session.

        Raises:
            FileAccessError: If the file cannot be read
            ParsingError: If the parser rejects it
        """
        path = self.key(path)
        cached = self._dependency_results.get(path)
        if cached is not None:
            logger.debug("Cache hit: %s", path)
            return cached

        try:
            parsed = self.parse(path)
        except FileAccessError as e:
            raise FileAccessError(path, f"failed to analyze dependencies: {e.reason}") from e

        result = self.dependency_analyzer.analyze(parsed)
        self._dependency_results[path] = result
        return result

    def analyze_project(
        self, root: Optional[str] = None, files: Optional[Iterable[str]] = None
    ) -> DependencyReport:
        """Analyze every file, then build the graph and look for cycles.

        Files that fail are logged and skipped. The graph and summaries
        cover every file analyzed in this session; totals cover this batch.
        """
        if root is not None and self.root is None:
            self.root = os.path.abspath(root)
        paths = [self.key(p) for p in files] if files is not None else self.discover_files(root)

        results = []
        for path in paths:
            try:
                results.append(self.analyze_file(path))
            except AnalysisError as e:
                logger.warning("Skipping %s: %s", path, e)

        self._rebuild_graph()

        return DependencyReport(
            total_files=len(results),
            total_imports=sum(len(r.analysis.imports) for r in results),
            total_exports=sum(len(r.analysis.exports) for r in results),
            unused_imports=sum(len(r.analysis.unused_imports) for r in results),
            circular_dependencies=list(self._cycles),
            results=results,
            summary=summarize_graph(self._graph),
        )

    def _rebuild_graph(self) -> None:
        self._graph = build_dependency_graph(
            self._dependency_results.values(), root=self.root, config=self.config.dependencies
        )
        raw = find_cycles(
            internal_adjacency(self._graph), self.config.dependencies.max_circular_depth
        )
        self._cycles = classify_cycles(raw)
        annotate_cycles(self._dependency_results.values(), self._cycles)
        if self._cycles:
            logger.info("Found %d circular dependencies", len(self._cycles))

    def visualization_data(self) -> dict[str, list[dict]]:
        return visualization_data(self._graph)

    def export_dot(self) -> str:
        return to_dot(self._graph)

    # ── responsibilities ──────────────────────────────────────────

    def classify_file(self, path: str) -> ResponsibilityResult:
        """Responsibility classification; failures yield an empty result."""
        path = self.key(path)
        cached = self._responsibility_results.get(path)
        if cached is not None:
            return cached

        try:
            result = self.classifier.classify(self.parse(path))
        except FileAccessError:
            # Not cached: the file may appear later in the session.
            return empty_result(path, READ_FAILURE)
        except ParsingError as e:
            logger.warning("Cannot classify %s: %s", path, e)
            result = empty_result(path, f"AST parsing failed: {e.reason}")

        self._responsibility_results[path] = result
        return result

    def classify_files(self, paths: Iterable[str]) -> ResponsibilityReport:
        return build_report(self.classify_file(p) for p in paths)

    # ── size ──────────────────────────────────────────────────────

    def measure_file(self, path: str) -> FileSizeResult:
        path = self.key(path)
        cached = self._size_results.get(path)
        if cached is not None:
            return cached

        text = self.read_text(path)
        result = FileSizeResult(file_path=path, report=self.size_advisor.measure(path, text))
        if text is not None:
            self._size_results[path] = result
        return result

    def measure_files(self, paths: Iterable[str]) -> FileSizeReport:
        return self.size_advisor.build_report(self.measure_file(p) for p in paths)

    # ── cache inspection ──────────────────────────────────────────

    def get_cached_results(self) -> dict[str, DependencyResult]:
        return dict(self._dependency_results)

    def get_dependency_graph(self) -> dict[str, DependencyNode]:
        return dict(self._graph)

    def get_cycles(self) -> list[CircularDependency]:
        return list(self._cycles)

    def cache_info(self) -> dict[str, int]:
        return {
            "texts": len(self._texts),
            "parsed": len(self._parsed),
            "dependency_results": len(self._dependency_results),
            "responsibility_results": len(self._responsibility_results),
            "size_results": len(self._size_results),
            "graph_nodes": len(self._graph),
        }

    def clear_cache(self) -> None:
        self._texts.clear()
        self._parsed.clear()
        self._dependency_results.clear()
        self._responsibility_results.clear()
        self._size_results.clear()
        self._graph.clear()
        self._cycles = []
        logger.debug("Session cache cleared")
