"""Dependency graph construction and graph-wide summaries."""

from __future__ import annotations

import logging
from collections import Counter
from typing import Iterable, Optional

from ..config import DependencyConfig
from .models import DependencyNode, DependencyResult, FileCount, GraphSummary
from .resolver import resolve_specifier

logger = logging.getLogger(__name__)

TOP_N = 10


def build_dependency_graph(
    results: Iterable[DependencyResult],
    root: Optional[str] = None,
    config: Optional[DependencyConfig] = None,
) -> dict[str, DependencyNode]:
    """Build the graph map (file path -> node) from per-file results.

    Resolves every import against the analyzed files and records the target
    on the ImportEdge. Unresolved bare specifiers become external leaf nodes
    only when ``include_external_deps`` is on. Self-imports add no edge.
    """
    config = config or DependencyConfig()
    nodes: dict[str, DependencyNode] = {
        r.file_path: DependencyNode(
            file_path=r.file_path, imports=r.analysis.imports, exports=r.analysis.exports
        )
        for r in results
    }
    internal = set(nodes)
    unresolved = 0

    for path in list(nodes):
        node = nodes[path]
        for edge in node.imports:
            target = resolve_specifier(
                edge.specifier, path, internal, root=root, aliases=config.path_aliases
            )
            if target is None and config.include_external_deps and not edge.is_relative:
                target = edge.specifier
                if target not in nodes:
                    nodes[target] = DependencyNode(file_path=target, is_external=True)
            edge.resolved_path = target
            if target is None:
                unresolved += 1
                continue
            if target == path:
                continue

            dep = nodes[target]
            if dep not in node.dependencies:
                node.dependencies.append(dep)
            if path not in dep.dependents:
                dep.dependents.append(path)

    logger.debug("Built graph: %d nodes, %d unresolved imports", len(nodes), unresolved)
    return nodes


def internal_adjacency(nodes: dict[str, DependencyNode]) -> dict[str, list[str]]:
    """Resolved edges between scanned files only."""
    return {
        path: [d.file_path for d in node.dependencies if not d.is_external]
        for path, node in nodes.items()
        if not node.is_external
    }


def import_counts(nodes: dict[str, DependencyNode]) -> Counter:
    """How many import statements resolve to each scanned file."""
    counts: Counter = Counter()
    for path, node in nodes.items():
        for edge in node.imports:
            target = edge.resolved_path
            if target is None or target == path:
                continue
            if target in nodes and not nodes[target].is_external:
                counts[target] += 1
    return counts


def summarize_graph(nodes: dict[str, DependencyNode]) -> GraphSummary:
    """Top-10 rankings and orphaned files. Ties keep graph order."""
    files = [n for n in nodes.values() if not n.is_external]
    imported = import_counts(nodes)

    def top(pairs: list[tuple[str, int]]) -> list[FileCount]:
        ranked = sorted(pairs, key=lambda p: p[1], reverse=True)[:TOP_N]
        return [FileCount(file=f, count=c) for f, c in ranked]

    return GraphSummary(
        most_imported=top(list(imported.items())),
        most_exporting=top([(n.file_path, len(n.exports)) for n in files]),
        heaviest_files=top([(n.file_path, len(n.imports)) for n in files]),
        orphaned_files=[
            n.file_path for n in files if not n.exports and imported[n.file_path] == 0
        ],
    )
