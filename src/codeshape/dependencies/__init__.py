"""Import/export extraction, unused imports and the dependency graph."""

from .algorithms import classify_cycles, find_cycles
from .analyzer import DependencyAnalyzer, annotate_cycles
from .builder import build_dependency_graph, internal_adjacency, summarize_graph
from .export import file_group, to_dot, visualization_data
from .extractor import extract_exports, extract_imports
from .models import (
    CircularDependency,
    DependencyAnalysis,
    DependencyNode,
    DependencyReport,
    DependencyResult,
    ExportSymbol,
    FileCount,
    GraphSummary,
    ImportEdge,
)
from .resolver import resolve_specifier
from .usage import find_unused_imports

__all__ = [
    "classify_cycles",
    "find_cycles",
    "DependencyAnalyzer",
    "annotate_cycles",
    "build_dependency_graph",
    "internal_adjacency",
    "summarize_graph",
    "file_group",
    "to_dot",
    "visualization_data",
    "extract_exports",
    "extract_imports",
    "CircularDependency",
    "DependencyAnalysis",
    "DependencyNode",
    "DependencyReport",
    "DependencyResult",
    "ExportSymbol",
    "FileCount",
    "GraphSummary",
    "ImportEdge",
    "resolve_specifier",
    "find_unused_imports",
]
