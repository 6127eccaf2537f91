"""Graph export: node/edge view and Graphviz DOT text."""

from __future__ import annotations

import os
from collections import Counter

from .models import DependencyNode

GROUP_COLORS: dict[str, str] = {
    "component": "lightblue",
    "hook": "lightgreen",
    "utility": "lightyellow",
    "types": "lightpink",
    "api": "lightcoral",
    "page": "lightgray",
    "test": "lightsteelblue",
    "external": "whitesmoke",
    "other": "white",
}

# First match wins
_GROUP_SEGMENTS: list[tuple[tuple[str, ...], str]] = [
    (("/components/",), "component"),
    (("/hooks/",), "hook"),
    (("/utils/", "/lib/"), "utility"),
    (("/types/",), "types"),
    (("/api/",), "api"),
    (("/pages/", "/app/"), "page"),
    (("/test/", "/__tests__/"), "test"),
]


def file_group(path: str) -> str:
    """Infer a display group from the directories in ``path``."""
    lowered = path.replace("\\", "/").lower()
    for segments, group in _GROUP_SEGMENTS:
        if any(s in lowered for s in segments):
            return group
    return "other"


def _group(node: DependencyNode) -> str:
    return "external" if node.is_external else file_group(node.file_path)


def _edge_weights(nodes: dict[str, DependencyNode]) -> Counter:
    weights: Counter = Counter()
    for path, node in nodes.items():
        for edge in node.imports:
            target = edge.resolved_path
            if target is not None and target != path and target in nodes:
                weights[(path, target)] += 1
    return weights


def visualization_data(nodes: dict[str, DependencyNode]) -> dict[str, list[dict]]:
    """Nodes sized by imports plus exports; edges weighted by import statements."""
    return {
        "nodes": [
            {
                "id": path,
                "label": os.path.basename(path),
                "group": _group(node),
                "size": len(node.imports) + len(node.exports),
            }
            for path, node in nodes.items()
        ],
        "edges": [
            {"from": src, "to": dst, "weight": weight}
            for (src, dst), weight in _edge_weights(nodes).items()
        ],
    }


def _quote(text: str) -> str:
    return '"' + text.replace("\\", "\\\\").replace('"', '\\"') + '"'


def to_dot(nodes: dict[str, DependencyNode]) -> str:
    lines = [
        "digraph Dependencies {",
        "  rankdir=LR;",
        "  node [shape=box, style=rounded];",
        "",
    ]
    for path, node in nodes.items():
        color = GROUP_COLORS.get(_group(node), GROUP_COLORS["other"])
        label = os.path.basename(path)
        lines.append(
            f'  {_quote(path)} [label={_quote(label)}, fillcolor="{color}", style="filled"];'
        )
    lines.append("")
    for path, node in nodes.items():
        for edge in node.imports:
            target = edge.resolved_path
            if target is not None and target != path and target in nodes:
                lines.append(f"  {_quote(path)} -> {_quote(target)};")
    lines.append("}")
    return "\n".join(lines) + "\n"
