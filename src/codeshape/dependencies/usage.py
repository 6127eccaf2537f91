"""Unused-import detection.

A binding counts as used when an identifier token with the same text
appears anywhere outside the import statements: plain identifiers, type
references, JSX tag names, object shorthand. Scopes are not modelled, so
a local that shadows an import hides the import's disuse.
"""

from __future__ import annotations

from ..scanning.syntax import NodeKind, ParsedSource
from .models import ImportEdge


def referenced_names(parsed: ParsedSource) -> set[str]:
    """Identifier texts occurring outside import statements."""
    names: set[str] = set()
    stack = [parsed.root]
    while stack:
        node = stack.pop()
        if node.kind is NodeKind.IMPORT:
            continue
        if node.kind is NodeKind.IDENTIFIER:
            names.add(node.text)
        stack.extend(node.children)
    return names


def find_unused_imports(parsed: ParsedSource, imports: list[ImportEdge]) -> list[str]:
    """Report unused bindings as ``"<name> from '<source>'"`` in import order."""
    used = referenced_names(parsed)
    return [
        f"{name} from '{edge.specifier}'"
        for edge in imports
        for name in edge.names
        if name not in used
    ]
