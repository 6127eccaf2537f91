"""Import and export extraction from the shared syntax tree.

Recognized imports::

    import { a, b as c } from 'm'      named (locals a, c)
    import a from 'm'                  default
    import * as ns from 'm'            namespace
    import 'm'                         side effect (no locals)
    import a, { b } from 'm'           combined
    import type { T } from 'm'         type-only
    import fs = require('fs')          TypeScript import-require

Recognized exports: named blocks (optionally re-exported ``from``), default
exports, inline declarations (including TypeScript interface, type, enum
and namespace declarations) and star re-exports.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..scanning.syntax import NodeKind, ParsedSource, SyntaxNode, string_value
from .models import ExportSymbol, ImportEdge

logger = logging.getLogger(__name__)

_NAMED_DECLARATIONS = frozenset(
    {
        "function_declaration",
        "generator_function_declaration",
        "class_declaration",
        "abstract_class_declaration",
        "interface_declaration",
        "type_alias_declaration",
        "enum_declaration",
        "module",
        "internal_module",
        "function_signature",
        "class",
        "function_expression",
        "function",
    }
)

_VARIABLE_DECLARATIONS = frozenset({"lexical_declaration", "variable_declaration"})

_BINDING_TYPES = frozenset({"identifier", "shorthand_property_identifier_pattern"})


def extract_imports(parsed: ParsedSource) -> list[ImportEdge]:
    """One ImportEdge per import statement, in document order."""
    edges = []
    for node in parsed.walk():
        if node.kind is NodeKind.IMPORT:
            edge = _import_edge(node, parsed.path)
            if edge is not None:
                edges.append(edge)
    return edges


def extract_exports(parsed: ParsedSource) -> list[ExportSymbol]:
    """Every exported symbol, in document order."""
    symbols: list[ExportSymbol] = []
    for node in parsed.walk():
        if node.kind is NodeKind.EXPORT:
            symbols.extend(_export_symbols(node))
    return symbols


def _import_edge(node: SyntaxNode, path: str) -> Optional[ImportEdge]:
    source_node = node.field("source")
    names: list[str] = []

    for child in node.named_children:
        if child.type == "import_clause":
            names.extend(_clause_bindings(child))
        elif child.type == "import_require_clause":
            names.extend(c.text for c in child.children_of_type("identifier"))
            source_node = child.field("source")

    if source_node is None:
        logger.debug("Import without a module specifier at %s:%d", path, node.line)
        return None

    return ImportEdge(
        source_file=path,
        specifier=string_value(source_node),
        names=names,
        line=node.line,
        is_type_only=any(c.type == "type" for c in node.children),
    )


def _clause_bindings(clause: SyntaxNode) -> list[str]:
    names = []
    for part in clause.named_children:
        if part.type == "identifier":
            names.append(part.text)
        elif part.type == "namespace_import":
            names.extend(c.text for c in part.children_of_type("identifier"))
        elif part.type == "named_imports":
            for spec in part.children_of_type("import_specifier"):
                local = spec.field("alias") or spec.field("name")
                if local is not None:
                    names.append(local.text)
    return names


def _export_symbols(node: SyntaxNode) -> list[ExportSymbol]:
    line = node.line
    source_node = node.field("source")
    source = string_value(source_node) if source_node is not None else None
    declaration = node.field("declaration")

    if any(c.type == "default" for c in node.children):
        target = declaration or node.field("value")
        name = "default"
        if target is not None:
            if target.type == "identifier":
                name = target.text
            else:
                declared = _declared_names(target)
                if declared:
                    name = declared[0]
        return [ExportSymbol(name=name, kind="default", line=line)]

    if declaration is not None:
        return [
            ExportSymbol(name=name, kind="named", line=line)
            for name in _declared_names(declaration)
        ]

    symbols = []
    for child in node.children:
        if child.type == "export_clause":
            for spec in child.children_of_type("export_specifier"):
                exported = spec.field("alias") or spec.field("name")
                if exported is not None:
                    symbols.append(
                        ExportSymbol(name=exported.text, kind="named", line=line, source=source)
                    )
        elif child.type == "namespace_export":
            named = child.named_children
            name = string_value(named[-1]) if named else "*"
            symbols.append(ExportSymbol(name=name, kind="named", line=line, source=source))
        elif child.type == "*":
            symbols.append(ExportSymbol(name="*", kind="named", line=line, source=source))
    return symbols


def _declared_names(declaration: SyntaxNode) -> list[str]:
    if declaration.type in _VARIABLE_DECLARATIONS:
        names = []
        for declarator in declaration.children_of_type("variable_declarator"):
            target = declarator.field("name")
            if target is None:
                continue
            if target.type == "identifier":
                names.append(target.text)
            else:
                # Destructuring: every bound identifier is exported
                names.extend(n.text for n in target.walk() if n.type in _BINDING_TYPES)
        return names

    if declaration.type == "ambient_declaration":
        for child in declaration.named_children:
            names = _declared_names(child)
            if names:
                return names
        return []

    if declaration.type in _NAMED_DECLARATIONS:
        name = declaration.field("name")
        if name is not None:
            return [string_value(name)]
    return []
