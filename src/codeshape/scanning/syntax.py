"""Syntax models shared by every analyzer.

A file is parsed once into a ``ParsedSource``. Its nodes are wrapped as
``SyntaxNode`` values tagged with a closed ``NodeKind`` so consumers
dispatch on the kind instead of testing raw tree-sitter type strings.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional

import tree_sitter


class NodeKind(Enum):
    """Node kinds the analyzers distinguish. Everything else is OTHER."""

    PROGRAM = "program"
    IMPORT = "import"
    EXPORT = "export"
    FUNCTION = "function"
    FUNCTION_EXPRESSION = "function_expression"
    ARROW_FUNCTION = "arrow_function"
    METHOD = "method"
    VARIABLE_DECLARATOR = "variable_declarator"
    CALL = "call"
    MEMBER_ACCESS = "member_access"
    PROPERTY = "property"
    JSX = "jsx"
    IDENTIFIER = "identifier"
    BRANCH = "branch"
    BLOCK = "block"
    STRING = "string"
    OTHER = "other"


_KIND_BY_TYPE: dict[str, NodeKind] = {
    "program": NodeKind.PROGRAM,
    "import_statement": NodeKind.IMPORT,
    "export_statement": NodeKind.EXPORT,
    "function_declaration": NodeKind.FUNCTION,
    "generator_function_declaration": NodeKind.FUNCTION,
    "function_expression": NodeKind.FUNCTION_EXPRESSION,
    "function": NodeKind.FUNCTION_EXPRESSION,
    "generator_function": NodeKind.FUNCTION_EXPRESSION,
    "arrow_function": NodeKind.ARROW_FUNCTION,
    "method_definition": NodeKind.METHOD,
    "variable_declarator": NodeKind.VARIABLE_DECLARATOR,
    "call_expression": NodeKind.CALL,
    "member_expression": NodeKind.MEMBER_ACCESS,
    "pair": NodeKind.PROPERTY,
    "jsx_element": NodeKind.JSX,
    "jsx_self_closing_element": NodeKind.JSX,
    "jsx_fragment": NodeKind.JSX,
    "identifier": NodeKind.IDENTIFIER,
    "type_identifier": NodeKind.IDENTIFIER,
    "shorthand_property_identifier": NodeKind.IDENTIFIER,
    "if_statement": NodeKind.BRANCH,
    "for_statement": NodeKind.BRANCH,
    "for_in_statement": NodeKind.BRANCH,
    "while_statement": NodeKind.BRANCH,
    "do_statement": NodeKind.BRANCH,
    "switch_statement": NodeKind.BRANCH,
    "statement_block": NodeKind.BLOCK,
    "string": NodeKind.STRING,
}


def kind_of(node_type: str) -> NodeKind:
    return _KIND_BY_TYPE.get(node_type, NodeKind.OTHER)


class SyntaxNode:
    """Thin view over a tree-sitter node.

    Lines and columns are 1-indexed.
    """

    __slots__ = ("_node", "kind")

    def __init__(self, node: tree_sitter.Node):
        self._node = node
        self.kind = kind_of(node.type)

    @property
    def type(self) -> str:
        return self._node.type

    @property
    def text(self) -> str:
        raw = self._node.text
        return raw.decode("utf-8", errors="replace") if raw is not None else ""

    @property
    def line(self) -> int:
        return self._node.start_point[0] + 1

    @property
    def column(self) -> int:
        return self._node.start_point[1] + 1

    @property
    def children(self) -> list[SyntaxNode]:
        return [SyntaxNode(c) for c in self._node.children]

    @property
    def named_children(self) -> list[SyntaxNode]:
        return [SyntaxNode(c) for c in self._node.named_children]

    @property
    def parent(self) -> Optional[SyntaxNode]:
        parent = self._node.parent
        return SyntaxNode(parent) if parent is not None else None

    def field(self, name: str) -> Optional[SyntaxNode]:
        child = self._node.child_by_field_name(name)
        return SyntaxNode(child) if child is not None else None

    def children_of_type(self, *types: str) -> list[SyntaxNode]:
        return [SyntaxNode(c) for c in self._node.children if c.type in types]

    def walk(self) -> Iterator[SyntaxNode]:
        """Pre-order traversal in document order."""
        stack = [self._node]
        while stack:
            node = stack.pop()
            yield SyntaxNode(node)
            stack.extend(reversed(node.children))

    def __repr__(self) -> str:
        return f"SyntaxNode({self.type!r}, line={self.line})"


def string_value(node: Optional[SyntaxNode]) -> str:
    """Contents of a string literal node, without quotes."""
    if node is None:
        return ""
    text = node.text
    if len(text) >= 2 and text[0] in "'\"`" and text[-1] == text[0]:
        return text[1:-1]
    return text


@dataclass
class ParsedSource:
    """One file's text together with its syntax tree."""

    path: str
    text: str
    language: str
    tree: tree_sitter.Tree

    @property
    def root(self) -> SyntaxNode:
        return SyntaxNode(self.tree.root_node)

    @property
    def has_errors(self) -> bool:
        return self.tree.root_node.has_error

    def walk(self) -> Iterator[SyntaxNode]:
        return self.root.walk()
