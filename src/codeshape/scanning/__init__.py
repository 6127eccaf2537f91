"""Source access and the shared tree-sitter parse."""

from .languages import detect_language
from .source import SourceAccess, SourceReader, glob_to_regex
from .syntax import NodeKind, ParsedSource, SyntaxNode
from .treesitter_parser import TreeSitterParser

__all__ = [
    "detect_language",
    "SourceAccess",
    "SourceReader",
    "glob_to_regex",
    "NodeKind",
    "ParsedSource",
    "SyntaxNode",
    "TreeSitterParser",
]
