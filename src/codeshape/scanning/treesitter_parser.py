"""Tree-sitter parser wrapper for the TypeScript, TSX and JavaScript grammars.

Usage:
    parser = TreeSitterParser()
    tree = parser.parse(code_bytes, "tsx")
"""

from __future__ import annotations

import logging
from typing import Any, Callable

import tree_sitter
import tree_sitter_javascript
import tree_sitter_typescript

from ..exceptions import ParsingError
from .languages import SUPPORTED_GRAMMARS, detect_language
from .syntax import ParsedSource

logger = logging.getLogger(__name__)

_GRAMMAR_LOADERS: dict[str, Callable[[], Any]] = {
    "typescript": tree_sitter_typescript.language_typescript,
    "tsx": tree_sitter_typescript.language_tsx,
    "javascript": tree_sitter_javascript.language,
}


class TreeSitterParser:
    """Builds one tree-sitter parser per grammar on first use."""

    def __init__(self) -> None:
        self._parsers: dict[str, tree_sitter.Parser] = {}

    def _parser_for(self, language: str, path: str) -> tree_sitter.Parser:
        parser = self._parsers.get(language)
        if parser is not None:
            return parser

        loader = _GRAMMAR_LOADERS.get(language)
        if loader is None:
            raise ParsingError(path, language, "no grammar for this language")

        # tree-sitter >= 0.22 hands out a PyCapsule; wrap it in Language()
        lang_obj = tree_sitter.Language(loader())
        parser = tree_sitter.Parser(lang_obj)
        self._parsers[language] = parser
        logger.debug("Loaded %s grammar", language)
        return parser

    def parse(self, code: bytes, language: str, path: str = "<memory>") -> tree_sitter.Tree:
        """Parse code and return the syntax tree.

        Args:
            code: Source code as bytes
            language: Grammar name (typescript, tsx or javascript)
            path: File path, used in error messages only

        Raises:
            ParsingError: If the grammar is unknown or tree-sitter rejects the input
        """
        parser = self._parser_for(language, path)
        try:
            return parser.parse(code)
        except (ValueError, TypeError) as e:
            raise ParsingError(path, language, str(e)) from e

    def parse_source(self, path: str, text: str) -> ParsedSource:
        """Parse file text with the grammar picked from ``path``."""
        language = detect_language(path)
        tree = self.parse(text.encode("utf-8", errors="replace"), language, path)
        parsed = ParsedSource(path=path, text=text, language=language, tree=tree)
        if parsed.has_errors:
            logger.debug("Partial parse of %s (syntax errors present)", path)
        return parsed

    def is_language_supported(self, language: str) -> bool:
        return language in SUPPORTED_GRAMMARS
