"""Extension to tree-sitter grammar mapping for JS/TS sources."""

import os

# The javascript grammar accepts JSX, so .jsx needs no grammar of its own.
GRAMMAR_BY_EXTENSION: dict[str, str] = {
    ".ts": "typescript",
    ".mts": "typescript",
    ".cts": "typescript",
    ".tsx": "tsx",
    ".js": "javascript",
    ".jsx": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
}

# Most permissive grammar: TypeScript syntax plus JSX.
FALLBACK_GRAMMAR = "tsx"

SUPPORTED_GRAMMARS = ("typescript", "tsx", "javascript")


def detect_language(path: str) -> str:
    """Pick the grammar for ``path`` from its extension."""
    ext = os.path.splitext(path)[1].lower()
    return GRAMMAR_BY_EXTENSION.get(ext, FALLBACK_GRAMMAR)
