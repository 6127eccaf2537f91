"""Effective-line counting.

A line-by-line state machine with two states, normal and inside a block
comment. Code before an opening ``/*`` or after a closing ``*/`` counts
once for its line.
"""

from __future__ import annotations

import re

from ..config import FileSizeConfig

_COMMENT_PREFIXES = ("//", "#", "*", "/**", "*/")
_REQUIRE_LINE = re.compile(r"^(const|let|var)\s+.*=\s*require\(")


def _is_import_line(trimmed: str) -> bool:
    if trimmed.startswith("import ") or _REQUIRE_LINE.match(trimmed):
        return True
    # Bare re-exports: export { a } from './a', export * from './b'
    return (
        trimmed.startswith("export ")
        and "=" not in trimmed
        and "const" not in trimmed
        and "function" not in trimmed
    )


def count_effective_lines(text: str, config: FileSizeConfig) -> int:
    count = 0
    in_block = False

    for line in text.split("\n"):
        trimmed = line.strip()

        if config.exclude_empty_lines and not trimmed:
            continue

        if config.exclude_comments:
            if not in_block and "/*" in trimmed:
                if trimmed.split("/*", 1)[0].strip():
                    count += 1
                in_block = True
                if "*/" in trimmed:
                    in_block = False
                    if trimmed.split("*/")[-1].strip():
                        count += 1
                continue

            if in_block:
                if "*/" in trimmed:
                    in_block = False
                    if trimmed.split("*/")[-1].strip():
                        count += 1
                continue

            if trimmed.startswith(_COMMENT_PREFIXES):
                continue

        if config.exclude_imports and _is_import_line(trimmed):
            continue

        count += 1

    return count
