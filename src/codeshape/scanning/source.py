"""File access: reading source text and enumerating project files.

Reads never raise. A missing or unreadable file is logged and reported as
``None`` so that batch analysis can skip it and carry on.
"""

from __future__ import annotations

import logging
import os
import re
from functools import lru_cache
from typing import Iterable, Optional, Protocol

from ..config import DEFAULT_EXCLUDE_PATTERNS, DEFAULT_INCLUDE_PATTERNS

logger = logging.getLogger(__name__)


class SourceAccess(Protocol):
    """What the analyzers need from the file system."""

    def read(self, path: str) -> Optional[str]: ...

    def scan(
        self,
        root: str,
        include: Optional[Iterable[str]] = None,
        exclude: Optional[Iterable[str]] = None,
        max_depth: int = 10,
    ) -> list[str]: ...


@lru_cache(maxsize=256)
def glob_to_regex(pattern: str) -> re.Pattern:
    """Compile a simple glob into a regex searched within relative paths.

    ``**`` matches any sequence of path segments, ``*`` any run of
    non-separator characters and ``?`` one non-separator character.
    Everything else is literal. A match may begin at any segment boundary
    and must run to the end of the path, so ``*.test.ts`` excludes
    ``src/a.test.ts`` while ``**/*.js`` leaves ``data.json`` alone.
    """
    parts: list[str] = [r"(?:^|/)"]
    i = 0
    while i < len(pattern):
        if pattern.startswith("**/", i):
            parts.append("(?:.*/)?")
            i += 3
        elif pattern.startswith("**", i):
            parts.append(".*")
            i += 2
        elif pattern[i] == "*":
            parts.append("[^/]*")
            i += 1
        elif pattern[i] == "?":
            parts.append("[^/]")
            i += 1
        else:
            parts.append(re.escape(pattern[i]))
            i += 1
    return re.compile("".join(parts) + r"\Z")


def matches_any(rel_path: str, patterns: Iterable[str]) -> bool:
    rel_path = rel_path.replace(os.sep, "/")
    return any(glob_to_regex(p).search(rel_path) for p in patterns)


class SourceReader:
    """File-system implementation of ``SourceAccess``."""

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding

    def read(self, path: str) -> Optional[str]:
        try:
            with open(path, "r", encoding=self.encoding, errors="replace") as f:
                return f.read()
        except OSError as e:
            logger.warning("Cannot read %s: %s", path, e)
            return None

    def scan(
        self,
        root: str,
        include: Optional[Iterable[str]] = None,
        exclude: Optional[Iterable[str]] = None,
        max_depth: int = 10,
    ) -> list[str]:
        """List files under ``root`` matching ``include`` and not ``exclude``.

        Returns absolute paths in sorted order. Excluded directories are
        pruned, and directories nested deeper than ``max_depth`` below the
        root are not entered.
        """
        include = list(include) if include is not None else DEFAULT_INCLUDE_PATTERNS
        exclude = list(exclude) if exclude is not None else DEFAULT_EXCLUDE_PATTERNS
        root = os.path.abspath(root)
        found: list[str] = []

        def on_error(err: OSError) -> None:
            logger.warning("Cannot list %s: %s", err.filename, err.strerror)

        for dirpath, dirnames, filenames in os.walk(root, onerror=on_error):
            rel_dir = os.path.relpath(dirpath, root)
            depth = 0 if rel_dir == "." else rel_dir.count(os.sep) + 1

            kept = []
            for name in sorted(dirnames):
                rel = name if rel_dir == "." else os.path.join(rel_dir, name)
                if depth + 1 > max_depth:
                    continue
                if matches_any(rel + "/", exclude):
                    continue
                kept.append(name)
            dirnames[:] = kept

            for name in filenames:
                rel = name if rel_dir == "." else os.path.join(rel_dir, name)
                if matches_any(rel, exclude) or not matches_any(rel, include):
                    continue
                found.append(os.path.join(dirpath, name))

        found.sort()
        logger.debug("Scanned %s: %d files", root, len(found))
        return found
