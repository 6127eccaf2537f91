"""Module specifier resolution against the scanned file set."""

from __future__ import annotations

import os
from typing import Collection, Mapping, Optional

RESOLVE_EXTENSIONS = (".ts", ".tsx", ".js", ".jsx")


def is_relative_specifier(specifier: str) -> bool:
    return specifier in (".", "..") or specifier.startswith(("./", "../"))


def candidate_paths(base: str) -> list[str]:
    """Paths tried for ``base``: exact, with an extension, then an index file."""
    candidates = [base]
    candidates.extend(base + ext for ext in RESOLVE_EXTENSIONS)
    candidates.extend(os.path.join(base, "index" + ext) for ext in RESOLVE_EXTENSIONS)
    return candidates


def resolve_specifier(
    specifier: str,
    importer: str,
    known_files: Collection[str],
    root: Optional[str] = None,
    aliases: Optional[Mapping[str, str]] = None,
) -> Optional[str]:
    """Map an import specifier to a file in ``known_files``.

    Relative specifiers are joined with the importer's directory, absolute
    ones are taken as-is and alias prefixes are rewritten relative to
    ``root``. Returns None for anything that stays external.
    """
    base = _base_path(specifier, importer, root, aliases or {})
    if base is None:
        return None
    for candidate in candidate_paths(base):
        if candidate in known_files:
            return candidate
    return None


def _base_path(
    specifier: str, importer: str, root: Optional[str], aliases: Mapping[str, str]
) -> Optional[str]:
    if is_relative_specifier(specifier):
        return os.path.normpath(os.path.join(os.path.dirname(importer), specifier))
    if specifier.startswith("/"):
        return os.path.normpath(specifier)
    if root is not None:
        # Longest prefix wins so "@/lib/" beats "@/"
        for prefix in sorted(aliases, key=len, reverse=True):
            if specifier.startswith(prefix):
                rewritten = aliases[prefix] + specifier[len(prefix):]
                return os.path.normpath(os.path.join(root, rewritten))
    return None
