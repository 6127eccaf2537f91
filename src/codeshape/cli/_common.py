"""Shared CLI helpers."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

from rich.console import Console
from rich.markup import escape

from ..config import AnalysisConfig, load_config
from ..session import AnalysisSession

console = Console()

SEVERITY_STYLES = {"high": "red", "medium": "yellow", "low": "dim"}


def resolve_config(
    config: Optional[Path] = None,
    threshold: Optional[int] = None,
    max_responsibilities: Optional[int] = None,
    strict: bool = False,
    include_external: bool = False,
    verbose: bool = False,
    quiet: bool = False,
) -> AnalysisConfig:
    """Build configuration from CLI options."""
    overrides: dict[str, Any] = {}
    if threshold is not None:
        overrides["size"] = {"threshold": threshold}
    responsibility: dict[str, Any] = {}
    if max_responsibilities is not None:
        responsibility["max_responsibilities"] = max_responsibilities
    if strict:
        responsibility["strict_mode"] = True
    if responsibility:
        overrides["responsibility"] = responsibility
    if include_external:
        overrides["dependencies"] = {"include_external_deps": True}
    if verbose:
        overrides["verbose"] = True
    if quiet:
        overrides["quiet"] = True
    return load_config(config_file=config, **overrides)


def open_session(path: Path, config: AnalysisConfig) -> AnalysisSession:
    return AnalysisSession(config=config, root=str(path.resolve()))


def relative(path: str, root: Path) -> str:
    """Display form of ``path``: relative to the project root when inside it."""
    try:
        return str(Path(path).relative_to(root.resolve()))
    except ValueError:
        return path


def styled(severity: str, text: str) -> str:
    style = SEVERITY_STYLES.get(severity, "white")
    return f"[{style}]{escape(text)}[/{style}]"


def print_json(payload: dict) -> None:
    # Plain print so rich never wraps machine output
    print(json.dumps(payload, indent=2))
