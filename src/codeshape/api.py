"""Public API for codeshape.

Example:
    >>> from codeshape import analyze, analyze_file
    >>>
    >>> report = analyze("/path/to/app")
    >>> report.totals.total_cycles
    0
    >>> analyze_file("/path/to/app/src/api/client.ts").analysis.unused_imports
    ["axios from 'axios'"]
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from .config import load_config
from .dependencies import DependencyResult
from .exceptions import InvalidPathError
from .logging_config import get_logger
from .report import ProjectReport, ReportAggregator
from .session import AnalysisSession

logger = get_logger(__name__)


def analyze(
    path: str = ".",
    config_file: Optional[Path] = None,
    **overrides,
) -> ProjectReport:
    """Analyze a project directory with all three analyzers.

    Args:
        path: Project root (default: current directory)
        config_file: Optional explicit config file path
        **overrides: Configuration overrides (e.g. ``size={"threshold": 300}``)

    Raises:
        ConfigurationError: If configuration is invalid
        InvalidPathError: If ``path`` is not a directory
    """
    root = Path(path).resolve()
    if not root.is_dir():
        raise InvalidPathError(root, "not a directory")

    config = load_config(config_file, **overrides)
    session = AnalysisSession(config=config, root=str(root))
    logger.debug("Analyzing %s", root)
    return ReportAggregator(session).build()


def analyze_file(
    path: str, config_file: Optional[Path] = None, **overrides
) -> DependencyResult:
    """Dependency analysis of a single file outside any project run.

    Raises:
        FileAccessError: If the file cannot be read
        ParsingError: If the file cannot be parsed
    """
    config = load_config(config_file, **overrides)
    session = AnalysisSession(config=config, root=str(Path(path).resolve().parent))
    return session.analyze_file(path)
