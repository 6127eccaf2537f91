"""Logging setup for the codeshape command line.

Diagnostics go to stderr through rich; stdout carries only reports, so
``--format json`` and ``--format dot`` output can be piped safely.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "codeshape"

# Keyed by AnalysisConfig.verbosity.
LEVELS = {
    "quiet": logging.ERROR,
    "normal": logging.WARNING,
    "verbose": logging.DEBUG,
}

FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def verbosity_for(verbose: bool = False, quiet: bool = False) -> str:
    if quiet:
        return "quiet"
    return "verbose" if verbose else "normal"


def setup_logging(
    verbose: bool = False, quiet: bool = False, log_file: Optional[str] = None
) -> logging.Logger:
    """Install the stderr handler (and an optional file handler).

    ``quiet`` wins over ``verbose``. Verbose runs also show timestamps,
    source locations and locals in tracebacks. Calling this again
    replaces the previous handlers.
    """
    verbosity = verbosity_for(verbose, quiet)
    level = LEVELS[verbosity]
    detailed = verbosity == "verbose"

    handlers: list[logging.Handler] = [
        RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            tracebacks_show_locals=detailed,
            # File paths contain brackets that rich would read as markup.
            markup=False,
            show_time=detailed,
            show_path=detailed,
        )
    ]
    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        handlers.append(file_handler)

    logging.basicConfig(
        level=level, format="%(message)s", datefmt="[%X]", handlers=handlers, force=True
    )
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger under the ``codeshape`` namespace; bare names are prefixed."""
    if name is None:
        return logging.getLogger(ROOT_LOGGER)
    if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
