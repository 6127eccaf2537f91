"""
codeshape - Structural analysis for JavaScript and TypeScript projects

Finds unused imports and circular dependencies, flags files that mix
responsibilities, and proposes how to split oversized files. All state
lives in an explicit AnalysisSession.
"""

__version__ = "0.1.0"

from .api import analyze, analyze_file
from .config import AnalysisConfig, load_config
from .report import ProjectReport, ReportAggregator
from .session import AnalysisSession

__all__ = [
    "analyze",  # Main entry point
    "analyze_file",
    "AnalysisSession",  # Advanced usage (explicit caches)
    "ReportAggregator",
    "ProjectReport",
    "AnalysisConfig",
    "load_config",
]
