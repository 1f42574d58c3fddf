"""Heuristic repository analysis and task-to-code matching."""

from repo_insight.core import RepositoryAnalyzer, build_report, detect_project_type
from repo_insight.sources import (
    AnalysisError,
    GitHubSource,
    RepositoryNotFoundError,
    RepositorySource,
    SourceError,
)

__version__ = "0.1.0"

__all__ = [
    "AnalysisError",
    "GitHubSource",
    "RepositoryAnalyzer",
    "RepositoryNotFoundError",
    "RepositorySource",
    "SourceError",
    "build_report",
    "detect_project_type",
]
