"""Repository sources."""

from repo_insight.sources.base import (
    AnalysisError,
    RepositoryNotFoundError,
    RepositorySource,
    SourceError,
)
from repo_insight.sources.github import GitHubSource

__all__ = [
    "AnalysisError",
    "GitHubSource",
    "RepositoryNotFoundError",
    "RepositorySource",
    "SourceError",
]
