"""Abstract repository source and its error taxonomy."""

from __future__ import annotations

from abc import ABC, abstractmethod

from repo_insight.schemas import CommitInfo, FileContent, RepoDetails, RepoEntry


class AnalysisError(Exception):
    """Base class for repo-insight failures."""


class RepositoryNotFoundError(AnalysisError):
    """The repository id does not resolve to a repository."""

    def __init__(self, repo_id: str, reason: str | None = None):
        self.repo_id = repo_id
        super().__init__(reason or f"Repository not found: {repo_id}")


class SourceError(AnalysisError):
    """Transport or authorization failure while talking to a source."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class RepositorySource(ABC):
    """Read-only access to a remote repository snapshot.

    Implementations return ``None`` (files) or an empty list (trees) for
    content that does not exist, and raise :class:`SourceError` for anything
    else that goes wrong in transit.
    """

    @abstractmethod
    async def fetch_tree(self, repo_id: str) -> list[RepoEntry]:
        """Flat recursive listing of the repository."""

    @abstractmethod
    async def fetch_file(self, repo_id: str, path: str) -> FileContent | None:
        """Text content of ``path``, or None when the file is absent."""

    async def fetch_details(self, repo_id: str) -> RepoDetails:
        """Repository metadata.

        Raises:
            RepositoryNotFoundError: when ``repo_id`` does not resolve.
        """
        return RepoDetails(full_name=repo_id)

    async def fetch_commits(self, repo_id: str, count: int = 10) -> list[CommitInfo]:
        """Most recent commits, newest first."""
        return []
