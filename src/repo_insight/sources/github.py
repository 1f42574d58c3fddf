"""GitHub REST API repository source."""

from __future__ import annotations

import base64
import binascii
from typing import Any

import httpx
from loguru import logger

from repo_insight.schemas import CommitInfo, EntryKind, FileContent, RepoDetails, RepoEntry
from repo_insight.sources.base import RepositoryNotFoundError, RepositorySource, SourceError

# HEAD resolves to the default branch, whatever its name
FALLBACK_BRANCHES = ("main", "master", "HEAD")


def split_repo_id(repo_id: str) -> tuple[str, str]:
    """Split ``owner/name`` into its parts."""
    owner, _, name = repo_id.strip().strip("/").partition("/")
    if not owner or not name or "/" in name:
        raise RepositoryNotFoundError(repo_id, f"Expected 'owner/name', got: {repo_id!r}")
    return owner, name


class GitHubSource(RepositorySource):
    """Fetch repository snapshots from the GitHub REST API."""

    def __init__(
        self,
        token: str | None = None,
        base_url: str = "https://api.github.com",
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ):
        self.token = token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            headers = {
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
            }
            if self.token:
                headers["Authorization"] = f"Bearer {self.token}"
            self._client = httpx.AsyncClient(
                headers=headers,
                timeout=self.timeout,
            )
        return self._client

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> GitHubSource:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def _get(self, url: str, params: dict[str, Any] | None = None) -> Any | None:
        """GET a JSON document; None on 404."""
        client = self._get_client()
        try:
            response = await client.get(f"{self.base_url}{url}", params=params)
        except httpx.HTTPError as e:
            logger.error(f"GitHub request failed: {url}: {e}")
            raise SourceError(f"GitHub request failed: {e}") from e

        if response.status_code == 404:
            return None
        if response.is_error:
            raise SourceError(
                f"GitHub API error {response.status_code} for {url}",
                status_code=response.status_code,
            )
        try:
            return response.json()
        except ValueError as e:
            raise SourceError(f"GitHub returned invalid JSON for {url}") from e

    async def fetch_details(self, repo_id: str) -> RepoDetails:
        owner, name = split_repo_id(repo_id)
        data = await self._get(f"/repos/{owner}/{name}")
        if data is None:
            raise RepositoryNotFoundError(repo_id)

        return RepoDetails(
            full_name=data.get("full_name", repo_id),
            description=data.get("description"),
            default_branch=data.get("default_branch"),
            homepage=data.get("homepage") or None,
            language=data.get("language"),
            private=bool(data.get("private", False)),
        )

    async def fetch_tree(self, repo_id: str) -> list[RepoEntry]:
        owner, name = split_repo_id(repo_id)

        for branch in FALLBACK_BRANCHES:
            data = await self._get(
                f"/repos/{owner}/{name}/git/trees/{branch}",
                params={"recursive": "true"},
            )
            if data is None:
                logger.debug(f"No tree for {repo_id}@{branch}")
                continue
            if data.get("truncated"):
                logger.warning(f"Tree listing for {repo_id} was truncated by GitHub")
            return [
                RepoEntry(
                    path=item["path"],
                    kind=EntryKind.TREE if item.get("type") == "tree" else EntryKind.BLOB,
                    size=item.get("size") or 0,
                )
                for item in data.get("tree", [])
                if item.get("type") in {"blob", "tree"}
            ]

        logger.warning(f"No tree found for {repo_id} on any of {', '.join(FALLBACK_BRANCHES)}")
        return []

    async def fetch_file(self, repo_id: str, path: str) -> FileContent | None:
        owner, name = split_repo_id(repo_id)
        data = await self._get(f"/repos/{owner}/{name}/contents/{path}")
        # Directories come back as a list
        if not isinstance(data, dict) or not data.get("content"):
            return None

        try:
            raw = base64.b64decode(data["content"])
        except (binascii.Error, ValueError) as e:
            raise SourceError(f"Undecodable content for {repo_id}:{path}") from e
        return FileContent(path=path, content=raw.decode("utf-8", errors="replace"))

    async def fetch_commits(self, repo_id: str, count: int = 10) -> list[CommitInfo]:
        owner, name = split_repo_id(repo_id)
        data = await self._get(f"/repos/{owner}/{name}/commits", params={"per_page": count})
        if not data:
            return []

        commits = []
        for item in data:
            commit = item.get("commit", {})
            author = commit.get("author") or {}
            message = commit.get("message", "")
            commits.append(CommitInfo(
                sha=item.get("sha", "")[:7],
                message=message.split("\n", 1)[0],
                author=author.get("name"),
                date=author.get("date"),
                url=item.get("html_url"),
            ))
        return commits
