"""Shared fixtures: an in-memory repository source and tree builders."""

from __future__ import annotations

import json

import pytest

from repo_insight.schemas import CommitInfo, EntryKind, FileContent, RepoDetails, RepoEntry
from repo_insight.sources import RepositoryNotFoundError, RepositorySource


def blobs(*paths: str) -> list[RepoEntry]:
    """Blob entries for ``paths`` plus tree entries for their directories."""
    dirs: dict[str, None] = {}
    for path in paths:
        parts = path.split("/")[:-1]
        for i in range(1, len(parts) + 1):
            dirs["/".join(parts[:i])] = None
    return [RepoEntry(path=d, kind=EntryKind.TREE) for d in dirs] + [
        RepoEntry(path=p, kind=EntryKind.BLOB, size=100) for p in paths
    ]


def package_json(dependencies=None, dev=None, scripts=None) -> str:
    data: dict = {"name": "fixture"}
    if dependencies is not None:
        data["dependencies"] = {name: "^1.0.0" for name in dependencies}
    if dev is not None:
        data["devDependencies"] = {name: "^1.0.0" for name in dev}
    if scripts is not None:
        data["scripts"] = scripts
    return json.dumps(data)


class FakeSource(RepositorySource):
    """In-memory source; ``errors`` maps an operation or file path to an exception."""

    def __init__(
        self,
        entries: list[RepoEntry] | None = None,
        files: dict[str, str] | None = None,
        details: RepoDetails | None = None,
        commits: list[CommitInfo] | None = None,
        errors: dict[str, Exception] | None = None,
        known: bool = True,
    ):
        self.entries = entries or []
        self.files = files or {}
        self.details = details
        self.commits = commits or []
        self.errors = errors or {}
        self.known = known
        self.requested_files: list[str] = []

    def _maybe_raise(self, key: str) -> None:
        if key in self.errors:
            raise self.errors[key]

    async def fetch_details(self, repo_id: str) -> RepoDetails:
        if not self.known:
            raise RepositoryNotFoundError(repo_id)
        self._maybe_raise("details")
        return self.details or RepoDetails(full_name=repo_id)

    async def fetch_tree(self, repo_id: str) -> list[RepoEntry]:
        self._maybe_raise("tree")
        return list(self.entries)

    async def fetch_file(self, repo_id: str, path: str) -> FileContent | None:
        self.requested_files.append(path)
        self._maybe_raise(path)
        self._maybe_raise("files")
        if path not in self.files:
            return None
        return FileContent(path=path, content=self.files[path])

    async def fetch_commits(self, repo_id: str, count: int = 10) -> list[CommitInfo]:
        self._maybe_raise("commits")
        return self.commits[:count]


@pytest.fixture
def mern_entries() -> list[RepoEntry]:
    """A small client/server JavaScript project."""
    return blobs(
        "README.md",
        "LICENSE",
        ".env.example",
        ".github/workflows/ci.yml",
        "package.json",
        "client/package.json",
        "client/src/App.jsx",
        "client/src/components/Navbar.jsx",
        "client/src/context/AuthContext.jsx",
        "client/src/pages/LoginPage.jsx",
        "server/package.json",
        "server/index.js",
        "server/routes/auth.js",
        "server/middleware/auth.js",
        "server/middleware/errorHandler.js",
        "server/models/User.js",
        "server/services/emailService.js",
        "server/controllers/authController.js",
    )


@pytest.fixture
def mern_files() -> dict[str, str]:
    return {
        "package.json": package_json(dev=["concurrently"], scripts={"dev": "concurrently ...", "test": "jest"}),
        "client/package.json": package_json(
            dependencies=["react", "react-dom", "axios"],
            dev=["vite", "tailwindcss", "eslint"],
        ),
        "server/package.json": package_json(
            dependencies=["express", "mongoose", "jsonwebtoken", "helmet", "express-rate-limit", "winston"],
            dev=["jest", "supertest", "nodemon"],
        ),
    }


@pytest.fixture
def mern_source(mern_entries, mern_files) -> FakeSource:
    return FakeSource(
        entries=mern_entries,
        files=mern_files,
        details=RepoDetails(full_name="acme/shop", default_branch="main", homepage="https://shop.vercel.app"),
        commits=[CommitInfo(sha="abc1234", message="Initial commit", author="dev")],
    )
