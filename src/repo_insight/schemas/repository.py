"""Schemas for raw repository snapshot data."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class EntryKind(str, Enum):
    """Git tree entry type."""
    BLOB = "blob"
    TREE = "tree"


class RepoEntry(BaseModel):
    """One file or directory in a repository snapshot."""
    model_config = ConfigDict(frozen=True)

    path: str
    kind: EntryKind = EntryKind.BLOB
    size: int = 0


class FileContent(BaseModel):
    """Decoded text content of a single repository file."""
    path: str
    content: str


class ManifestKind(str, Enum):
    """Dependency manifest format."""
    NPM = "npm"
    PIP = "pip"
    PYPROJECT = "pyproject"


class Manifest(BaseModel):
    """Dependencies declared by one manifest file."""
    source_path: str
    kind: ManifestKind
    dependencies: list[str] = Field(default_factory=list)
    dev_dependencies: list[str] = Field(default_factory=list)
    raw_scripts: dict[str, str] = Field(default_factory=dict)

    @property
    def all_dependencies(self) -> list[str]:
        return self.dependencies + [d for d in self.dev_dependencies if d not in self.dependencies]

    @property
    def is_root(self) -> bool:
        return "/" not in self.source_path


class RepoDetails(BaseModel):
    """Repository metadata."""
    full_name: str
    description: str | None = None
    default_branch: str | None = None
    homepage: str | None = None
    language: str | None = None
    private: bool = False


class CommitInfo(BaseModel):
    """Condensed commit record for display."""
    sha: str
    message: str
    author: str | None = None
    date: str | None = None
    url: str | None = None
