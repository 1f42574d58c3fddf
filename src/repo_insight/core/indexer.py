"""Repository tree indexing."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from posixpath import basename

from repo_insight.core.rules import dedupe
from repo_insight.schemas import EntryKind, FileStats, RepoEntry


@dataclass(frozen=True)
class TreeIndex:
    """Lower-cased path listing plus file counts for one snapshot."""
    paths: tuple[str, ...] = ()
    file_stats: FileStats = field(default_factory=FileStats)

    @property
    def file_count(self) -> int:
        return self.file_stats.total


def file_extension(path: str) -> str | None:
    """Extension of the file name, lower-cased, or None when it has no dot."""
    name = basename(path)
    if "." not in name:
        return None
    ext = name.rsplit(".", 1)[1].lower()
    return ext or None


def index_tree(entries: Iterable[RepoEntry]) -> TreeIndex:
    """Build a :class:`TreeIndex` from a flat tree listing."""
    entries = list(entries)
    by_extension: dict[str, int] = {}
    by_folder: dict[str, int] = {}
    total = 0

    for entry in entries:
        if entry.kind != EntryKind.BLOB:
            continue
        total += 1
        ext = file_extension(entry.path)
        if ext:
            by_extension[ext] = by_extension.get(ext, 0) + 1
        if "/" in entry.path:
            folder = entry.path.split("/", 1)[0]
            by_folder[folder] = by_folder.get(folder, 0) + 1

    return TreeIndex(
        paths=tuple(dedupe(e.path.lower() for e in entries)),
        file_stats=FileStats(total=total, by_extension=by_extension, by_folder=by_folder),
    )
