"""Dependency manifest discovery and parsing."""

from __future__ import annotations

import asyncio
import json
import re
import tomllib
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from posixpath import basename

from loguru import logger

from repo_insight.core.rules import dedupe
from repo_insight.schemas import Manifest, ManifestKind
from repo_insight.sources.base import RepositorySource

DEFAULT_MANIFEST_PATHS: tuple[str, ...] = (
    "package.json",
    "client/package.json",
    "frontend/package.json",
    "server/package.json",
    "backend/package.json",
    "requirements.txt",
    "pyproject.toml",
)

_REQUIREMENT_SPLIT = re.compile(r"[\s<>=!~;\[@]")


class ManifestParseError(ValueError):
    """Manifest content could not be parsed."""


@dataclass
class ManifestSet:
    """Manifests found for one repository, merged."""
    manifests: list[Manifest] = field(default_factory=list)
    dependencies: list[str] = field(default_factory=list)
    primary: Manifest | None = None

    @property
    def scripts(self) -> list[str]:
        return list(self.primary.raw_scripts) if self.primary else []


def _name_keys(section: object) -> list[str]:
    if isinstance(section, dict):
        return [str(k) for k in section]
    return []


def _requirement_name(spec: str) -> str:
    return _REQUIREMENT_SPLIT.split(spec.strip(), maxsplit=1)[0].strip()


def parse_package_json(path: str, content: str) -> Manifest:
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ManifestParseError(f"{path}: {e}") from e
    if not isinstance(data, dict):
        raise ManifestParseError(f"{path}: expected a JSON object")

    scripts = data.get("scripts")
    return Manifest(
        source_path=path,
        kind=ManifestKind.NPM,
        dependencies=_name_keys(data.get("dependencies")),
        dev_dependencies=_name_keys(data.get("devDependencies")),
        raw_scripts={str(k): str(v) for k, v in scripts.items()} if isinstance(scripts, dict) else {},
    )


def parse_requirements(path: str, content: str) -> Manifest:
    names: list[str] = []
    for line in content.splitlines():
        stripped = line.split("#", 1)[0].strip()
        if not stripped or stripped.startswith("-"):
            continue
        name = _requirement_name(stripped)
        if name:
            names.append(name)
    return Manifest(source_path=path, kind=ManifestKind.PIP, dependencies=dedupe(names))


def _table(data: dict, key: str, path: str) -> dict:
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ManifestParseError(f"{path}: '{key}' must be a table")
    return value


def _requirements(value: object, path: str, key: str) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ManifestParseError(f"{path}: '{key}' must be an array")
    return [_requirement_name(d) for d in value if isinstance(d, str)]


def parse_pyproject(path: str, content: str) -> Manifest:
    try:
        data = tomllib.loads(content)
    except tomllib.TOMLDecodeError as e:
        raise ManifestParseError(f"{path}: {e}") from e

    runtime: list[str] = []
    dev: list[str] = []
    scripts: dict[str, str] = {}

    project = _table(data, "project", path)
    runtime.extend(_requirements(project.get("dependencies"), path, "dependencies"))
    for extra, group in _table(project, "optional-dependencies", path).items():
        dev.extend(_requirements(group, path, f"optional-dependencies.{extra}"))
    scripts.update({str(k): str(v) for k, v in _table(project, "scripts", path).items()})

    poetry = _table(_table(data, "tool", path), "poetry", path)
    runtime.extend(k for k in _name_keys(_table(poetry, "dependencies", path)) if k.lower() != "python")
    dev.extend(_name_keys(_table(poetry, "dev-dependencies", path)))
    groups = _table(poetry, "group", path)
    for name in groups:
        group = _table(groups, name, path)
        dev.extend(_name_keys(_table(group, "dependencies", path)))
    scripts.update({str(k): str(v) for k, v in _table(poetry, "scripts", path).items()})

    return Manifest(
        source_path=path,
        kind=ManifestKind.PYPROJECT,
        dependencies=dedupe(n for n in runtime if n),
        dev_dependencies=dedupe(n for n in dev if n),
        raw_scripts=scripts,
    )


PARSERS: dict[str, Callable[[str, str], Manifest]] = {
    "package.json": parse_package_json,
    "requirements.txt": parse_requirements,
    "pyproject.toml": parse_pyproject,
}


class ManifestAggregator:
    """Fetch every candidate manifest concurrently and merge dependencies."""

    def __init__(
        self,
        source: RepositorySource,
        candidate_paths: Sequence[str] = DEFAULT_MANIFEST_PATHS,
    ):
        self.source = source
        self.candidate_paths = tuple(candidate_paths)

    async def aggregate(self, repo_id: str) -> ManifestSet:
        """Merge all manifests found at the candidate paths.

        Missing or malformed manifests are skipped. Any other failure is
        re-raised once every sibling fetch has finished.
        """
        results = await asyncio.gather(
            *(self._load(repo_id, path) for path in self.candidate_paths),
            return_exceptions=True,
        )

        failures = [r for r in results if isinstance(r, Exception)]
        if failures:
            raise failures[0]

        manifests = [r for r in results if isinstance(r, Manifest)]
        logger.debug(f"Found {len(manifests)} manifest(s) in {repo_id}")
        return merge_manifests(manifests)

    async def _load(self, repo_id: str, path: str) -> Manifest | None:
        parser = PARSERS.get(basename(path))
        if parser is None:
            logger.debug(f"No parser for manifest candidate {path}")
            return None

        file = await self.source.fetch_file(repo_id, path)
        if file is None:
            return None

        try:
            return parser(path, file.content)
        except ManifestParseError as e:
            logger.debug(f"Skipping malformed manifest {e}")
            return None


def merge_manifests(manifests: Sequence[Manifest]) -> ManifestSet:
    """Union of dependency names in manifest order, plus the primary manifest."""
    dependencies = dedupe(dep for m in manifests for dep in m.all_dependencies)
    primary = next((m for m in manifests if m.is_root), None)
    return ManifestSet(manifests=list(manifests), dependencies=dependencies, primary=primary)
