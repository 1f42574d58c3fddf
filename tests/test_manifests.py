"""Tests for manifest discovery and parsing."""

import asyncio

import pytest

from repo_insight.core.manifests import (
    DEFAULT_MANIFEST_PATHS,
    ManifestAggregator,
    ManifestParseError,
    parse_package_json,
    parse_pyproject,
    parse_requirements,
)
from repo_insight.schemas import ManifestKind
from repo_insight.sources import SourceError
from tests.conftest import FakeSource, package_json


def aggregate(source, repo_id="acme/shop"):
    return asyncio.run(ManifestAggregator(source).aggregate(repo_id))


def test_parse_package_json_collects_both_groups_and_scripts():
    manifest = parse_package_json(
        "package.json",
        package_json(dependencies=["react"], dev=["vite"], scripts={"build": "vite build"}),
    )

    assert manifest.kind == ManifestKind.NPM
    assert manifest.dependencies == ["react"]
    assert manifest.dev_dependencies == ["vite"]
    assert manifest.all_dependencies == ["react", "vite"]
    assert manifest.raw_scripts == {"build": "vite build"}


@pytest.mark.parametrize("content", ["{not json", "[1, 2, 3]"])
def test_parse_package_json_rejects_malformed(content):
    with pytest.raises(ManifestParseError):
        parse_package_json("package.json", content)


def test_parse_requirements_skips_comments_and_options():
    content = "\n".join([
        "# web",
        "fastapi>=0.100",
        "uvicorn[standard]==0.30  # server",
        "-r dev.txt",
        "--index-url https://example.com",
        "",
        "pydantic ~= 2.0",
        "requests; python_version > '3.8'",
    ])

    manifest = parse_requirements("requirements.txt", content)

    assert manifest.dependencies == ["fastapi", "uvicorn", "pydantic", "requests"]


def test_parse_pyproject_reads_project_and_poetry_tables():
    content = """
[project]
name = "demo"
dependencies = ["flask>=3", "sqlalchemy"]

[project.optional-dependencies]
test = ["pytest>=8"]

[project.scripts]
demo = "demo.cli:main"

[tool.poetry.dependencies]
python = "^3.11"
redis = "^5"
"""

    manifest = parse_pyproject("pyproject.toml", content)

    assert manifest.dependencies == ["flask", "sqlalchemy", "redis"]
    assert manifest.dev_dependencies == ["pytest"]
    assert manifest.raw_scripts == {"demo": "demo.cli:main"}


def test_parse_pyproject_rejects_invalid_toml():
    with pytest.raises(ManifestParseError):
        parse_pyproject("pyproject.toml", "[project\nname=")


@pytest.mark.parametrize(
    "content",
    [
        "[project]\noptional-dependencies = [\"pytest\"]",
        "[project]\nscripts = [\"serve\"]",
        "[project]\ndependencies = \"fastapi\"",
        "project = \"demo\"",
        "[tool.poetry]\ngroup = { dev = [\"pytest\"] }",
    ],
)
def test_parse_pyproject_rejects_wrong_shapes(content):
    with pytest.raises(ManifestParseError):
        parse_pyproject("pyproject.toml", content)


def test_misshapen_pyproject_does_not_drop_other_manifests():
    source = FakeSource(files={
        "package.json": package_json(dependencies=["express"]),
        "pyproject.toml": "[project]\noptional-dependencies = [\"pytest\"]\n",
    })

    result = aggregate(source)

    assert result.dependencies == ["express"]
    assert [m.source_path for m in result.manifests] == ["package.json"]


def test_aggregate_merges_in_candidate_order(mern_source):
    result = aggregate(mern_source)

    assert [m.source_path for m in result.manifests] == [
        "package.json",
        "client/package.json",
        "server/package.json",
    ]
    assert result.dependencies[:4] == ["concurrently", "react", "react-dom", "axios"]
    assert "express" in result.dependencies
    assert len(result.dependencies) == len(set(result.dependencies))
    assert set(mern_source.requested_files) == set(DEFAULT_MANIFEST_PATHS)


def test_primary_manifest_is_the_root_one(mern_source):
    result = aggregate(mern_source)

    assert result.primary.source_path == "package.json"
    assert result.scripts == ["dev", "test"]


def test_no_root_manifest_means_no_scripts():
    source = FakeSource(files={"server/package.json": package_json(dependencies=["express"], scripts={"start": "node ."})})

    result = aggregate(source)

    assert result.primary is None
    assert result.scripts == []
    assert result.dependencies == ["express"]


def test_malformed_manifest_is_skipped():
    source = FakeSource(files={
        "package.json": "{oops",
        "server/package.json": package_json(dependencies=["koa"]),
    })

    result = aggregate(source)

    assert result.dependencies == ["koa"]
    assert result.primary is None


def test_missing_manifests_give_empty_set():
    result = aggregate(FakeSource())

    assert result.manifests == []
    assert result.dependencies == []


def test_transport_failure_propagates_after_siblings_finish():
    source = FakeSource(
        files={"package.json": package_json(dependencies=["react"])},
        errors={"server/package.json": SourceError("boom", status_code=502)},
    )

    with pytest.raises(SourceError):
        aggregate(source)

    assert set(source.requested_files) == set(DEFAULT_MANIFEST_PATHS)
