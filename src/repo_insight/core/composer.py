"""Repository analysis orchestration."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Sequence

from loguru import logger

from repo_insight.core.indexer import TreeIndex, index_tree
from repo_insight.core.manifests import DEFAULT_MANIFEST_PATHS, ManifestAggregator, ManifestSet
from repo_insight.core.patterns import classify_architecture, classify_paradigm
from repo_insight.core.quality import score_quality
from repo_insight.core.structure import detect_deploy_platform, detect_features, detect_structure
from repo_insight.core.task_matcher import match_phases
from repo_insight.core.tech_stack import classify_tech_stack
from repo_insight.schemas import (
    AnalysisReport,
    CommitInfo,
    Phase,
    ProjectType,
    RepoDetails,
    RepoEntry,
    TaskComparison,
)
from repo_insight.sources.base import RepositoryNotFoundError, RepositorySource

FULLSTACK_FRAMEWORKS = ("next", "nuxt", "remix", "@sveltejs/kit")
MOBILE_FRAMEWORKS = ("react-native", "expo")

# Checked top to bottom; the first predicate that holds decides the type.
PROJECT_TYPE_RULES: tuple[tuple[Callable[[AnalysisReport], bool], ProjectType], ...] = (
    (lambda r: any(k in f.lower() for f in r.tech_stack.frontend for k in MOBILE_FRAMEWORKS), ProjectType.MOBILE_APP),
    (lambda r: any(k in f.lower() for f in r.tech_stack.frontend for k in FULLSTACK_FRAMEWORKS), ProjectType.FULLSTACK),
    (lambda r: r.structure.has_client and r.structure.has_server, ProjectType.FULLSTACK),
    (lambda r: bool(r.tech_stack.backend) and not r.tech_stack.frontend, ProjectType.API),
    (lambda r: bool(r.tech_stack.frontend) and bool(r.tech_stack.backend), ProjectType.FULLSTACK),
    (lambda r: bool(r.tech_stack.frontend), ProjectType.SPA),
)


def detect_project_type(report: AnalysisReport) -> ProjectType:
    """Coarse project type from an analysis report."""
    for applies, project_type in PROJECT_TYPE_RULES:
        if applies(report):
            return project_type
    return ProjectType.CUSTOM


def build_report(
    repo_id: str,
    entries: Sequence[RepoEntry],
    manifests: ManifestSet | None = None,
    details: RepoDetails | None = None,
    commits: Sequence[CommitInfo] = (),
    warnings: Sequence[str] = (),
) -> AnalysisReport:
    """Compose a report from already-fetched data. Pure and deterministic."""
    manifests = manifests or ManifestSet()
    index = index_tree(entries)
    paths = index.paths
    dependencies = manifests.dependencies

    tech_stack = classify_tech_stack(dependencies)
    structure = detect_structure(paths)

    return AnalysisReport(
        repository=repo_id,
        tech_stack=tech_stack,
        structure=structure,
        file_stats=index.file_stats,
        features=detect_features(paths, structure, tech_stack, index.file_count),
        code_quality=score_quality(dependencies, paths),
        paradigm=classify_paradigm(dependencies, paths),
        architecture=classify_architecture(dependencies, paths, structure),
        deploy_platform=detect_deploy_platform(paths, details.homepage if details else None),
        scripts=manifests.scripts,
        details=details,
        recent_commits=list(commits),
        warnings=list(warnings),
    )


class RepositoryAnalyzer:
    """Fetch a repository snapshot and run every classifier over it."""

    def __init__(
        self,
        source: RepositorySource,
        manifest_paths: Sequence[str] = DEFAULT_MANIFEST_PATHS,
        commit_count: int = 10,
    ):
        self.source = source
        self.manifests = ManifestAggregator(source, manifest_paths)
        self.commit_count = commit_count

    async def analyze(self, repo_id: str) -> AnalysisReport:
        """Analyze a repository, degrading section by section on fetch failures.

        Raises:
            RepositoryNotFoundError: when ``repo_id`` does not resolve.
        """
        logger.info(f"Analyzing repository: {repo_id}")

        details, tree, commits, manifests = await asyncio.gather(
            self.source.fetch_details(repo_id),
            self.source.fetch_tree(repo_id),
            self.source.fetch_commits(repo_id, self.commit_count),
            self.manifests.aggregate(repo_id),
            return_exceptions=True,
        )

        warnings: list[str] = []
        details = self._settle("details", details, None, warnings)
        tree = self._settle("tree", tree, [], warnings)
        commits = self._settle("commits", commits, [], warnings)
        manifests = self._settle("manifests", manifests, ManifestSet(), warnings)

        report = build_report(repo_id, tree, manifests, details, commits, warnings)
        if report.tech_stack.is_empty():
            logger.info(f"No known dependencies found in {repo_id}")
        logger.info(
            f"Analysis complete: {report.file_stats.total} files, "
            f"quality {report.code_quality.score} ({report.code_quality.grade.value}), "
            f"{report.architecture.style.value}"
        )
        return report

    async def compare_tasks(self, repo_id: str, phases: Sequence[Phase]) -> TaskComparison:
        """Match each phase task against the repository tree.

        Raises:
            RepositoryNotFoundError: when ``repo_id`` does not resolve.
        """
        logger.info(f"Comparing {sum(len(p.sub_tasks) for p in phases)} task(s) with {repo_id}")

        details, tree = await asyncio.gather(
            self.source.fetch_details(repo_id),
            self.source.fetch_tree(repo_id),
            return_exceptions=True,
        )
        warnings: list[str] = []
        self._settle("details", details, None, warnings)
        tree = self._settle("tree", tree, [], warnings)

        index: TreeIndex = index_tree(tree)
        return TaskComparison(
            repository=repo_id,
            phases=match_phases(phases, index.paths),
            warnings=warnings,
        )

    @staticmethod
    def _settle(section: str, result: object, default: object, warnings: list[str]):
        """Unwrap a gathered result, re-raising only caller-contract failures."""
        if isinstance(result, RepositoryNotFoundError):
            raise result
        if isinstance(result, Exception):
            logger.warning(f"Falling back to empty {section}: {result}")
            warnings.append(section)
            return default
        if isinstance(result, BaseException):
            raise result
        return result
