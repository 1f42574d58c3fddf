"""Core module exports."""

from repo_insight.core.composer import RepositoryAnalyzer, build_report, detect_project_type
from repo_insight.core.indexer import TreeIndex, index_tree
from repo_insight.core.manifests import ManifestAggregator, ManifestSet
from repo_insight.core.patterns import classify_architecture, classify_paradigm
from repo_insight.core.quality import score_quality
from repo_insight.core.structure import detect_deploy_platform, detect_features, detect_structure
from repo_insight.core.task_matcher import match_phases, match_task
from repo_insight.core.tech_stack import classify_tech_stack

__all__ = [
    "ManifestAggregator",
    "ManifestSet",
    "RepositoryAnalyzer",
    "TreeIndex",
    "build_report",
    "classify_architecture",
    "classify_paradigm",
    "classify_tech_stack",
    "detect_deploy_platform",
    "detect_features",
    "detect_project_type",
    "detect_structure",
    "index_tree",
    "match_phases",
    "match_task",
    "score_quality",
]
