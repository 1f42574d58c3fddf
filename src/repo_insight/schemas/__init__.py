"""Pydantic schemas for repo-insight."""

from repo_insight.schemas.analysis import (
    AnalysisReport,
    ArchitectureReport,
    ArchitectureStyle,
    FeatureCatalogue,
    FileStats,
    Grade,
    Paradigm,
    ParadigmReport,
    ProjectType,
    QualityReport,
    StructureFlags,
    TechStackReport,
)
from repo_insight.schemas.repository import (
    CommitInfo,
    EntryKind,
    FileContent,
    Manifest,
    ManifestKind,
    RepoDetails,
    RepoEntry,
)
from repo_insight.schemas.tasks import (
    CategoryEvidence,
    Phase,
    PhaseMatch,
    SubTask,
    TaskComparison,
    TaskMatch,
    TaskStatus,
)

__all__ = [
    "AnalysisReport",
    "ArchitectureReport",
    "ArchitectureStyle",
    "CategoryEvidence",
    "CommitInfo",
    "EntryKind",
    "FeatureCatalogue",
    "FileContent",
    "FileStats",
    "Grade",
    "Manifest",
    "ManifestKind",
    "Paradigm",
    "ParadigmReport",
    "Phase",
    "PhaseMatch",
    "ProjectType",
    "QualityReport",
    "RepoDetails",
    "RepoEntry",
    "StructureFlags",
    "SubTask",
    "TaskComparison",
    "TaskMatch",
    "TaskStatus",
    "TechStackReport",
]
