"""Analysis schemas for repository classification results."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from repo_insight.schemas.repository import CommitInfo, RepoDetails


class Grade(str, Enum):
    """Letter grade derived from the code quality score."""
    A_PLUS = "A+"
    A = "A"
    B = "B"
    C = "C"
    D = "D"
    F = "F"


class Paradigm(str, Enum):
    """Dominant programming paradigm."""
    OBJECT_ORIENTED = "object-oriented"
    FUNCTIONAL = "functional"
    PROCEDURAL = "procedural"
    MIXED = "mixed"


class ArchitectureStyle(str, Enum):
    """Coarse deployment/composition shape."""
    MONOLITH = "monolith"
    MICROSERVICES = "microservices"
    SERVERLESS = "serverless"
    JAMSTACK = "jamstack"


class ProjectType(str, Enum):
    """Project type inferred from an analysis report."""
    MOBILE_APP = "mobile-app"
    FULLSTACK = "fullstack"
    API = "api"
    SPA = "spa"
    CUSTOM = "custom"


class TechStackReport(BaseModel):
    """Dependency names grouped by category, first-seen order."""
    frontend: list[str] = Field(default_factory=list)
    backend: list[str] = Field(default_factory=list)
    database: list[str] = Field(default_factory=list)
    styling: list[str] = Field(default_factory=list)
    testing: list[str] = Field(default_factory=list)
    devops: list[str] = Field(default_factory=list)
    other: list[str] = Field(default_factory=list)

    def is_empty(self) -> bool:
        return not any(self.model_dump().values())


class StructureFlags(BaseModel):
    """Boolean repository layout signals."""
    has_client: bool = False
    has_server: bool = False
    has_src: bool = False
    has_tests: bool = False
    has_docker: bool = False
    has_cicd: bool = False
    has_readme: bool = False
    has_env_example: bool = False
    has_license: bool = False
    has_contributing: bool = False


class FileStats(BaseModel):
    """File counts for a snapshot."""
    total: int = 0
    by_extension: dict[str, int] = Field(default_factory=dict)
    by_folder: dict[str, int] = Field(default_factory=dict)


class FeatureCatalogue(BaseModel):
    """Detected and missing features with follow-up suggestions."""
    detected: list[str] = Field(default_factory=list)
    missing: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)


class QualityReport(BaseModel):
    """Weighted code quality rubric result."""
    score: int = Field(default=0, ge=0, le=100)
    grade: Grade = Grade.F
    details: dict[str, bool] = Field(default_factory=dict)
    recommendations: list[str] = Field(default_factory=list)


class ParadigmReport(BaseModel):
    """Dominant paradigm plus the design patterns seen along the way."""
    primary: Paradigm = Paradigm.PROCEDURAL
    patterns: list[str] = Field(default_factory=list)
    description: str = ""
    oop_score: int = 0
    functional_score: int = 0


class ArchitectureReport(BaseModel):
    """Architecture style and detected layers."""
    style: ArchitectureStyle = ArchitectureStyle.MONOLITH
    layers: list[str] = Field(default_factory=list)
    description: str = ""


class AnalysisReport(BaseModel):
    """Complete heuristic analysis of one repository snapshot."""
    repository: str
    tech_stack: TechStackReport = Field(default_factory=TechStackReport)
    structure: StructureFlags = Field(default_factory=StructureFlags)
    file_stats: FileStats = Field(default_factory=FileStats)
    features: FeatureCatalogue = Field(default_factory=FeatureCatalogue)
    code_quality: QualityReport = Field(default_factory=QualityReport)
    paradigm: ParadigmReport = Field(default_factory=ParadigmReport)
    architecture: ArchitectureReport = Field(default_factory=ArchitectureReport)
    deploy_platform: str | None = None
    scripts: list[str] = Field(default_factory=list)
    details: RepoDetails | None = None
    recent_commits: list[CommitInfo] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)  # sections that fell back to defaults
