"""detect_project_type tool implementation."""

from __future__ import annotations

from loguru import logger
from pydantic import ValidationError

from repo_insight.core import detect_project_type as classify_project
from repo_insight.schemas import AnalysisReport
from repo_insight.sources import RepositorySource
from repo_insight.tools.analyze_repository import analyze_repository


async def detect_project_type(
    repo: str | None = None,
    analysis_json: str | None = None,
    token: str | None = None,
    source: RepositorySource | None = None,
) -> dict:
    """Classify a repository as mobile-app, fullstack, api, spa or custom.

    Args:
        repo: Repository id in ``owner/name`` form
        analysis_json: Optional pre-computed analysis report as JSON string
        token: GitHub token for private repositories
        source: Alternative repository source (defaults to GitHub)

    Returns:
        The project type and the repository it was derived from
    """
    report = None

    if analysis_json:
        try:
            report = AnalysisReport.model_validate_json(analysis_json)
        except ValidationError as e:
            logger.warning(f"Failed to parse analysis_json, will re-analyze: {e}")

    if report is None:
        if not repo:
            msg = "Either repo or analysis_json is required"
            raise ValueError(msg)
        report = AnalysisReport.model_validate(
            await analyze_repository(repo, token=token, source=source)
        )

    project_type = classify_project(report)
    logger.info(f"Project type for {report.repository}: {project_type.value}")
    return {"repository": report.repository, "project_type": project_type.value}
