"""analyze_repository tool implementation."""

from __future__ import annotations

from loguru import logger

from repo_insight.config import get_settings
from repo_insight.core import RepositoryAnalyzer, detect_project_type
from repo_insight.sources import GitHubSource, RepositorySource


def github_source(token: str | None = None) -> GitHubSource:
    """GitHub source configured from the environment."""
    settings = get_settings()
    return GitHubSource(
        token=token or settings.github_token,
        base_url=settings.github_api_url,
        timeout=settings.github_timeout,
    )


async def analyze_repository(
    repo: str,
    token: str | None = None,
    source: RepositorySource | None = None,
) -> dict:
    """Analyze a repository's stack, structure, quality and architecture.

    Args:
        repo: Repository id in ``owner/name`` form
        token: GitHub token for private repositories
        source: Alternative repository source (defaults to GitHub)

    Returns:
        Analysis report with the detected project type
    """
    logger.info(f"Starting repository analysis: {repo}")

    owned = source is None
    source = source or github_source(token)
    try:
        analyzer = RepositoryAnalyzer(source, commit_count=get_settings().recent_commit_count)
        report = await analyzer.analyze(repo)

        output = report.model_dump(mode="json")
        output["project_type"] = detect_project_type(report).value
        return output

    except Exception as e:
        logger.error(f"Repository analysis failed: {e}")
        raise
    finally:
        if owned and isinstance(source, GitHubSource):
            await source.aclose()
