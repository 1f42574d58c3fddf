"""compare_tasks_with_code tool implementation."""

from __future__ import annotations

import json
from typing import Any

from loguru import logger
from pydantic import TypeAdapter

from repo_insight.core import RepositoryAnalyzer
from repo_insight.schemas import Phase
from repo_insight.sources import GitHubSource, RepositorySource
from repo_insight.tools.analyze_repository import github_source

_PHASES = TypeAdapter(list[Phase])


def parse_phases(phases: str | list[dict[str, Any]]) -> list[Phase]:
    """Validate phases given as a JSON string or a list of dicts."""
    if isinstance(phases, str):
        try:
            phases = json.loads(phases)
        except json.JSONDecodeError as e:
            msg = f"phases is not valid JSON: {e}"
            raise ValueError(msg) from e
    return _PHASES.validate_python(phases)


async def compare_tasks_with_code(
    repo: str,
    phases: str | list[dict[str, Any]],
    token: str | None = None,
    source: RepositorySource | None = None,
) -> dict:
    """Estimate which project tasks already have code in the repository.

    Args:
        repo: Repository id in ``owner/name`` form
        phases: Phases with ``id``, ``title`` and ``sub_tasks`` (JSON string or list)
        token: GitHub token for private repositories
        source: Alternative repository source (defaults to GitHub)

    Returns:
        Task matches grouped by phase, plus the sections that fell back to defaults
    """
    parsed = parse_phases(phases)
    logger.info(f"Comparing {len(parsed)} phase(s) with {repo}")

    owned = source is None
    source = source or github_source(token)
    try:
        comparison = await RepositoryAnalyzer(source).compare_tasks(repo, parsed)
        return comparison.model_dump(mode="json")

    except Exception as e:
        logger.error(f"Task comparison failed: {e}")
        raise
    finally:
        if owned and isinstance(source, GitHubSource):
            await source.aclose()
