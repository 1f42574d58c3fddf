"""Tool implementations."""

from repo_insight.tools.analyze_repository import analyze_repository
from repo_insight.tools.compare_tasks import compare_tasks_with_code
from repo_insight.tools.detect_project_type import detect_project_type

__all__ = [
    "analyze_repository",
    "compare_tasks_with_code",
    "detect_project_type",
]
