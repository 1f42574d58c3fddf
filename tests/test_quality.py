"""Tests for the code quality rubric."""

import pytest

from repo_insight.core.quality import QUALITY_CHECKS, grade_for, score_quality
from repo_insight.schemas import Grade


def test_weights_total_one_hundred():
    assert sum(check.points for check in QUALITY_CHECKS) == 100


@pytest.mark.parametrize(
    ("score", "grade"),
    [
        (100, Grade.A_PLUS),
        (90, Grade.A_PLUS),
        (89, Grade.A),
        (80, Grade.A),
        (70, Grade.B),
        (60, Grade.C),
        (50, Grade.D),
        (49, Grade.F),
        (0, Grade.F),
    ],
)
def test_grade_boundaries(score, grade):
    assert grade_for(score) == grade


def test_empty_repository_scores_zero():
    report = score_quality([], [])

    assert report.score == 0
    assert report.grade == Grade.F
    assert set(report.details) == {check.name for check in QUALITY_CHECKS}
    assert not any(report.details.values())
    # caching and compression are bonus-only
    assert len(report.recommendations) == 8


def test_full_marks():
    deps = [
        "eslint", "prettier", "typescript", "winston", "zod",
        "helmet", "express-rate-limit", "redis", "compression",
    ]
    paths = ["src/middleware/errorhandler.ts"]

    report = score_quality(deps, paths)

    assert report.score == 100
    assert report.grade == Grade.A_PLUS
    assert report.recommendations == []


def test_partial_score_and_recommendations():
    report = score_quality(["ESLint", "Joi"], ["server/utils/apperror.js", "server/index.js"])

    # linting 10 + error handling 10 + validation 10
    assert report.score == 30
    assert report.grade == Grade.F
    assert report.details["linting"] is True
    assert report.details["typescript"] is False
    assert report.recommendations == [
        "Add Prettier for automatic code formatting",
        "Consider migrating to TypeScript for type safety",
        "Add structured logging (Winston or Pino)",
        "Add security headers with Helmet",
        "Add rate limiting to protect API endpoints",
    ]


def test_typescript_detected_from_file_suffix():
    report = score_quality([], ["src/app.tsx"])

    assert report.details["typescript"] is True
    assert report.score == 15
