"""Weighted code quality rubric."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from repo_insight.core.rules import MatchMode, any_path_matches
from repo_insight.schemas import Grade, QualityReport


@dataclass(frozen=True)
class QualityCheck:
    """One rubric line: passes when a dependency or path keyword is present."""
    name: str
    points: int
    dependency_keywords: tuple[str, ...] = ()
    path_keywords: tuple[str, ...] = ()
    path_match: MatchMode = MatchMode.CONTAINS
    recommendation: str | None = None  # None for bonus-only checks

    def passes(self, dependencies: Sequence[str], paths: Sequence[str]) -> bool:
        return any_path_matches(dependencies, self.dependency_keywords) or any_path_matches(
            paths, self.path_keywords, self.path_match
        )


QUALITY_CHECKS: tuple[QualityCheck, ...] = (
    QualityCheck(
        "linting", 10,
        dependency_keywords=("eslint", "tslint", "biome", "ruff", "flake8", "pylint", "stylelint"),
        path_keywords=(".eslintrc", "eslint.config", ".flake8", "ruff.toml", ".pylintrc"),
        recommendation="Add a linter (ESLint) to enforce consistent code style",
    ),
    QualityCheck(
        "formatting", 10,
        dependency_keywords=("prettier", "black", "biome", "yapf", "autopep8"),
        path_keywords=(".prettierrc", "prettier.config", ".editorconfig"),
        recommendation="Add Prettier for automatic code formatting",
    ),
    QualityCheck(
        "typescript", 15,
        dependency_keywords=("typescript",),
        path_keywords=(".ts", ".tsx", "tsconfig.json"),
        path_match=MatchMode.SUFFIX,
        recommendation="Consider migrating to TypeScript for type safety",
    ),
    QualityCheck(
        "error_handling", 10,
        dependency_keywords=("express-async-errors", "http-errors", "boom"),
        path_keywords=("error", "exception"),
        recommendation="Add centralized error handling middleware",
    ),
    QualityCheck(
        "logging", 10,
        dependency_keywords=("winston", "pino", "morgan", "bunyan", "log4js", "loguru", "structlog"),
        path_keywords=("logger",),
        recommendation="Add structured logging (Winston or Pino)",
    ),
    QualityCheck(
        "validation", 10,
        dependency_keywords=("joi", "zod", "yup", "validator", "ajv", "pydantic", "marshmallow", "superstruct"),
        path_keywords=("validat",),
        recommendation="Add input validation (Zod, Joi, or express-validator)",
    ),
    QualityCheck(
        "security_headers", 10,
        dependency_keywords=("helmet", "django-csp", "flask-talisman", "secure"),
        recommendation="Add security headers with Helmet",
    ),
    QualityCheck(
        "rate_limiting", 10,
        dependency_keywords=("rate-limit", "ratelimit", "rate_limit", "slowapi", "limiter", "throttl", "bottleneck"),
        path_keywords=("ratelimit", "rate-limit", "rate_limit", "throttl"),
        recommendation="Add rate limiting to protect API endpoints",
    ),
    QualityCheck(
        "caching", 5,
        dependency_keywords=("redis", "cache", "memcached", "keyv"),
        path_keywords=("cache",),
    ),
    QualityCheck(
        "compression", 5,
        dependency_keywords=("compression", "brotli", "gzip", "zlib"),
    ),
)

# Minimum score for each grade, highest first.
GRADE_THRESHOLDS: tuple[tuple[int, Grade], ...] = (
    (90, Grade.A_PLUS),
    (80, Grade.A),
    (70, Grade.B),
    (60, Grade.C),
    (50, Grade.D),
)


def grade_for(score: int) -> Grade:
    for minimum, grade in GRADE_THRESHOLDS:
        if score >= minimum:
            return grade
    return Grade.F


def score_quality(dependencies: Sequence[str], paths: Sequence[str]) -> QualityReport:
    """Run every rubric check and grade the total."""
    deps = [d.lower() for d in dependencies]
    details: dict[str, bool] = {}
    recommendations: list[str] = []
    score = 0

    for check in QUALITY_CHECKS:
        passed = check.passes(deps, paths)
        details[check.name] = passed
        if passed:
            score += check.points
        elif check.recommendation:
            recommendations.append(check.recommendation)

    score = max(0, min(score, 100))
    return QualityReport(score=score, grade=grade_for(score), details=details, recommendations=recommendations)
