"""Structural flags, feature catalogue and deploy platform detection."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from urllib.parse import urlparse

from repo_insight.core.rules import (
    KeywordRule,
    MatchMode,
    any_path_matches,
    first_match,
    rule_hits_any,
)
from repo_insight.schemas import FeatureCatalogue, StructureFlags, TechStackReport

TEST_KEYWORDS = ("test", "spec", "__tests__")
DOCKER_KEYWORDS = ("dockerfile", "docker-compose")
CI_KEYWORDS = (".github/workflows", ".gitlab-ci", ".circleci", "jenkinsfile", "azure-pipelines")
ERROR_KEYWORDS = ("error", "exception")

FLAG_RULES: tuple[KeywordRule[str], ...] = (
    KeywordRule(("client/", "frontend/"), "has_client", MatchMode.PREFIX),
    KeywordRule(("server/", "backend/", "api/"), "has_server", MatchMode.PREFIX),
    KeywordRule(("src/",), "has_src", MatchMode.PREFIX),
    KeywordRule(TEST_KEYWORDS, "has_tests"),
    KeywordRule(DOCKER_KEYWORDS, "has_docker"),
    KeywordRule(CI_KEYWORDS, "has_cicd"),
    KeywordRule(("readme",), "has_readme"),
    KeywordRule((".env.example", ".env.sample"), "has_env_example"),
    KeywordRule(("license", "licence", "copying"), "has_license", MatchMode.BASENAME),
    KeywordRule(("contributing",), "has_contributing"),
)

FEATURE_RULES: tuple[KeywordRule[str], ...] = (
    KeywordRule(("auth", "login", "signin"), "Authentication system"),
    KeywordRule(("api/", "routes/"), "API routes"),
    KeywordRule(("components/",), "UI components"),
    KeywordRule(("model", "schema"), "Database models"),
    KeywordRule(("middleware",), "Middleware"),
    KeywordRule(("context", "store", "redux"), "State management"),
    KeywordRule(("socket", "websocket", "realtime"), "Real-time updates"),
    KeywordRule(("upload",), "File uploads"),
    KeywordRule(("email", "mailer"), "Email service"),
    KeywordRule(DOCKER_KEYWORDS, "Docker configuration"),
    KeywordRule(CI_KEYWORDS, "CI/CD pipeline"),
    KeywordRule(TEST_KEYWORDS, "Test setup"),
)

# Files that only exist when a project targets a specific host.
DEPLOY_FILE_RULES: tuple[KeywordRule[str], ...] = (
    KeywordRule(("vercel.json",), "Vercel", MatchMode.BASENAME),
    KeywordRule(("netlify.toml",), "Netlify", MatchMode.BASENAME),
    KeywordRule(("render.yaml",), "Render", MatchMode.BASENAME),
    KeywordRule(("fly.toml",), "Fly.io", MatchMode.BASENAME),
    KeywordRule(("railway.json", "railway.toml"), "Railway", MatchMode.BASENAME),
    KeywordRule(("firebase.json",), "Firebase", MatchMode.BASENAME),
    KeywordRule(("amplify.yml",), "AWS Amplify", MatchMode.BASENAME),
    KeywordRule(("app.yaml",), "Google App Engine", MatchMode.BASENAME),
    KeywordRule(("serverless.yml", "serverless.yaml"), "AWS Lambda", MatchMode.BASENAME),
    KeywordRule(("procfile",), "Heroku", MatchMode.BASENAME),
)

DEPLOY_HOST_RULES: tuple[KeywordRule[str], ...] = (
    KeywordRule(("vercel.app",), "Vercel", MatchMode.SUFFIX),
    KeywordRule(("netlify.app",), "Netlify", MatchMode.SUFFIX),
    KeywordRule(("github.io",), "GitHub Pages", MatchMode.SUFFIX),
    KeywordRule(("herokuapp.com",), "Heroku", MatchMode.SUFFIX),
    KeywordRule(("onrender.com",), "Render", MatchMode.SUFFIX),
    KeywordRule(("fly.dev",), "Fly.io", MatchMode.SUFFIX),
    KeywordRule(("web.app", "firebaseapp.com"), "Firebase", MatchMode.SUFFIX),
)

FILE_COUNT_THRESHOLD = 10


@dataclass(frozen=True)
class GapContext:
    """Inputs available to gap rules."""
    flags: StructureFlags
    tech_stack: TechStackReport
    paths: Sequence[str]
    file_count: int


@dataclass(frozen=True)
class GapRule:
    """Emit a missing feature and/or suggestion when ``applies`` holds."""
    applies: Callable[[GapContext], bool]
    suggestion: str
    missing: str | None = None


GAP_RULES: tuple[GapRule, ...] = (
    GapRule(
        lambda c: not c.flags.has_tests and c.file_count > FILE_COUNT_THRESHOLD,
        "Add unit tests for critical functionality",
        "No tests",
    ),
    GapRule(
        lambda c: not c.flags.has_docker and bool(c.tech_stack.backend),
        "Add Dockerfile for containerization",
        "No Docker",
    ),
    GapRule(
        lambda c: not c.flags.has_cicd,
        "Add GitHub Actions for automated testing/deployment",
        "No CI/CD",
    ),
    GapRule(
        lambda c: not c.flags.has_readme,
        "Add README.md with project documentation",
        "No README",
    ),
    GapRule(
        lambda c: not c.flags.has_license,
        "Add a LICENSE file so others know how they may use the code",
        "No license",
    ),
    GapRule(
        lambda c: bool(c.tech_stack.frontend) and not c.tech_stack.testing,
        "Add frontend testing (Vitest, Jest, or Cypress)",
    ),
    GapRule(
        lambda c: not c.flags.has_env_example,
        "Add .env.example for environment documentation",
    ),
    GapRule(
        lambda c: not any_path_matches(c.paths, ERROR_KEYWORDS),
        "Add proper error handling",
    ),
    GapRule(
        lambda c: not c.flags.has_contributing and c.file_count > FILE_COUNT_THRESHOLD,
        "Add CONTRIBUTING.md to document the contribution workflow",
    ),
)


def detect_structure(paths: Sequence[str]) -> StructureFlags:
    """Evaluate every structural flag against the indexed paths."""
    return StructureFlags(**{rule.result: rule_hits_any(rule, paths) for rule in FLAG_RULES})


def detect_features(
    paths: Sequence[str],
    flags: StructureFlags,
    tech_stack: TechStackReport,
    file_count: int,
) -> FeatureCatalogue:
    """Detected features plus what looks missing."""
    detected = [rule.result for rule in FEATURE_RULES if rule_hits_any(rule, paths)]

    context = GapContext(flags=flags, tech_stack=tech_stack, paths=paths, file_count=file_count)
    missing: list[str] = []
    suggestions: list[str] = []
    for rule in GAP_RULES:
        if not rule.applies(context):
            continue
        if rule.missing:
            missing.append(rule.missing)
        suggestions.append(rule.suggestion)

    return FeatureCatalogue(detected=detected, missing=missing, suggestions=suggestions)


def detect_deploy_platform(paths: Sequence[str], homepage: str | None = None) -> str | None:
    """Hosting platform from config files first, then the homepage host."""
    for rule in DEPLOY_FILE_RULES:
        if rule_hits_any(rule, paths):
            return rule.result

    if homepage:
        host = urlparse(homepage if "://" in homepage else f"https://{homepage}").hostname or ""
        return first_match(DEPLOY_HOST_RULES, host.lower())

    return None
