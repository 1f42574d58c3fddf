"""Estimate whether declared project tasks already have code in the repository.

Each category keyword list is matched twice: against the task title to decide
whether the category applies, and against repository paths to collect
evidence. This is a best-effort heuristic; false positives are expected.
"""

from __future__ import annotations

from collections.abc import Sequence

from repo_insight.core.rules import KeywordRule, keyword_hit, matching_paths
from repo_insight.schemas import (
    CategoryEvidence,
    Phase,
    PhaseMatch,
    TaskMatch,
    TaskStatus,
)

TASK_CATEGORIES: tuple[KeywordRule[str], ...] = (
    KeywordRule(("auth", "login", "signup", "sign up", "register", "jwt", "oauth", "passport", "session", "password"), "authentication"),
    KeywordRule(("database", "schema", "model", "mongo", "postgres", "sql", "prisma", "migration"), "database"),
    KeywordRule(("api", "endpoint", "route", "graphql", "controller"), "api"),
    KeywordRule(("frontend", "component", "page", "layout", "navbar", "hero", "footer", "react"), "frontend"),
    KeywordRule(("style", "css", "tailwind", "theme", "dark mode", "responsive"), "styling"),
    KeywordRule(("test", "jest", "vitest", "cypress", "playwright", "e2e"), "testing"),
    KeywordRule(("deploy", "docker", "ci/cd", "pipeline", "hosting", "vercel", "netlify", "heroku", "kubernetes", "github actions"), "deployment"),
    KeywordRule(("readme", "docs", "documentation", "guide"), "documentation"),
    KeywordRule(("security", "helmet", "cors", "csrf", "xss", "sanitiz", "encrypt"), "security"),
    KeywordRule(("error", "exception", "fallback"), "error-handling"),
    KeywordRule(("state", "redux", "zustand", "context", "store"), "state-management"),
    KeywordRule(("socket", "realtime", "real-time", "pusher"), "real-time"),
    KeywordRule(("upload", "multer", "cloudinary", "s3", "attachment"), "file-upload"),
    KeywordRule(("mail", "smtp", "sendgrid"), "email"),
    KeywordRule(("payment", "stripe", "checkout", "billing", "subscription", "paypal"), "payment"),
    KeywordRule(("search", "filter", "elasticsearch", "algolia"), "search"),
    KeywordRule(("notif", "toast", "alert"), "notification"),
    KeywordRule(("cache", "redis", "memoiz"), "caching"),
    KeywordRule(("logging", "logger", "winston", "pino", "morgan"), "logging"),
    KeywordRule(("valid", "zod", "joi", "yup"), "validation"),
)

MAX_EVIDENCE_FILES = 5
POINTS_PER_FILE = 20
CATEGORY_CAP = 100
LIKELY_DONE_SCORE = 60
IN_PROGRESS_SCORE = 30


def status_for(score: int) -> TaskStatus:
    if score >= LIKELY_DONE_SCORE:
        return TaskStatus.LIKELY_DONE
    if score >= IN_PROGRESS_SCORE:
        return TaskStatus.IN_PROGRESS
    return TaskStatus.NOT_STARTED


def match_task(title: str, paths: Sequence[str], task_id: str | int | None = None) -> TaskMatch:
    """Score one task title against the indexed repository paths."""
    evidence: list[CategoryEvidence] = []
    total = 0

    lowered = title.lower()
    for rule in TASK_CATEGORIES:
        if not keyword_hit(lowered, rule.keywords, rule.match):
            continue
        hits = matching_paths(paths, rule.keywords, rule.match)
        if not hits:
            continue
        evidence.append(CategoryEvidence(category=rule.result, files=hits[:MAX_EVIDENCE_FILES]))
        total += min(len(hits) * POINTS_PER_FILE, CATEGORY_CAP)

    # Several capped categories can still add up past 100; clamp the sum as well.
    score = max(0, min(total, 100))
    return TaskMatch(
        task_id=task_id,
        title=title,
        category_evidence=evidence,
        match_score=score,
        status=status_for(score),
    )


def match_phases(phases: Sequence[Phase], paths: Sequence[str]) -> list[PhaseMatch]:
    """Match every task, grouped by phase in input order."""
    results: list[PhaseMatch] = []
    for phase in phases:
        tasks = [match_task(task.title, paths, task_id=task.id) for task in phase.sub_tasks]
        results.append(PhaseMatch(
            phase_id=phase.id,
            title=phase.title,
            tasks=tasks,
            likely_done=sum(t.status == TaskStatus.LIKELY_DONE for t in tasks),
            in_progress=sum(t.status == TaskStatus.IN_PROGRESS for t in tasks),
            not_started=sum(t.status == TaskStatus.NOT_STARTED for t in tasks),
        ))
    return results
