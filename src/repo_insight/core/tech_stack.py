"""Dependency to tech-stack category classification."""

from __future__ import annotations

from collections.abc import Iterable

from repo_insight.core.rules import KeywordRule, first_match
from repo_insight.schemas import TechStackReport

# Checked top to bottom; a dependency lands in the first category it matches.
CATEGORY_RULES: tuple[KeywordRule[str], ...] = (
    KeywordRule(
        ("react", "vue", "angular", "svelte", "next", "nuxt", "gatsby",
         "solid", "remix", "astro", "preact", "expo"),
        "frontend",
    ),
    KeywordRule(
        ("express", "fastify", "koa", "hapi", "nestjs", "hono",
         "django", "flask", "fastapi", "starlette", "aiohttp", "tornado", "sanic"),
        "backend",
    ),
    KeywordRule(
        ("mongoose", "mongodb", "pg", "mysql", "sequelize", "prisma", "typeorm",
         "drizzle", "redis", "sqlalchemy", "psycopg", "sqlite", "supabase", "firebase"),
        "database",
    ),
    KeywordRule(
        ("tailwind", "styled-components", "sass", "less", "emotion", "chakra",
         "@mui", "bootstrap", "postcss"),
        "styling",
    ),
    KeywordRule(
        ("jest", "mocha", "chai", "cypress", "playwright", "vitest",
         "testing-library", "pytest", "supertest"),
        "testing",
    ),
    KeywordRule(
        ("docker", "kubernetes", "serverless", "pm2", "nodemon", "husky",
         "lint-staged", "concurrently", "terraform", "aws-cdk", "wrangler", "vercel", "netlify"),
        "devops",
    ),
    KeywordRule(
        ("graphql", "apollo", "socket.io", "trpc", "axios", "stripe"),
        "other",
    ),
)


def classify_dependency(name: str) -> str | None:
    """Category for a single dependency name, or None."""
    return first_match(CATEGORY_RULES, name.lower())


def classify_tech_stack(dependencies: Iterable[str]) -> TechStackReport:
    """Group dependency names by category, first-seen order, no repeats."""
    buckets: dict[str, list[str]] = {rule.result: [] for rule in CATEGORY_RULES}
    for dep in dependencies:
        category = classify_dependency(dep)
        if category and dep not in buckets[category]:
            buckets[category].append(dep)
    return TechStackReport(**buckets)
