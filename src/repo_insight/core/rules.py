"""Ordered keyword rule tables and the evaluators shared by every classifier.

Classifiers describe their heuristics as tuples of :class:`KeywordRule` and
never branch on keywords directly. Table order is significant: for
``first_match`` the earliest rule wins.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum
from posixpath import basename
from typing import Generic, TypeVar

T = TypeVar("T")


class MatchMode(str, Enum):
    """How a keyword is tested against a lower-cased string."""
    CONTAINS = "contains"
    PREFIX = "prefix"
    SUFFIX = "suffix"
    BASENAME = "basename"  # file name starts with keyword


@dataclass(frozen=True)
class KeywordRule(Generic[T]):
    """Map a keyword set to a result."""
    keywords: tuple[str, ...]
    result: T
    match: MatchMode = MatchMode.CONTAINS


def keyword_hit(text: str, keywords: Iterable[str], mode: MatchMode = MatchMode.CONTAINS) -> bool:
    """Return True when any keyword matches ``text`` under ``mode``."""
    if mode == MatchMode.BASENAME:
        text = basename(text.rstrip("/"))
        return any(text.startswith(k) for k in keywords)
    if mode == MatchMode.PREFIX:
        return any(text.startswith(k) for k in keywords)
    if mode == MatchMode.SUFFIX:
        return any(text.endswith(k) for k in keywords)
    return any(k in text for k in keywords)


def first_match(rules: Sequence[KeywordRule[T]], text: str) -> T | None:
    """Result of the first rule matching ``text``."""
    for rule in rules:
        if keyword_hit(text, rule.keywords, rule.match):
            return rule.result
    return None


def any_path_matches(
    paths: Iterable[str],
    keywords: Iterable[str],
    mode: MatchMode = MatchMode.CONTAINS,
) -> bool:
    keywords = tuple(keywords)
    return any(keyword_hit(p, keywords, mode) for p in paths)


def rule_hits_any(rule: KeywordRule, items: Iterable[str]) -> bool:
    return any_path_matches(items, rule.keywords, rule.match)


def matching_paths(
    paths: Iterable[str],
    keywords: Iterable[str],
    mode: MatchMode = MatchMode.CONTAINS,
    limit: int | None = None,
) -> list[str]:
    """Paths matching any keyword, in input order, optionally truncated."""
    keywords = tuple(keywords)
    found: list[str] = []
    for path in paths:
        if keyword_hit(path, keywords, mode):
            found.append(path)
            if limit is not None and len(found) >= limit:
                break
    return found


def dedupe(items: Iterable[T]) -> list[T]:
    """Drop repeated items, keeping first-seen order."""
    return list(dict.fromkeys(items))
