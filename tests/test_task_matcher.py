"""Tests for task-to-code matching."""

import pytest

from repo_insight.core.task_matcher import TASK_CATEGORIES, match_phases, match_task, status_for
from repo_insight.schemas import Phase, SubTask, TaskStatus


def test_twenty_categories():
    assert len(TASK_CATEGORIES) == 20


def test_authentication_task_with_two_files():
    paths = ("server/routes/auth.js", "server/middleware/auth.js")

    match = match_task("Implement user authentication flow", paths, task_id="t1")

    assert match.task_id == "t1"
    assert [e.category for e in match.category_evidence] == ["authentication"]
    assert match.category_evidence[0].files == list(paths)
    assert match.match_score == 40
    assert match.status == TaskStatus.IN_PROGRESS


def test_task_without_keywords_is_not_started():
    match = match_task("Optimize images", ("server/routes/auth.js", "client/src/app.jsx"))

    assert match.category_evidence == []
    assert match.match_score == 0
    assert match.status == TaskStatus.NOT_STARTED


def test_evidence_is_capped_at_five_files_but_score_counts_all():
    paths = tuple(f"src/auth/step{i}.js" for i in range(8))

    match = match_task("Add login page", paths)

    auth = match.category_evidence[0]
    assert auth.category == "authentication"
    assert len(auth.files) == 5
    assert match.match_score == 100
    assert match.status == TaskStatus.LIKELY_DONE


def test_category_with_no_files_contributes_nothing():
    match = match_task("Add Stripe payment checkout", ("server/index.js",))

    assert match.category_evidence == []
    assert match.match_score == 0


def test_multiple_categories_sum_then_clamp():
    paths = (
        "server/routes/auth.js",
        "server/routes/users.js",
        "server/routes/posts.js",
        "server/middleware/auth.js",
    )

    # authentication: 2 files -> 40, api ("route"): 3 files -> 60; sum 100
    match = match_task("Protect API routes with auth middleware", paths)

    assert [e.category for e in match.category_evidence] == ["authentication", "api"]
    assert match.match_score == 100
    assert match.status == TaskStatus.LIKELY_DONE


@pytest.mark.parametrize(
    ("score", "status"),
    [
        (100, TaskStatus.LIKELY_DONE),
        (60, TaskStatus.LIKELY_DONE),
        (59, TaskStatus.IN_PROGRESS),
        (30, TaskStatus.IN_PROGRESS),
        (29, TaskStatus.NOT_STARTED),
        (0, TaskStatus.NOT_STARTED),
    ],
)
def test_status_buckets(score, status):
    assert status_for(score) == status


def test_match_phases_groups_by_phase():
    phases = [
        Phase(id=1, title="Backend", sub_tasks=[
            SubTask(id="a", title="Set up JWT login"),
            SubTask(id="b", title="Write README"),
        ]),
        Phase(id=2, title="Empty", sub_tasks=[]),
    ]
    paths = ("server/auth/jwt.js", "server/auth/login.js", "server/auth/session.js")

    results = match_phases(phases, paths)

    assert [r.phase_id for r in results] == [1, 2]
    backend = results[0]
    assert [t.task_id for t in backend.tasks] == ["a", "b"]
    assert backend.tasks[0].match_score == 60
    assert backend.likely_done == 1
    assert backend.not_started == 1
    assert results[1].tasks == []
