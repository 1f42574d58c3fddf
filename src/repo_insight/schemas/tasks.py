"""Schemas for project phases and task-to-code matches."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class TaskStatus(str, Enum):
    """Estimated completion state of a task."""
    LIKELY_DONE = "likely-done"
    IN_PROGRESS = "in-progress"
    NOT_STARTED = "not-started"


class SubTask(BaseModel):
    """A single task inside a phase."""
    id: str | int | None = None
    title: str
    is_complete: bool = False


class Phase(BaseModel):
    """A project phase and its tasks."""
    id: str | int
    title: str
    sub_tasks: list[SubTask] = Field(default_factory=list)


class CategoryEvidence(BaseModel):
    """Repository files supporting one task category."""
    category: str
    files: list[str] = Field(default_factory=list, max_length=5)


class TaskMatch(BaseModel):
    """Heuristic estimate of whether a task already has code."""
    task_id: str | int | None = None
    title: str = ""
    category_evidence: list[CategoryEvidence] = Field(default_factory=list)
    match_score: int = Field(default=0, ge=0, le=100)
    status: TaskStatus = TaskStatus.NOT_STARTED


class PhaseMatch(BaseModel):
    """Task matches for one phase."""
    phase_id: str | int
    title: str
    tasks: list[TaskMatch] = Field(default_factory=list)
    likely_done: int = 0
    in_progress: int = 0
    not_started: int = 0


class TaskComparison(BaseModel):
    """Task matches for a repository.

    ``warnings`` names the sections that fell back to defaults; with
    ``"tree"`` present every task is unmatched for lack of input, not
    because nothing was built.
    """
    repository: str
    phases: list[PhaseMatch] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
