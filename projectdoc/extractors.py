"""Field extraction for the entities of a project document.

Every function here consumes the content of a single list item (the text
after the ``-``/``*`` marker) and is free of side effects. Task lines are
taken apart by a pipeline of "strip a trailing token" steps that run right
to left; each step returns ``(value, remaining)`` and leaves the text
untouched when its token is missing.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Optional, Pattern, Tuple

from .models import Person, Project, SprintConfig, Task, TaskStatus, TimelineEntry

StripResult = Tuple[Optional[str], str]

_DATE = r"\d{4}-\d{2}-\d{2}"
# Longer digit runs are not numbers here; they stay in the surrounding text.
_INT = r"\d{1,9}"

_PERCENT_PATTERN = re.compile(r"\[(" + _INT + r")%\]")
_ACTUAL_RANGE_PATTERN = re.compile(r"\{actual:\s*(" + _DATE + r")\s+to\s+(" + _DATE + r")\}")
_PLANNED_RANGE_PATTERN = re.compile(r"\((" + _DATE + r")\s+to\s+(" + _DATE + r")\)")

_STATUS_PATTERN = re.compile(r"\[([^\]]+)\]\s*$")
_REMARKS_PATTERN = re.compile(r"<([^>]+)>\s*$")
_SPRINT_PATTERN = re.compile(r"\{([^}]+)\}\s*$")
_ASSIGNEE_PATTERN = re.compile(r"\(([^)]+)\)\s*$")

_DURATION_PATTERN = re.compile(r"Duration:\s*(" + _INT + r")\s*weeks?", re.IGNORECASE)
_START_DATE_PATTERN = re.compile(r"Start\s+Date:\s*(" + _DATE + r")", re.IGNORECASE)
_ACTIVE_SPRINT_PATTERN = re.compile(r"Active\s+Sprint:\s*(.+)$", re.IGNORECASE)
_CURRENT_SPRINT_PATTERN = re.compile(r"Current\s+Sprint:\s*(.+)$", re.IGNORECASE)


# ----------------------------------------------------------------------
# People
# ----------------------------------------------------------------------

def extract_person(content: str) -> Person:
    """``Name: resp1, resp2`` -> Person. A line without a colon is a bare name."""
    name, sep, rest = content.partition(":")
    if not sep:
        return Person(name=content.strip(), responsibilities=[])
    responsibilities = [piece.strip() for piece in rest.split(",") if piece.strip()]
    return Person(name=name.strip(), responsibilities=responsibilities)


# ----------------------------------------------------------------------
# Timeline
# ----------------------------------------------------------------------

def _remove_first(text: str, token: str) -> str:
    return text.replace(token, "", 1).strip()


def extract_timeline_entry(content: str) -> TimelineEntry:
    """Split a timeline line into its label and annotated description.

    Annotations are removed from the description in a fixed order:
    percentage, actual date range, planned date range.
    """
    label, sep, rest = content.partition(":")
    if not sep:
        return TimelineEntry(label=content.strip(), description="")

    entry = TimelineEntry(label=label.strip())
    description = rest.strip()

    percent_match = _PERCENT_PATTERN.search(description)
    if percent_match:
        entry.percentage = int(percent_match.group(1))
        description = _remove_first(description, percent_match.group(0))

    actual_match = _ACTUAL_RANGE_PATTERN.search(description)
    if actual_match:
        entry.actual_start_date = actual_match.group(1)
        entry.actual_end_date = actual_match.group(2)
        description = _remove_first(description, actual_match.group(0))

    planned_match = _PLANNED_RANGE_PATTERN.search(description)
    if planned_match:
        entry.start_date = planned_match.group(1)
        entry.end_date = planned_match.group(2)
        description = _remove_first(description, planned_match.group(0))

    entry.description = description
    return entry


# ----------------------------------------------------------------------
# Tasks
# ----------------------------------------------------------------------

def _strip_trailing(pattern: Pattern[str], text: str) -> StripResult:
    match = pattern.search(text)
    if not match:
        return None, text
    value = match.group(1).strip()
    return (value or None), text[: match.start()].strip()


def strip_status(text: str) -> Tuple[TaskStatus, str]:
    """Remove a trailing ``[status]`` token and normalize it."""
    raw, remaining = _strip_trailing(_STATUS_PATTERN, text)
    return TaskStatus.normalize(raw), remaining


def strip_remarks(text: str) -> StripResult:
    """Remove a trailing ``<remarks>`` token."""
    return _strip_trailing(_REMARKS_PATTERN, text)


def strip_sprint(text: str) -> StripResult:
    """Remove a trailing ``{sprint}`` token."""
    return _strip_trailing(_SPRINT_PATTERN, text)


def strip_assignee(text: str) -> StripResult:
    """Remove a trailing ``(assignee)`` token."""
    return _strip_trailing(_ASSIGNEE_PATTERN, text)


# Order matters: each step only sees what the previous one left behind.
TASK_PIPELINE: Tuple[Tuple[str, Callable[[str], StripResult]], ...] = (
    ("remarks", strip_remarks),
    ("sprint", strip_sprint),
    ("assignee", strip_assignee),
)


def extract_task(content: str) -> Task:
    """Take a task line apart from the right: status, remarks, sprint, assignee."""
    status, remaining = strip_status(content)
    values = {}
    for name, step in TASK_PIPELINE:
        values[name], remaining = step(remaining)
    return Task(
        title=remaining.strip(),
        assignee=values["assignee"],
        status=status,
        dependencies=[],
        sprint=values["sprint"],
        remarks=values["remarks"],
    )


# ----------------------------------------------------------------------
# Sprint configuration
# ----------------------------------------------------------------------

@dataclass(slots=True)
class SprintFragment:
    """Whatever one ``Sprint Configuration`` line managed to set."""

    duration: Optional[int] = None
    start_date: Optional[str] = None
    active_sprint: Optional[str] = None
    current_sprint: Optional[str] = None

    def is_empty(self) -> bool:
        return (
            self.duration is None
            and self.start_date is None
            and self.active_sprint is None
            and self.current_sprint is None
        )

    def apply(self, project: Project) -> None:
        """Merge into ``project``; current sprint lives on the project itself."""
        if project.sprint_config is None:
            project.sprint_config = SprintConfig()
        config = project.sprint_config
        if self.duration is not None:
            config.duration = self.duration
        if self.start_date is not None:
            config.start_date = self.start_date
        if self.active_sprint is not None:
            config.active_sprint = self.active_sprint
        if self.current_sprint is not None:
            project.current_sprint = self.current_sprint


def extract_sprint_fragment(content: str) -> SprintFragment:
    """Match each sprint setting independently; unmatched lines give an empty fragment."""
    fragment = SprintFragment()

    duration_match = _DURATION_PATTERN.search(content)
    if duration_match:
        fragment.duration = int(duration_match.group(1))

    start_match = _START_DATE_PATTERN.search(content)
    if start_match:
        fragment.start_date = start_match.group(1)

    active_match = _ACTIVE_SPRINT_PATTERN.search(content)
    if active_match:
        fragment.active_sprint = active_match.group(1).strip()

    current_match = _CURRENT_SPRINT_PATTERN.search(content)
    if current_match:
        fragment.current_sprint = current_match.group(1).strip()

    return fragment
