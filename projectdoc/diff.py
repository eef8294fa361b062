"""Human-readable change summaries between two versions of a project."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .models import NorthStar, Project

NO_CHANGES = "No significant changes detected"

# Added/removed tasks are listed one by one up to this many, then counted.
_LIST_TASKS_UP_TO = 3


@dataclass(slots=True)
class ChangeSummary:
    """Ordered list of change descriptions."""

    changes: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"changes": list(self.changes)}

    def has_changes(self) -> bool:
        return self.changes != [NO_CHANGES]


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'s' if count > 1 else ''}"


def _stars(stars: Optional[List[NorthStar]]) -> List[NorthStar]:
    return list(stars or [])


def _diff_people(old: Project, new: Project, changes: List[str]) -> None:
    old_people = {p.name: p for p in old.people}
    new_people = {p.name: p for p in new.people}
    for name in new_people:
        if name not in old_people:
            changes.append(f"Added person: {name}")
    for name in old_people:
        if name not in new_people:
            changes.append(f"Removed person: {name}")
    for person in new.people:
        previous = old_people.get(person.name)
        if previous is not None and previous.responsibilities != person.responsibilities:
            changes.append(f"Updated {person.name}'s responsibilities")


def _diff_timeline(old: Project, new: Project, changes: List[str]) -> None:
    old_entries = {e.label: e for e in old.timeline}
    new_entries = {e.label: e for e in new.timeline}
    for label in new_entries:
        if label not in old_entries:
            changes.append(f"Added timeline entry: {label}")
    for label in old_entries:
        if label not in new_entries:
            changes.append(f"Removed timeline entry: {label}")
    for label, entry in new_entries.items():
        previous = old_entries.get(label)
        if previous is None:
            continue
        if previous.percentage != entry.percentage:
            changes.append(
                f"{label}: progress {previous.percentage or 0}% → {entry.percentage or 0}%"
            )
        if previous.description != entry.description:
            changes.append(f"{label}: updated description")
        if (previous.start_date, previous.end_date) != (entry.start_date, entry.end_date):
            changes.append(f"{label}: updated planned dates")
        if (previous.actual_start_date, previous.actual_end_date) != (
            entry.actual_start_date,
            entry.actual_end_date,
        ):
            changes.append(f"{label}: updated actual dates")
        if _stars(previous.north_stars) != _stars(entry.north_stars):
            changes.append(f"{label}: updated north stars")


def _diff_tasks(old: Project, new: Project, changes: List[str]) -> None:
    old_by_title = {t.title: t for t in old.tasks}
    new_by_title = {t.title: t for t in new.tasks}

    added = [t for t in new.tasks if t.title not in old_by_title]
    removed = [t for t in old.tasks if t.title not in new_by_title]
    for verb, tasks in (("Added", added), ("Removed", removed)):
        if not tasks:
            continue
        if len(tasks) <= _LIST_TASKS_UP_TO:
            changes.extend(f"{verb} task: {t.title}" for t in tasks)
        else:
            changes.append(f"{verb} {len(tasks)} tasks")

    status = assignee = sprint = remarks = 0
    for task in new.tasks:
        previous = old_by_title.get(task.title)
        if previous is None:
            continue
        status += previous.status != task.status
        assignee += previous.assignee != task.assignee
        sprint += previous.sprint != task.sprint
        remarks += previous.remarks != task.remarks

    if status:
        changes.append(f"Updated status on {_plural(status, 'task')}")
    if assignee:
        changes.append(f"Reassigned {_plural(assignee, 'task')}")
    if sprint:
        target = "different sprints" if sprint > 1 else "different sprint"
        changes.append(f"Moved {_plural(sprint, 'task')} to {target}")
    if remarks:
        changes.append(f"Updated remarks on {_plural(remarks, 'task')}")


def diff_projects(old: Project, new: Project) -> ChangeSummary:
    """Describe what changed from ``old`` to ``new``.

    People are matched by name, timeline entries by label and tasks by title.
    """
    changes: List[str] = []

    if old.title != new.title:
        changes.append(f'Renamed project from "{old.title}" to "{new.title}"')

    _diff_people(old, new, changes)
    _diff_timeline(old, new, changes)
    _diff_tasks(old, new, changes)

    old_config, new_config = old.sprint_config, new.sprint_config
    old_active = old_config.active_sprint if old_config else None
    new_active = new_config.active_sprint if new_config else None
    if old_active != new_active:
        changes.append(f"Active sprint changed to: {new_active or 'none'}")
    old_duration = old_config.duration if old_config else None
    new_duration = new_config.duration if new_config else None
    if old_duration != new_duration:
        changes.append(f"Sprint duration changed to {new_duration} weeks")

    return ChangeSummary(changes=changes or [NO_CHANGES])
