"""Rendering of a project model back into canonical text.

Sections always come out in the same order (title, people, timeline, sprint
configuration, tasks) and every field is written in a fixed position, so a
model always renders to the same text. Task tokens are written left to right
as assignee, sprint, remarks, status: the reverse of the order in which the
extractor strips them.
"""

from __future__ import annotations

from typing import List, Optional

from .models import Person, Project, SprintConfig, Task, TaskStatus, TimelineEntry


def format_person(person: Person) -> str:
    if person.responsibilities:
        return f"- {person.name}: {', '.join(person.responsibilities)}"
    return f"- {person.name}"


def format_timeline_entry(entry: TimelineEntry) -> str:
    line = f"- {entry.label}:"
    if entry.start_date and entry.end_date:
        line += f" ({entry.start_date} to {entry.end_date})"
    if entry.percentage is not None:
        line += f" [{entry.percentage}%]"
    if entry.actual_start_date and entry.actual_end_date:
        line += f" {{actual: {entry.actual_start_date} to {entry.actual_end_date}}}"
    if entry.description:
        line += f" {entry.description}"
    return line


def format_sprint_config(config: SprintConfig, current_sprint: Optional[str] = None) -> List[str]:
    lines = [f"- Duration: {config.duration} weeks"]
    if config.start_date:
        lines.append(f"- Start Date: {config.start_date}")
    if config.active_sprint:
        lines.append(f"- Active Sprint: {config.active_sprint}")
    if current_sprint:
        lines.append(f"- Current Sprint: {current_sprint}")
    return lines


def format_task(task: Task) -> str:
    line = f"- {task.title}"
    if task.assignee:
        line += f" ({task.assignee})"
    if task.sprint:
        line += f" {{{task.sprint}}}"
    if task.remarks:
        line += f" <{task.remarks}>"
    status = TaskStatus.normalize(task.status)
    if status is not TaskStatus.TODO:
        line += f" [{status.value}]"
    return line


def serialize(project: Project) -> str:
    """Render ``project`` as canonical text. Empty sections are left out."""
    lines: List[str] = []

    if project.title:
        lines.append(f"# Project: {project.title}")
        lines.append("")

    if project.people:
        lines.append("## People")
        lines.extend(format_person(person) for person in project.people)
        lines.append("")

    if project.timeline:
        lines.append("## Timeline")
        lines.extend(format_timeline_entry(entry) for entry in project.timeline)
        lines.append("")

    # Current sprint is only written inside this block.
    if project.sprint_config is not None:
        lines.append("## Sprint Configuration")
        lines.extend(format_sprint_config(project.sprint_config, project.current_sprint))
        lines.append("")

    if project.tasks:
        lines.append("## Tasks")
        lines.extend(format_task(task) for task in project.tasks)
        lines.append("")

    return "\n".join(lines)
