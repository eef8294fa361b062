"""Public entry points: text to project and back.

``parse`` and ``serialize`` are the only operations storage, diffing and AI
regeneration need. Both are pure: every call builds a fresh result from its
argument alone, so they can be called from any number of threads.
"""

from __future__ import annotations

import logging
from typing import Any

from .extractors import (
    extract_person,
    extract_sprint_fragment,
    extract_task,
    extract_timeline_entry,
)
from .models import Project, SprintConfig
from .normalizer import normalize_tasks
from .scanner import ItemEvent, Section, SectionEvent, TitleEvent, scan
from .serializer import serialize

logger = logging.getLogger("projectdoc.engine")

__all__ = ["parse", "serialize", "canonicalize", "is_round_trip_stable"]


def parse(text: Any) -> Project:
    """Build a Project from canonical text.

    Extraction is best effort and never fails: unknown sections are skipped,
    missing annotations leave their fields unset, and anything that is not a
    string is read as the empty document.
    """
    project = Project()
    if not isinstance(text, str) or not text:
        return project

    for event in scan(text):
        if isinstance(event, TitleEvent):
            # Last title wins.
            project.title = event.title
        elif isinstance(event, SectionEvent):
            if event.section is Section.SPRINT and project.sprint_config is None:
                project.sprint_config = SprintConfig()
        elif isinstance(event, ItemEvent):
            _apply_item(project, event)

    project.tasks = normalize_tasks(project.tasks)
    logger.debug(
        "Parsed project %r: %d people, %d timeline entries, %d tasks",
        project.title,
        len(project.people),
        len(project.timeline),
        len(project.tasks),
    )
    return project


def _apply_item(project: Project, event: ItemEvent) -> None:
    if event.section is Section.PEOPLE:
        project.people.append(extract_person(event.content))
    elif event.section is Section.TIMELINE:
        project.timeline.append(extract_timeline_entry(event.content))
    elif event.section is Section.TASKS:
        project.tasks.append(extract_task(event.content))
    elif event.section is Section.SPRINT:
        fragment = extract_sprint_fragment(event.content)
        if fragment.is_empty():
            logger.debug("Ignoring sprint configuration line: %r", event.content)
        fragment.apply(project)


def canonicalize(text: Any) -> str:
    """Re-render ``text`` in canonical form."""
    return serialize(parse(text))


def is_round_trip_stable(text: Any) -> bool:
    """True when rendering and re-reading ``text`` keeps the same project."""
    parsed = parse(text)
    return parse(serialize(parsed)) == parsed
