"""Post-extraction repair of task remarks.

A remark written before a sprint or assignee token, e.g.
``Fix login <flaky on CI> {Sprint 2}``, is not trailing when the extractor
looks for it, so it stays glued to the title. This pass moves it into
``remarks`` once the other tokens are gone.
"""

from __future__ import annotations

import dataclasses
import re
from typing import Iterable, List

from .models import Task

_TRAILING_REMARKS = re.compile(r"<([^>]+)>\s*$")


def normalize_task(task: Task) -> Task:
    """Return ``task`` with a trailing ``<...>`` on its title moved into remarks.

    Tasks that already carry remarks are returned unchanged, which makes the
    pass idempotent.
    """
    if task.remarks:
        return task
    match = _TRAILING_REMARKS.search(task.title)
    if not match:
        return task
    return dataclasses.replace(
        task,
        remarks=match.group(1).strip() or None,
        title=task.title[: match.start()].strip(),
    )


def normalize_tasks(tasks: Iterable[Task]) -> List[Task]:
    return [normalize_task(task) for task in tasks]
