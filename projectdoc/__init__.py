"""projectdoc - canonical project text parsing and rendering."""

from .diff import ChangeSummary, diff_projects
from .document import ProjectDocument
from .engine import canonicalize, is_round_trip_stable, parse, serialize
from .models import (
    NorthStar,
    Person,
    Project,
    SprintConfig,
    Task,
    TaskStatus,
    TimelineEntry,
)

__version__ = "0.1.0"

__all__ = [
    "parse",
    "serialize",
    "canonicalize",
    "is_round_trip_stable",
    "diff_projects",
    "ChangeSummary",
    "ProjectDocument",
    "Project",
    "Person",
    "TimelineEntry",
    "NorthStar",
    "Task",
    "TaskStatus",
    "SprintConfig",
]
