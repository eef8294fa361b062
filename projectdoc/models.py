"""Data models for projectdoc.

This module contains the structured project model that the engine derives
from canonical project text: people, timeline entries, tasks and the sprint
configuration. The dictionary form produced by ``to_dict`` uses the camelCase
keys of the JSON wire format shared with the rest of the tooling.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class TaskStatus(str, Enum):
    """The three task states a project document can express."""

    TODO = "todo"
    IN_PROGRESS = "in-progress"
    DONE = "done"

    @classmethod
    def normalize(cls, raw: Optional[str]) -> "TaskStatus":
        """Map a free-form status token onto one of the three states.

        Unknown tokens (``pending``, ``not started``, ``blah``...) collapse to
        ``todo``.
        """
        if raw is None:
            return cls.TODO
        if isinstance(raw, TaskStatus):
            return raw
        token = str(raw).strip().lower()
        if token in _DONE_TOKENS:
            return cls.DONE
        if token in _IN_PROGRESS_TOKENS:
            return cls.IN_PROGRESS
        return cls.TODO


_DONE_TOKENS = frozenset({"done", "completed", "complete"})
_IN_PROGRESS_TOKENS = frozenset({"in-progress", "in progress", "wip", "active"})


@dataclass(slots=True)
class Person:
    """A project member and their responsibilities, in declaration order."""

    name: str
    responsibilities: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "name": self.name,
            "responsibilities": list(self.responsibilities),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Person":
        """Create from dictionary representation."""
        return cls(
            name=data.get("name", ""),
            responsibilities=list(data.get("responsibilities", []) or []),
        )


@dataclass(slots=True)
class NorthStar:
    """A per-person goal attached to a timeline entry."""

    person: str
    goal: str

    def to_dict(self) -> Dict[str, str]:
        return {"person": self.person, "goal": self.goal}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NorthStar":
        return cls(person=data.get("person", ""), goal=data.get("goal", ""))


@dataclass(slots=True)
class TimelineEntry:
    """A named sprint or phase on the project timeline.

    The label is the key tasks use to reference the entry. Dates are kept as
    ``YYYY-MM-DD`` strings and are never checked for chronology.
    """

    label: str
    description: str = ""
    percentage: Optional[int] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    actual_start_date: Optional[str] = None
    actual_end_date: Optional[str] = None
    north_stars: Optional[List[NorthStar]] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation, omitting absent fields."""
        data: Dict[str, Any] = {
            "label": self.label,
            "description": self.description,
        }
        if self.percentage is not None:
            data["percentage"] = self.percentage
        if self.start_date is not None:
            data["startDate"] = self.start_date
        if self.end_date is not None:
            data["endDate"] = self.end_date
        if self.actual_start_date is not None:
            data["actualStartDate"] = self.actual_start_date
        if self.actual_end_date is not None:
            data["actualEndDate"] = self.actual_end_date
        if self.north_stars is not None:
            data["northStars"] = [star.to_dict() for star in self.north_stars]
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TimelineEntry":
        """Create from dictionary representation."""
        north_stars = data.get("northStars")
        percentage = data.get("percentage")
        return cls(
            label=data.get("label", ""),
            description=data.get("description", "") or "",
            percentage=int(percentage) if percentage is not None else None,
            start_date=data.get("startDate"),
            end_date=data.get("endDate"),
            actual_start_date=data.get("actualStartDate"),
            actual_end_date=data.get("actualEndDate"),
            north_stars=(
                [NorthStar.from_dict(star) for star in north_stars]
                if north_stars is not None
                else None
            ),
        )


@dataclass(slots=True)
class Task:
    """A single task line.

    ``assignee`` may hold a comma-joined list of names; the engine treats it
    as one opaque string. ``dependencies`` is reserved and always empty when
    parsed from text.
    """

    title: str
    assignee: Optional[str] = None
    status: TaskStatus = TaskStatus.TODO
    dependencies: List[str] = field(default_factory=list)
    sprint: Optional[str] = None
    remarks: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        data: Dict[str, Any] = {
            "title": self.title,
            "assignee": self.assignee,
            "status": self.status.value,
            "dependencies": list(self.dependencies),
        }
        if self.sprint is not None:
            data["sprint"] = self.sprint
        if self.remarks is not None:
            data["remarks"] = self.remarks
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Task":
        """Create from dictionary representation."""
        return cls(
            title=data.get("title", ""),
            assignee=data.get("assignee"),
            status=TaskStatus.normalize(data.get("status")),
            dependencies=list(data.get("dependencies", []) or []),
            sprint=data.get("sprint"),
            remarks=data.get("remarks"),
        )


@dataclass(slots=True)
class SprintConfig:
    """Sprint cadence settings; duration is in weeks."""

    duration: int = 2
    start_date: Optional[str] = None
    active_sprint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"duration": self.duration}
        if self.start_date is not None:
            data["startDate"] = self.start_date
        if self.active_sprint is not None:
            data["activeSprint"] = self.active_sprint
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SprintConfig":
        duration = data.get("duration")
        return cls(
            duration=int(duration) if duration is not None else 2,
            start_date=data.get("startDate"),
            active_sprint=data.get("activeSprint"),
        )


@dataclass(slots=True)
class Project:
    """The structured form of one canonical project document.

    ``Project()`` is the empty project that ``parse("")`` returns.
    """

    title: str = ""
    people: List[Person] = field(default_factory=list)
    timeline: List[TimelineEntry] = field(default_factory=list)
    tasks: List[Task] = field(default_factory=list)
    sprint_config: Optional[SprintConfig] = None
    current_sprint: Optional[str] = None
    info: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the JSON wire representation."""
        data: Dict[str, Any] = {
            "title": self.title,
            "people": [person.to_dict() for person in self.people],
            "timeline": [entry.to_dict() for entry in self.timeline],
            "tasks": [task.to_dict() for task in self.tasks],
        }
        if self.sprint_config is not None:
            data["sprintConfig"] = self.sprint_config.to_dict()
        if self.current_sprint is not None:
            data["currentSprint"] = self.current_sprint
        if self.info is not None:
            data["info"] = self.info
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Project":
        """Create from the JSON wire representation."""
        sprint_config = data.get("sprintConfig")
        return cls(
            title=data.get("title", "") or "",
            people=[Person.from_dict(p) for p in data.get("people", []) or []],
            timeline=[TimelineEntry.from_dict(t) for t in data.get("timeline", []) or []],
            tasks=[Task.from_dict(t) for t in data.get("tasks", []) or []],
            sprint_config=SprintConfig.from_dict(sprint_config) if sprint_config is not None else None,
            current_sprint=data.get("currentSprint"),
            info=data.get("info"),
        )
