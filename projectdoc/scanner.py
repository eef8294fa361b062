"""Line and section scanning for project documents.

The scanner walks a document line by line and reports what it sees as a
stream of events. The current section is a local variable of the walk, so
scanning is reentrant and safe to run from several threads at once.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional, Union


class Section(Enum):
    """Which part of the document list items currently belong to."""

    NONE = "none"
    PEOPLE = "people"
    TIMELINE = "timeline"
    TASKS = "tasks"
    SPRINT = "sprint"


@dataclass(frozen=True, slots=True)
class TitleEvent:
    title: str


@dataclass(frozen=True, slots=True)
class SectionEvent:
    section: Section


@dataclass(frozen=True, slots=True)
class ItemEvent:
    section: Section
    content: str


ScanEvent = Union[TitleEvent, SectionEvent, ItemEvent]


_TITLE_PATTERN = re.compile(r"^#\s+Project:\s*(.+)$", re.IGNORECASE)
_SECTION_PATTERNS = (
    (re.compile(r"^##\s+People", re.IGNORECASE), Section.PEOPLE),
    (re.compile(r"^##\s+Timeline", re.IGNORECASE), Section.TIMELINE),
    (re.compile(r"^##\s+Tasks", re.IGNORECASE), Section.TASKS),
    (re.compile(r"^##\s+Sprint\s+Configuration", re.IGNORECASE), Section.SPRINT),
)
_ANY_SECTION_PATTERN = re.compile(r"^##\s+")
_LIST_ITEM_PATTERN = re.compile(r"^[-*]\s+(.+)$")


def match_section_header(line: str) -> Optional[Section]:
    """Return the section a trimmed header line opens, or None if it is not one.

    Unknown level-2 headers map to ``Section.NONE``.
    """
    for pattern, section in _SECTION_PATTERNS:
        if pattern.match(line):
            return section
    if _ANY_SECTION_PATTERN.match(line):
        return Section.NONE
    return None


def scan(text: str) -> Iterator[ScanEvent]:
    """Yield title, section and list-item events for ``text``.

    Title and header lines are recognized before list items. List items found
    outside a recognized section are dropped, as are blank lines and any
    other ``#`` line.
    """
    current = Section.NONE
    for line in text.split("\n"):
        trimmed = line.strip()

        title_match = _TITLE_PATTERN.match(trimmed)
        if title_match:
            yield TitleEvent(title_match.group(1).strip())
            continue

        section = match_section_header(trimmed)
        if section is not None:
            current = section
            yield SectionEvent(section)
            continue

        if not trimmed or trimmed.startswith("#"):
            continue

        item_match = _LIST_ITEM_PATTERN.match(trimmed)
        if not item_match or current is Section.NONE:
            continue
        yield ItemEvent(current, item_match.group(1))
