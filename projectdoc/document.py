"""Editable project document session.

A ``ProjectDocument`` keeps the canonical text as the source of truth and
re-derives the structured project from it after every change. Edits made
against the structured project are rendered back to text first, so the text
and the model never drift apart. A short undo history and a saved snapshot
support undo and unsaved-change detection.
"""

from __future__ import annotations

import copy
import logging
from typing import Callable, List, Optional, Tuple

from .diff import ChangeSummary, diff_projects
from .doc_logging import log_performance, observability_hooks
from .engine import parse, serialize
from .models import Project, SprintConfig

logger = logging.getLogger("projectdoc.document")

UNDO_LIMIT = 10

Snapshot = Tuple[str, Project]


class ProjectDocument:
    """One project's canonical text plus its parsed form."""

    def __init__(self, text: str = "", *, undo_limit: int = UNDO_LIMIT):
        self.undo_limit = undo_limit
        self._text = text or ""
        self._project = parse(self._text)
        self._history: List[Snapshot] = []
        self._saved: Snapshot = (self._text, copy.deepcopy(self._project))

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def text(self) -> str:
        return self._text

    @property
    def project(self) -> Project:
        """A copy of the current project; mutate it through ``edit``."""
        return copy.deepcopy(self._project)

    @property
    def can_undo(self) -> bool:
        return bool(self._history)

    @property
    def has_unsaved_changes(self) -> bool:
        return self._text != self._saved[0]

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    @log_performance("set_text")
    def set_text(self, text: str) -> Project:
        """Replace the canonical text and reparse it.

        The previous state goes onto the undo history unless the document was
        empty; only the most recent ``undo_limit`` states are kept.
        """
        if self._text:
            self._history.append((self._text, self._project))
            del self._history[: -self.undo_limit]
        self._text = text or ""
        self._project = parse(self._text)
        observability_hooks.log_document_event(
            "document_edited",
            title=self._project.title,
            tasks=len(self._project.tasks),
        )
        return self.project

    def edit(self, mutator: Callable[[Project], None]) -> str:
        """Apply ``mutator`` to a copy of the project and store the rendered text."""
        draft = copy.deepcopy(self._project)
        mutator(draft)
        text = serialize(draft)
        self.set_text(text)
        return text

    def set_current_sprint(self, sprint: Optional[str]) -> str:
        """Set or clear the sprint the project is currently looking at.

        The current sprint is stored in the sprint configuration block, which
        is created with default settings when missing.
        """

        def _apply(project: Project) -> None:
            project.current_sprint = sprint or None
            if project.current_sprint and project.sprint_config is None:
                project.sprint_config = SprintConfig()

        return self.edit(_apply)

    def undo(self) -> bool:
        """Restore the previous state. Returns False when there is nothing to undo."""
        if not self._history:
            logger.debug("Nothing to undo")
            return False
        self._text, self._project = self._history.pop()
        observability_hooks.log_document_event(
            "document_undo",
            title=self._project.title,
            remaining=len(self._history),
        )
        return True

    # ------------------------------------------------------------------
    # Saving
    # ------------------------------------------------------------------

    def mark_saved(self) -> None:
        """Record the current state as the last saved one."""
        self._saved = (self._text, copy.deepcopy(self._project))
        observability_hooks.log_document_event("document_saved", title=self._project.title)

    def changes_since_save(self) -> ChangeSummary:
        return diff_projects(self._saved[1], self._project)
