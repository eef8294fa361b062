"""Unit tests for project change summaries."""

from projectdoc.diff import NO_CHANGES, ChangeSummary, diff_projects
from projectdoc.engine import parse
from projectdoc.models import NorthStar, Project, SprintConfig, Task, TaskStatus, TimelineEntry


BASE = """\
# Project: Apollo

## People
- Alice: Backend
- Bob: QA

## Timeline
- Sprint 1: (2024-01-01 to 2024-01-14) [20%] Kickoff

## Sprint Configuration
- Duration: 2 weeks
- Active Sprint: Sprint 1

## Tasks
- Login (Alice) {Sprint 1}
- Signup (Bob)
"""


class TestDiffProjects:
    """Test cases for diff_projects."""

    def test_no_changes(self):
        """Test identical projects."""
        summary = diff_projects(parse(BASE), parse(BASE))

        assert summary.changes == [NO_CHANGES]
        assert not summary.has_changes()

    def test_rename(self):
        """Test a project rename."""
        summary = diff_projects(Project(title="Old"), Project(title="New"))

        assert summary.changes == ['Renamed project from "Old" to "New"']
        assert summary.has_changes()

    def test_people_changes(self):
        """Test added, removed and updated people."""
        new = BASE.replace("- Bob: QA", "- Carol: Design").replace("Alice: Backend", "Alice: Backend, Ops")

        changes = diff_projects(parse(BASE), parse(new)).changes

        assert "Added person: Carol" in changes
        assert "Removed person: Bob" in changes
        assert "Updated Alice's responsibilities" in changes

    def test_timeline_changes(self):
        """Test timeline progress, date and description changes."""
        new = BASE.replace(
            "- Sprint 1: (2024-01-01 to 2024-01-14) [20%] Kickoff",
            "- Sprint 1: (2024-01-02 to 2024-01-14) [60%] {actual: 2024-01-02 to 2024-01-15} Kickoff done\n"
            "- Sprint 2: Next",
        )

        changes = diff_projects(parse(BASE), parse(new)).changes

        assert "Added timeline entry: Sprint 2" in changes
        assert "Sprint 1: progress 20% → 60%" in changes
        assert "Sprint 1: updated description" in changes
        assert "Sprint 1: updated planned dates" in changes
        assert "Sprint 1: updated actual dates" in changes

    def test_missing_percentage_reads_as_zero(self):
        """Test that a missing percentage reads as zero."""
        old = Project(timeline=[TimelineEntry(label="S1")])
        new = Project(timeline=[TimelineEntry(label="S1", percentage=10)])

        assert diff_projects(old, new).changes == ["S1: progress 0% → 10%"]

    def test_north_star_changes(self):
        """Test a north star change."""
        old = Project(timeline=[TimelineEntry(label="S1")])
        new = Project(timeline=[TimelineEntry(label="S1", north_stars=[NorthStar("Alice", "Ship")])])

        assert diff_projects(old, new).changes == ["S1: updated north stars"]

    def test_empty_north_stars_equal_absent(self):
        """Test that empty and absent north stars are equal."""
        old = Project(timeline=[TimelineEntry(label="S1")])
        new = Project(timeline=[TimelineEntry(label="S1", north_stars=[])])

        assert diff_projects(old, new).changes == [NO_CHANGES]

    def test_task_counters(self):
        """Test the per-field task change counters."""
        new = BASE.replace("- Login (Alice) {Sprint 1}", "- Login (Bob) {Sprint 2} <check> [done]")

        changes = diff_projects(parse(BASE), parse(new)).changes

        assert changes == [
            "Updated status on 1 task",
            "Reassigned 1 task",
            "Moved 1 task to different sprint",
            "Updated remarks on 1 task",
        ]

    def test_plural_counters(self):
        """Test plural wording of the counters."""
        old = Project(tasks=[Task(title="A"), Task(title="B")])
        new = Project(tasks=[
            Task(title="A", status=TaskStatus.DONE, sprint="S1"),
            Task(title="B", status=TaskStatus.DONE, sprint="S2"),
        ])

        assert diff_projects(old, new).changes == [
            "Updated status on 2 tasks",
            "Moved 2 tasks to different sprints",
        ]

    def test_few_added_tasks_are_listed(self):
        """Test that a few added tasks are listed by title."""
        new = BASE + "- Logout\n- Profile\n"

        changes = diff_projects(parse(BASE), parse(new)).changes

        assert changes == ["Added task: Logout", "Added task: Profile"]

    def test_many_removed_tasks_are_counted(self):
        """Test that many removed tasks are counted."""
        old = Project(tasks=[Task(title=str(i)) for i in range(5)])

        assert diff_projects(old, Project()).changes == ["Removed 5 tasks"]

    def test_sprint_config_changes(self):
        """Test sprint duration and active sprint changes."""
        new = BASE.replace("- Duration: 2 weeks\n- Active Sprint: Sprint 1\n", "- Duration: 3 weeks\n")

        changes = diff_projects(parse(BASE), parse(new)).changes

        assert changes == ["Active sprint changed to: none", "Sprint duration changed to 3 weeks"]

    def test_new_sprint_config(self):
        """Test adding a sprint configuration."""
        new = Project(sprint_config=SprintConfig(active_sprint="S1"))

        assert diff_projects(Project(), new).changes == [
            "Active sprint changed to: S1",
            "Sprint duration changed to 2 weeks",
        ]

    def test_to_dict(self):
        """Test the dictionary form of a summary."""
        assert ChangeSummary(changes=["x"]).to_dict() == {"changes": ["x"]}
