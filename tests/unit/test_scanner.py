"""Unit tests for the line/section scanner."""

import textwrap

from projectdoc.scanner import (
    ItemEvent,
    Section,
    SectionEvent,
    TitleEvent,
    match_section_header,
    scan,
)


def _items(text):
    return [(e.section, e.content) for e in scan(text) if isinstance(e, ItemEvent)]


class TestSectionHeaders:
    """Test cases for header recognition."""

    def test_known_headers(self):
        """Test the four recognized section headers."""
        assert match_section_header("## People") is Section.PEOPLE
        assert match_section_header("## Timeline") is Section.TIMELINE
        assert match_section_header("## Tasks") is Section.TASKS
        assert match_section_header("## Sprint Configuration") is Section.SPRINT

    def test_headers_are_case_and_whitespace_tolerant(self):
        """Test headers with odd case and spacing."""
        assert match_section_header("##   people") is Section.PEOPLE
        assert match_section_header("## SPRINT   configuration") is Section.SPRINT

    def test_unknown_level_two_header_resets(self):
        """Test that an unknown level-two header maps to no section."""
        assert match_section_header("## Risks") is Section.NONE

    def test_other_lines_are_not_headers(self):
        """Test lines that are not section headers."""
        assert match_section_header("### People") is None
        assert match_section_header("# Project: X") is None
        assert match_section_header("- item") is None


class TestScan:
    """Test cases for the scan event stream."""

    def test_empty_text_yields_nothing(self):
        """Test scanning empty text."""
        assert list(scan("")) == []

    def test_title_event(self):
        """Test the project title event."""
        events = list(scan("# Project: Apollo  "))

        assert events == [TitleEvent("Apollo")]

    def test_title_keyword_is_case_insensitive(self):
        """Test a lowercase title keyword."""
        assert list(scan("# project: Apollo")) == [TitleEvent("Apollo")]

    def test_items_follow_current_section(self):
        """Test that items are tagged with the current section."""
        text = textwrap.dedent(
            """\
            # Project: Apollo

            ## People
            - Alice: Backend
            * Bob

            ## Tasks
            - Ship it [done]
            """
        )

        assert _items(text) == [
            (Section.PEOPLE, "Alice: Backend"),
            (Section.PEOPLE, "Bob"),
            (Section.TASKS, "Ship it [done]"),
        ]

    def test_items_before_any_section_are_dropped(self):
        """Test that items before any header are dropped."""
        assert _items("- orphan\n## People\n- Alice") == [(Section.PEOPLE, "Alice")]

    def test_unknown_section_drops_items_until_next_known_header(self):
        """Test items under an unknown section."""
        text = "## People\n- Alice\n## Risks\n- Budget\n## Tasks\n- Ship"

        assert _items(text) == [(Section.PEOPLE, "Alice"), (Section.TASKS, "Ship")]

    def test_unknown_section_emits_reset_event(self):
        """Test the event for an unknown section header."""
        events = list(scan("## Risks"))

        assert events == [SectionEvent(Section.NONE)]

    def test_comments_and_plain_text_are_ignored(self):
        """Test that comments and plain text produce no items."""
        text = "## Tasks\n# a comment\n### sub heading\nplain text\n-no-space\n- Real task"

        assert _items(text) == [(Section.TASKS, "Real task")]

    def test_indented_items_are_trimmed(self):
        """Test indented list items."""
        assert _items("## Tasks\n    -   Indented task   ") == [(Section.TASKS, "Indented task")]

    def test_title_inside_section_does_not_change_section(self):
        """Test a title line inside a section."""
        text = "## Tasks\n# Project: Renamed\n- Still a task"

        events = list(scan(text))

        assert TitleEvent("Renamed") in events
        assert _items(text) == [(Section.TASKS, "Still a task")]

    def test_scans_are_independent(self):
        """Test that one scan does not leak section state into another."""
        first = list(scan("## Tasks\n- A"))
        second = list(scan("- B"))

        assert first[-1] == ItemEvent(Section.TASKS, "A")
        assert second == []
