"""
Integration tests for the round-trip regression runner.
"""

import json
import sys
from pathlib import Path

import pytest

# Add the project root to the path so we can import the runner module
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from roundtrip_regression import RoundTripRegression, main


class TestRoundTripRegression:
    """Runner behaviour over a small document tree."""

    @pytest.fixture
    def documents_dir(self, tmp_path):
        docs = tmp_path / "docs"
        (docs / "nested").mkdir(parents=True)
        (docs / "apollo.md").write_text(
            "# Project: Apollo\n\n## Tasks\n- Ship v1 (Alice) [done]\n", encoding="utf-8"
        )
        (docs / "nested" / "notes.txt").write_text("## tasks\n* Fix bug [wip]", encoding="utf-8")
        (docs / "ignored.json").write_text("{}", encoding="utf-8")
        return docs

    def test_collect_documents_expands_directories(self, documents_dir, tmp_path):
        """Test collecting documents from directories."""
        runner = RoundTripRegression(tmp_path / "out")

        found = runner.collect_documents([documents_dir, tmp_path / "missing.md"])

        assert [path.name for path in found] == ["apollo.md", "notes.txt"]

    def test_check_text_reports_canonical_change(self, tmp_path):
        """Test the result for one non-canonical document."""
        runner = RoundTripRegression(tmp_path / "out")

        result = runner.check_text("inline", "## tasks\n* Fix bug [wip]")

        assert result["success"] is True
        assert result["canonical_changed"] is True
        assert result["counts"] == {"people": 0, "timeline": 0, "tasks": 1}

    def test_run_summarizes(self, documents_dir, tmp_path):
        """Test the run summary and metrics."""
        runner = RoundTripRegression(tmp_path / "out")

        results = runner.run(runner.collect_documents([documents_dir]))

        assert results["summary"]["total_documents"] == 2
        assert results["summary"]["passed_documents"] == 2
        assert results["summary"]["success_rate"] == 1.0
        assert results["metrics"]["parse_performance"]["count"] == 2

    def test_main_writes_report(self, documents_dir, tmp_path):
        """Test that the CLI writes a JSON report."""
        output_dir = tmp_path / "reports"

        exit_code = main([str(documents_dir), "--output-dir", str(output_dir)])

        assert exit_code == 0
        reports = list(output_dir.glob("roundtrip_*.json"))
        assert len(reports) == 1
        report = json.loads(reports[0].read_text(encoding="utf-8"))
        assert report["summary"]["failed_documents"] == 0

    def test_main_no_report(self, documents_dir, tmp_path):
        """Test the CLI without a report."""
        output_dir = tmp_path / "reports"

        exit_code = main([str(documents_dir), "--output-dir", str(output_dir), "--no-report"])

        assert exit_code == 0
        assert not output_dir.exists()

    def test_unreadable_document_fails_run(self, tmp_path):
        """Test that an unreadable document fails the run."""
        bad = tmp_path / "bad.md"
        bad.write_bytes(b"\xff\xfe\xfa")

        exit_code = main([str(bad), "--no-report"])

        assert exit_code == 1
