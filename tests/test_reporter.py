"""Tests for report generation — markdown, JSON, console and the Reporter."""

import json
from unittest.mock import patch

from rich.console import Console

from shotdiff.models.config import PipelineConfig
from shotdiff.models.results import ComparisonResult, RunSummary, UnmatchedRow
from shotdiff.reporter.console_report import build_summary_table, print_console_summary
from shotdiff.reporter.markdown_report import render_markdown_report
from shotdiff.reporter.reporter import JSON_REPORT_NAME, MARKDOWN_REPORT_NAME, Reporter


# ============================================================================
# Helpers
# ============================================================================

def _make_summary() -> RunSummary:
    s = RunSummary()
    s.add_urls(4)
    s.record_screenshot_success()
    s.record_screenshot_success()
    s.record_screenshot_success()
    s.record_screenshot_failure("Failed to capture screenshot for https://broken.com: timeout")
    s.record_comparison_success(120)
    s.record_comparison_failure("Failed to compare images for row 2: missing")
    s.record_unmatched()
    s.finalize()
    return s


def _make_comparisons() -> list[ComparisonResult]:
    return [
        ComparisonResult(row_number=1, baseline_file="baseline_A.png", checkpoint_file="checkpoint_A.png",
                         diff_file="diff_A.png", pixel_difference=120, diff_percentage=1.2, success=True),
        ComparisonResult(row_number=2, baseline_file="baseline_B.png", checkpoint_file="checkpoint_B.png",
                         diff_file="diff_B.png", success=False, error="missing file(s)"),
    ]


def _unmatched() -> list[UnmatchedRow]:
    return [UnmatchedRow(row_number=3, phase="baseline", name="C")]


class TestMarkdownReport:

    def test_contains_all_counts(self):
        text = render_markdown_report(_make_summary(), _make_comparisons(), _unmatched(), PipelineConfig())
        assert "**Total URLs Processed**: 4" in text
        assert "**Successful Screenshots**: 3" in text
        assert "**Failed Screenshots**: 1" in text
        assert "**Success Rate**: 75.00%" in text
        assert "**Successful Comparisons**: 1" in text
        assert "**Failed Comparisons**: 1" in text
        assert "**Total Pixel Differences**: 120" in text
        assert "**Average Differences per Comparison**: 120.00" in text
        assert "**Unmatched Rows**: 1" in text

    def test_errors_listed_in_order(self):
        text = render_markdown_report(_make_summary(), [], [], PipelineConfig())
        first = text.index("1. Failed to capture screenshot")
        second = text.index("2. Failed to compare images for row 2")
        assert first < second

    def test_no_errors_message(self):
        text = render_markdown_report(RunSummary(), [], [], PipelineConfig())
        assert "No errors encountered." in text
        assert "**Success Rate**: 0.00%" in text
        assert "No comparisons were made." in text
        assert "All rows were paired." in text

    def test_per_pair_rows(self):
        text = render_markdown_report(_make_summary(), _make_comparisons(), _unmatched(), PipelineConfig())
        assert "| 1 | baseline_A.png | checkpoint_A.png | diff_A.png | 120 | 1.20 | OK |" in text
        assert "FAILED: missing file(s)" in text
        assert "Row 3: `C` (baseline only)" in text

    def test_lists_generated_locations(self):
        cfg = PipelineConfig(results_dir="out")
        text = render_markdown_report(RunSummary(), [], [], cfg)
        assert "Diff Images: `out/diffs`" in text


class TestReporter:

    def test_writes_both_formats(self, tmp_path):
        reporter = Reporter(PipelineConfig(results_dir=str(tmp_path)))
        generated = reporter.generate_reports(_make_summary(), _make_comparisons(), _unmatched())

        assert generated == {
            "markdown": str(tmp_path / MARKDOWN_REPORT_NAME),
            "json": str(tmp_path / JSON_REPORT_NAME),
        }
        assert (tmp_path / "test-summary-report.md").exists()

    def test_json_contents(self, tmp_path):
        reporter = Reporter(PipelineConfig())
        reporter.generate_reports(_make_summary(), _make_comparisons(), _unmatched(), output_dir=tmp_path)

        data = json.loads((tmp_path / JSON_REPORT_NAME).read_text())
        assert data["total_urls"] == 4
        assert data["screenshot_success_rate"] == 75.0
        assert data["average_differences"] == 120.0
        assert len(data["comparisons"]) == 2
        assert data["comparisons"][1]["error"] == "missing file(s)"
        assert data["unmatched"][0]["name"] == "C"
        assert len(data["errors"]) == 2

    def test_respects_configured_formats(self, tmp_path):
        reporter = Reporter(PipelineConfig(report_formats=["json"]))
        generated = reporter.generate_reports(RunSummary(), [], output_dir=tmp_path)
        assert list(generated) == ["json"]
        assert not (tmp_path / MARKDOWN_REPORT_NAME).exists()

    def test_write_failure_is_logged_not_raised(self, tmp_path, caplog):
        reporter = Reporter(PipelineConfig())
        with patch("shotdiff.reporter.reporter.generate_markdown_report", side_effect=OSError("read-only")):
            generated = reporter.generate_reports(RunSummary(), [], output_dir=tmp_path)
        assert "markdown" not in generated
        assert "json" in generated
        assert "read-only" in caplog.text

    def test_uncreatable_output_dir(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("x")
        generated = Reporter(PipelineConfig()).generate_reports(RunSummary(), [], output_dir=blocker / "out")
        assert generated == {}


class TestConsoleSummary:

    def test_table_rows(self):
        table = build_summary_table(_make_summary())
        assert table.row_count == 10

    def test_prints_counts(self):
        console = Console(record=True, width=120)
        print_console_summary(_make_summary(), console)
        out = console.export_text()
        assert "3/4 successful (75.00%)" in out
        assert "1/2 successful" in out
