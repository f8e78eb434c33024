"""Markdown run report — the human-readable summary written to the results directory."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

from shotdiff.models.config import PipelineConfig
from shotdiff.models.results import ComparisonResult, RunSummary, UnmatchedRow


def _iso(ts: datetime | None) -> str:
    return ts.isoformat() if ts else "-"


def _comparison_rows(comparisons: list[ComparisonResult]) -> str:
    if not comparisons:
        return "No comparisons were made."
    lines = [
        "| Row | Baseline | Checkpoint | Diff | Pixels | % | Status |",
        "|-----|----------|------------|------|--------|---|--------|",
    ]
    for c in comparisons:
        status = "OK" if c.success else f"FAILED: {c.error}"
        diff = c.diff_file if c.success else "-"
        lines.append(
            f"| {c.row_number} | {c.baseline_file} | {c.checkpoint_file} | {diff} "
            f"| {c.pixel_difference} | {c.diff_percentage:.2f} | {status} |"
        )
    return "\n".join(lines)


def _unmatched_rows(unmatched: list[UnmatchedRow]) -> str:
    if not unmatched:
        return "All rows were paired."
    return "\n".join(f"- Row {u.row_number}: `{u.name}` ({u.phase} only)" for u in unmatched)


def _errors(errors: list[str]) -> str:
    if not errors:
        return "No errors encountered."
    return "\n".join(f"{i}. {e}" for i, e in enumerate(errors, 1))


def render_markdown_report(
    summary: RunSummary,
    comparisons: list[ComparisonResult],
    unmatched: list[UnmatchedRow],
    config: PipelineConfig,
) -> str:
    return f"""# Automated Screenshot Comparison Report

## Run Summary
- **Start Time**: {_iso(summary.started_at)}
- **End Time**: {_iso(summary.ended_at)}
- **Duration**: {summary.duration_seconds}s
- **Total URLs Processed**: {summary.total_urls}

## Screenshot Results
- **Successful Screenshots**: {summary.successful_screenshots}
- **Failed Screenshots**: {summary.failed_screenshots}
- **Success Rate**: {summary.screenshot_success_rate:.2f}%

## Comparison Results
- **Successful Comparisons**: {summary.successful_comparisons}
- **Failed Comparisons**: {summary.failed_comparisons}
- **Unmatched Rows**: {summary.unmatched_rows}
- **Total Pixel Differences**: {summary.total_differences}
- **Average Differences per Comparison**: {summary.average_differences:.2f}

{_comparison_rows(comparisons)}

## Unmatched Rows
{_unmatched_rows(unmatched)}

## Errors Encountered
{_errors(summary.errors)}

## Files Generated
- Baseline Screenshots: `{config.baseline_screenshots_dir}`
- Checkpoint Screenshots: `{config.checkpoint_screenshots_dir}`
- Diff Images: `{config.diffs_dir}`
- Baseline Log: `{config.baseline_log}`
- Checkpoint Log: `{config.checkpoint_log}`

---
Report generated on: {datetime.now(timezone.utc).isoformat()}
"""


def generate_markdown_report(
    summary: RunSummary,
    comparisons: list[ComparisonResult],
    unmatched: list[UnmatchedRow],
    config: PipelineConfig,
    output_path: Path,
) -> None:
    with open(output_path, "w", encoding="utf-8") as f:
        f.write(render_markdown_report(summary, comparisons, unmatched, config))
