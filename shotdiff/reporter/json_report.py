"""JSON report output."""

from __future__ import annotations

import json
from pathlib import Path

from shotdiff.models.results import ComparisonResult, RunSummary, UnmatchedRow


def generate_json_report(
    summary: RunSummary,
    comparisons: list[ComparisonResult],
    unmatched: list[UnmatchedRow],
    output_path: Path,
) -> None:
    """Write a machine-readable JSON report."""
    report = summary.model_dump(mode="json")
    report["screenshot_success_rate"] = round(summary.screenshot_success_rate, 2)
    report["average_differences"] = round(summary.average_differences, 2)
    report["comparisons"] = [c.model_dump() for c in comparisons]
    report["unmatched"] = [u.model_dump() for u in unmatched]

    with open(output_path, "w") as f:
        json.dump(report, f, indent=2, default=str)
