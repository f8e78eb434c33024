"""Report generation orchestration."""

from __future__ import annotations

import logging
from pathlib import Path

from shotdiff.models.config import PipelineConfig
from shotdiff.models.results import ComparisonResult, RunSummary, UnmatchedRow

from .json_report import generate_json_report
from .markdown_report import generate_markdown_report

logger = logging.getLogger(__name__)

MARKDOWN_REPORT_NAME = "test-summary-report.md"
JSON_REPORT_NAME = "run-summary.json"


class Reporter:
    """Writes the configured run reports. Best effort: failures are logged, never raised."""

    def __init__(self, config: PipelineConfig):
        self.config = config

    def generate_reports(
        self,
        summary: RunSummary,
        comparisons: list[ComparisonResult],
        unmatched: list[UnmatchedRow] | None = None,
        output_dir: Path | None = None,
    ) -> dict[str, str]:
        """Generate all configured report formats. Returns format -> file path."""
        out_dir = Path(output_dir or self.config.results_dir)
        unmatched = unmatched or []
        generated = {}

        try:
            out_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error("Failed to generate summary report: %s", e)
            return generated

        if "markdown" in self.config.report_formats:
            path = out_dir / MARKDOWN_REPORT_NAME
            try:
                generate_markdown_report(summary, comparisons, unmatched, self.config, path)
                generated["markdown"] = str(path)
                logger.info("Summary report saved: %s", path)
            except Exception as e:
                logger.error("Failed to generate summary report: %s", e)

        if "json" in self.config.report_formats:
            path = out_dir / JSON_REPORT_NAME
            try:
                generate_json_report(summary, comparisons, unmatched, path)
                generated["json"] = str(path)
                logger.info("JSON report saved: %s", path)
            except Exception as e:
                logger.error("Failed to generate JSON report: %s", e)

        return generated
