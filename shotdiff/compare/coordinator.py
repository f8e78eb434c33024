"""Pairing & comparison — pairs two capture logs row by row and diffs each pair."""

from __future__ import annotations

import logging
from pathlib import Path

from shotdiff.compare.diff_engine import DEFAULT_ALPHA, DEFAULT_THRESHOLD, compare_images, load_image
from shotdiff.errors import SourceUnreadable
from shotdiff.models.entries import UrlEntry
from shotdiff.models.results import ComparisonResult, RunSummary, UnmatchedRow
from shotdiff.naming import BASELINE, CHECKPOINT, diff_filename, screenshot_filename
from shotdiff.sources.reader import read_entries

logger = logging.getLogger(__name__)

MISSING_FILES = "missing file(s)"


class ComparisonCoordinator:
    """Compares baseline row i against checkpoint row i.

    Pairing is by position only. Two logs listing the same names in a
    different order are paired wrongly; that is how the logs are meant to
    be produced (same source order for both phases).
    """

    def __init__(
        self,
        summary: RunSummary,
        baseline_dir: Path,
        checkpoint_dir: Path,
        threshold: float = DEFAULT_THRESHOLD,
        alpha: float = DEFAULT_ALPHA,
    ):
        self.summary = summary
        self.baseline_dir = Path(baseline_dir)
        self.checkpoint_dir = Path(checkpoint_dir)
        self.threshold = threshold
        self.alpha = alpha
        self.unmatched: list[UnmatchedRow] = []

    def compare_logs(
        self, baseline_log: Path, checkpoint_log: Path, diff_dir: Path
    ) -> list[ComparisonResult]:
        try:
            baseline_entries = read_entries(baseline_log)
            checkpoint_entries = read_entries(checkpoint_log)
        except SourceUnreadable as e:
            msg = f"Failed to compare images: {e}"
            logger.error(msg)
            self.summary.add_error(msg)
            return []

        paired = min(len(baseline_entries), len(checkpoint_entries))
        results = [
            self.compare_pair(baseline_entries[i], checkpoint_entries[i], i + 1, Path(diff_dir))
            for i in range(paired)
        ]

        longer, phase = (
            (baseline_entries, BASELINE)
            if len(baseline_entries) > paired
            else (checkpoint_entries, CHECKPOINT)
        )
        for i in range(paired, len(longer)):
            logger.warning("Row %d: Missing corresponding image for comparison (%s only)", i + 1, phase)
            self.unmatched.append(UnmatchedRow(row_number=i + 1, phase=phase, name=longer[i].name))
            self.summary.record_unmatched()

        return results

    def compare_pair(
        self, baseline: UrlEntry, checkpoint: UrlEntry, row_number: int, diff_dir: Path
    ) -> ComparisonResult:
        baseline_file = screenshot_filename(BASELINE, baseline.name)
        checkpoint_file = screenshot_filename(CHECKPOINT, checkpoint.name)
        diff_file = diff_filename(baseline.name)
        baseline_path = self.baseline_dir / baseline_file
        checkpoint_path = self.checkpoint_dir / checkpoint_file

        logger.info("Comparing Row %d: %s vs %s", row_number, baseline_file, checkpoint_file)
        names = dict(baseline_file=baseline_file, checkpoint_file=checkpoint_file, diff_file=diff_file)

        baseline_exists = baseline_path.exists()
        checkpoint_exists = checkpoint_path.exists()
        if not (baseline_exists and checkpoint_exists):
            return self._failed(
                row_number, names, MISSING_FILES,
                f"Missing files - Baseline: {baseline_exists}, Checkpoint: {checkpoint_exists}",
            )

        diff_path = Path(diff_dir) / diff_file
        try:
            diff = compare_images(
                load_image(baseline_path),
                load_image(checkpoint_path),
                threshold=self.threshold,
                alpha=self.alpha,
            )
            diff.diff_map.save(diff_path, format="PNG")
        except Exception as e:
            error = str(e) or type(e).__name__
            # No partial or stale diff image for a failed pair
            diff_path.unlink(missing_ok=True)
            return self._failed(row_number, names, error, error)

        self.summary.record_comparison_success(diff.pixel_difference)
        logger.info("Comparison completed: %d pixels different (%.2f%%)",
                    diff.pixel_difference, diff.diff_percentage)
        return ComparisonResult(
            row_number=row_number,
            pixel_difference=diff.pixel_difference,
            diff_percentage=diff.diff_percentage,
            success=True,
            **names,
        )

    def _failed(self, row_number: int, names: dict, error: str, detail: str) -> ComparisonResult:
        msg = f"Failed to compare images for row {row_number}: {detail}"
        logger.error(msg)
        self.summary.record_comparison_failure(msg)
        return ComparisonResult(row_number=row_number, success=False, error=error, **names)
