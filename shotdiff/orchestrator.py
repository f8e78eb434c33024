"""Pipeline orchestrator — coordinates setup, capture, compare and report stages."""

from __future__ import annotations

import asyncio
import logging
import time
from pathlib import Path
from typing import AsyncContextManager, Callable

from shotdiff.capture.capturer import ScreenshotCapturer
from shotdiff.capture.log import CaptureLog
from shotdiff.capture.renderer import PageRenderer, PlaywrightRenderer
from shotdiff.compare.coordinator import ComparisonCoordinator
from shotdiff.errors import SetupError, SourceUnreadable
from shotdiff.models.config import PipelineConfig
from shotdiff.models.results import RunSummary
from shotdiff.naming import PHASES
from shotdiff.reporter.reporter import Reporter
from shotdiff.sources.reader import read_entries, validate_source

logger = logging.getLogger(__name__)

RendererFactory = Callable[[PipelineConfig], AsyncContextManager[PageRenderer]]


class _UnavailableRenderer:
    """Stands in for a renderer whose browser could not be started."""

    def __init__(self, error: Exception):
        self.error = error

    async def navigate(self, url: str, timeout_ms: int) -> None:
        raise RuntimeError(f"renderer unavailable: {self.error}")

    async def capture(self) -> bytes:
        raise RuntimeError(f"renderer unavailable: {self.error}")


class Pipeline:
    """Runs the staged screenshot comparison pipeline.

    Stages talk to each other only through files: screenshots and capture
    logs written by the capture stages are re-read by the compare stage.
    Only setup problems raise; everything later lands in the RunSummary.
    """

    def __init__(self, config: PipelineConfig, renderer_factory: RendererFactory | None = None):
        self.config = config
        self.renderer_factory = renderer_factory or PlaywrightRenderer

    def run_full_pipeline(self) -> dict:
        """Execute setup → baseline → checkpoint → compare → report."""
        return asyncio.run(self._run_pipeline())

    async def _run_pipeline(self) -> dict:
        summary = RunSummary()
        logger.info("=== Starting screenshot comparison run ===")

        logger.info("--- Stage 1: Setup ---")
        self.setup(PHASES)

        for stage, phase in enumerate(PHASES, start=2):
            logger.info("--- Stage %d: Capture %s ---", stage, phase)
            stage_start = time.time()
            await self._capture_phase(phase, summary)
            logger.info("--- Stage %d complete in %.1fs ---", stage, time.time() - stage_start)

        return self._compare_and_report(summary, first_stage=4)

    def run_capture_only(self, phase: str) -> RunSummary:
        """Set up and capture a single phase."""
        if phase not in PHASES:
            raise ValueError(f"Unknown phase: {phase}")
        summary = RunSummary()
        self.setup((phase,))
        asyncio.run(self._capture_phase(phase, summary))
        summary.finalize()
        return summary

    def run_compare_only(self) -> dict:
        """Compare previously captured screenshots and write the report."""
        self.ensure_directories()
        for log_path in (self.config.baseline_log, self.config.checkpoint_log):
            if not log_path.exists():
                raise SetupError(f"Capture log not found: {log_path}. Run 'shotdiff capture' first.")
        return self._compare_and_report(RunSummary(), first_stage=1)

    # Stages

    def setup(self, phases: tuple[str, ...]) -> None:
        """Validate directories and sources, and start fresh capture logs."""
        self.ensure_directories()
        for phase in phases:
            validate_source(self.config.source_for(phase))
        for phase in phases:
            CaptureLog(self.config.capture_log(phase)).initialize()

    def ensure_directories(self) -> None:
        for directory in (
            self.config.baseline_screenshots_dir,
            self.config.checkpoint_screenshots_dir,
            self.config.diffs_dir,
        ):
            try:
                directory.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise SetupError(f"Failed to create directory: {directory} - {e}") from e
            logger.debug("Directory exists/created: %s", directory)

    async def _capture_phase(self, phase: str, summary: RunSummary) -> None:
        try:
            entries = read_entries(self.config.source_for(phase))
        except SourceUnreadable as e:
            msg = f"Failed to process {phase} URLs: {e}"
            logger.error(msg)
            summary.add_error(msg)
            return
        if not entries:
            logger.warning("No usable entries in %s", self.config.source_for(phase))
        log = CaptureLog(self.config.capture_log(phase))
        session = self.renderer_factory(self.config)
        started = False
        try:
            renderer = await session.__aenter__()
            started = True
        except Exception as e:
            # Every entry of the phase is then logged as failed
            logger.error("Renderer failed to start for %s: %s", phase, e)
            renderer = _UnavailableRenderer(e)

        try:
            capturer = ScreenshotCapturer(renderer, log, summary, timeout_ms=self.config.timeout_ms)
            await capturer.capture_all(entries, self.config.screenshots_dir(phase), phase)
        finally:
            if started:
                await self._close_renderer(session, phase, summary)

    async def _close_renderer(self, session, phase: str, summary: RunSummary) -> None:
        try:
            await session.__aexit__(None, None, None)
        except Exception as e:
            msg = f"Failed to close renderer for {phase}: {e}"
            logger.warning(msg)
            summary.add_error(msg)

    def _compare_and_report(self, summary: RunSummary, first_stage: int) -> dict:
        logger.info("--- Stage %d: Compare ---", first_stage)
        stage_start = time.time()
        coordinator = ComparisonCoordinator(
            summary,
            baseline_dir=self.config.baseline_screenshots_dir,
            checkpoint_dir=self.config.checkpoint_screenshots_dir,
            threshold=self.config.diff_threshold,
            alpha=self.config.diff_alpha,
        )
        comparisons = coordinator.compare_logs(
            self.config.baseline_log, self.config.checkpoint_log, self.config.diffs_dir
        )
        logger.info("--- Stage %d complete: %d pairs compared in %.1fs ---",
                    first_stage, len(comparisons), time.time() - stage_start)

        logger.info("--- Stage %d: Report ---", first_stage + 1)
        summary.finalize()
        reports = Reporter(self.config).generate_reports(
            summary, comparisons, coordinator.unmatched, output_dir=Path(self.config.results_dir)
        )
        logger.info("=== Run complete in %.1fs ===", summary.duration_seconds)

        return {
            "summary": summary,
            "comparisons": comparisons,
            "unmatched": coordinator.unmatched,
            "reports": reports,
        }
