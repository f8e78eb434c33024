"""Screenshot capture — drives a renderer over one phase's entries."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path

from shotdiff.capture.log import CaptureLog
from shotdiff.capture.renderer import PageRenderer
from shotdiff.errors import LogWriteError
from shotdiff.models.entries import CaptureLogRow, CaptureStatus, UrlEntry
from shotdiff.models.results import RunSummary
from shotdiff.naming import screenshot_filename

logger = logging.getLogger(__name__)


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class ScreenshotCapturer:
    """Captures entries one at a time, logging every attempt.

    A failed entry is logged and counted; the batch always carries on.
    """

    def __init__(
        self,
        renderer: PageRenderer,
        log: CaptureLog,
        summary: RunSummary,
        timeout_ms: int = 25000,
    ):
        self.renderer = renderer
        self.log = log
        self.summary = summary
        self.timeout_ms = timeout_ms

    async def capture_all(self, entries: list[UrlEntry], output_dir: Path, phase: str) -> None:
        total = len(entries)
        self.summary.add_urls(total)
        for index, entry in enumerate(entries, start=1):
            logger.debug("[%s %d/%d] %s", phase, index, total, entry.url)
            await self.capture_entry(entry, output_dir, phase)

    async def capture_entry(self, entry: UrlEntry, output_dir: Path, phase: str) -> CaptureStatus:
        file_name = screenshot_filename(phase, entry.name)
        file_path = Path(output_dir) / file_name
        logger.info("Capturing %s as %s", entry.url, file_name)

        try:
            await self.renderer.navigate(entry.url, self.timeout_ms)
            image = await self.renderer.capture()
            file_path.write_bytes(image)
        except Exception as e:
            status = CaptureStatus.FAILED
            msg = f"Failed to capture screenshot for {entry.url}: {e}"
            logger.error(msg)
            self.summary.record_screenshot_failure(msg)
        else:
            status = CaptureStatus.SUCCESS
            self.summary.record_screenshot_success()
            logger.info("Screenshot saved: %s", file_name)

        row = CaptureLogRow(file_name=file_name, url=entry.url, timestamp=_timestamp(), status=status)
        try:
            self.log.append_row(row)
        except LogWriteError as e:
            logger.error("%s", e)
            self.summary.add_error(str(e))
        return status
