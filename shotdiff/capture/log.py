"""Capture log — append-only CSV record of every screenshot attempt in a phase."""

from __future__ import annotations

import csv
import io
import logging
import os
from pathlib import Path

from shotdiff.errors import LogWriteError, SetupError
from shotdiff.models.entries import CaptureLogRow

logger = logging.getLogger(__name__)

LOG_HEADER = ("filename", "url", "timestamp", "status")


def _csv_line(fields) -> str:
    buf = io.StringIO()
    csv.writer(buf, lineterminator="\n").writerow(fields)
    return buf.getvalue()


class CaptureLog:
    """One phase's capture log file."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def initialize(self) -> None:
        """Start a fresh log containing only the header row."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8", newline="") as f:
                f.write(_csv_line(LOG_HEADER))
        except OSError as e:
            raise SetupError(f"Failed to create CSV file: {self.path} - {e}") from e
        logger.debug("Created capture log %s", self.path)

    def append_row(self, row: CaptureLogRow) -> None:
        """Append one row and make it durable before returning.

        The row goes out in a single write, so a failure never leaves a
        partial line behind an earlier row.
        """
        line = _csv_line(row.as_csv_fields())
        try:
            with open(self.path, "a", encoding="utf-8", newline="") as f:
                f.write(line)
                f.flush()
                os.fsync(f.fileno())
        except OSError as e:
            raise LogWriteError(f"Failed to append to capture log {self.path}: {e}") from e

    def read_rows(self) -> list[CaptureLogRow]:
        with open(self.path, newline="", encoding="utf-8") as f:
            return [
                CaptureLogRow(
                    file_name=r["filename"],
                    url=r["url"],
                    timestamp=r["timestamp"],
                    status=r["status"],
                )
                for r in csv.DictReader(f)
            ]
