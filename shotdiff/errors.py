"""Exception types raised by the pipeline."""

from __future__ import annotations


class ShotdiffError(Exception):
    """Base class for pipeline errors."""


class SetupError(ShotdiffError):
    """The run cannot start: directories, sources or logs are unusable."""


class SourceUnreadable(ShotdiffError):
    """An entry source could not be opened, decoded or parsed as CSV."""


class LogWriteError(ShotdiffError):
    """A row could not be appended to a capture log."""


class DimensionMismatch(ShotdiffError):
    """Two images passed to the diff engine have different sizes."""

    def __init__(self, baseline_size: tuple[int, int], checkpoint_size: tuple[int, int]):
        self.baseline_size = baseline_size
        self.checkpoint_size = checkpoint_size
        super().__init__(
            "Image dimensions don't match - "
            f"Baseline: {baseline_size[0]}x{baseline_size[1]}, "
            f"Checkpoint: {checkpoint_size[0]}x{checkpoint_size[1]}"
        )
