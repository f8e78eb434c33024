"""Comparison results and the run-scoped summary accumulator."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field, model_validator


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ComparisonResult(BaseModel):
    row_number: int
    baseline_file: str
    checkpoint_file: str
    diff_file: str
    pixel_difference: int = Field(default=0, ge=0)
    diff_percentage: float = Field(default=0.0, ge=0.0, le=100.0)
    success: bool = False
    error: Optional[str] = None

    @model_validator(mode="after")
    def _failed_results_carry_no_numbers(self) -> "ComparisonResult":
        if not self.success:
            if self.pixel_difference or self.diff_percentage:
                raise ValueError("failed comparison must report zero difference")
            if not self.error:
                raise ValueError("failed comparison must carry an error")
        return self


class UnmatchedRow(BaseModel):
    """A log row past the end of the shorter log; reported, never compared."""
    row_number: int
    phase: str
    name: str


class RunSummary(BaseModel):
    """Counters and errors shared by every stage of one run.

    Stages only increment counters and append errors through the helpers
    below; none of them reads another stage's numbers to decide anything.
    """

    total_urls: int = 0
    successful_screenshots: int = 0
    failed_screenshots: int = 0
    successful_comparisons: int = 0
    failed_comparisons: int = 0
    total_differences: int = 0
    unmatched_rows: int = 0
    errors: list[str] = Field(default_factory=list)
    started_at: datetime = Field(default_factory=utc_now)
    ended_at: Optional[datetime] = None
    duration_seconds: float = 0.0

    def add_urls(self, count: int) -> None:
        self.total_urls += count

    def add_error(self, message: str) -> None:
        self.errors.append(message)

    def record_screenshot_success(self) -> None:
        self.successful_screenshots += 1

    def record_screenshot_failure(self, message: str) -> None:
        self.failed_screenshots += 1
        self.errors.append(message)

    def record_comparison_success(self, pixel_difference: int) -> None:
        self.successful_comparisons += 1
        self.total_differences += pixel_difference

    def record_comparison_failure(self, message: str) -> None:
        self.failed_comparisons += 1
        self.errors.append(message)

    def record_unmatched(self) -> None:
        self.unmatched_rows += 1

    def finalize(self) -> None:
        self.ended_at = utc_now()
        self.duration_seconds = round((self.ended_at - self.started_at).total_seconds(), 3)

    @property
    def screenshots_attempted(self) -> int:
        return self.successful_screenshots + self.failed_screenshots

    @property
    def comparisons_attempted(self) -> int:
        return self.successful_comparisons + self.failed_comparisons

    @property
    def screenshot_success_rate(self) -> float:
        if not self.screenshots_attempted:
            return 0.0
        return self.successful_screenshots / self.screenshots_attempted * 100

    @property
    def average_differences(self) -> float:
        if not self.successful_comparisons:
            return 0.0
        return self.total_differences / self.successful_comparisons

    @property
    def has_failures(self) -> bool:
        return bool(self.failed_screenshots or self.failed_comparisons or self.total_differences)
