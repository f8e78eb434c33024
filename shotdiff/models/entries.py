"""Entry and capture-log data structures."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class CaptureStatus(str, Enum):
    SUCCESS = "success"
    FAILED = "failed"


class UrlEntry(BaseModel):
    """One page to capture. Identity is its row position, not its name."""

    model_config = ConfigDict(frozen=True)

    url: str = Field(min_length=1)
    name: str = Field(min_length=1)


class CaptureLogRow(BaseModel):
    file_name: str
    url: str
    timestamp: str  # ISO-8601, UTC
    status: CaptureStatus

    def as_csv_fields(self) -> list[str]:
        return [self.file_name, self.url, self.timestamp, self.status.value]
