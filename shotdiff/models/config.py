"""Configuration models for the screenshot comparison pipeline."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator

REPORT_FORMATS = ("markdown", "json")


class ViewportConfig(BaseModel):
    width: int = 1920
    height: int = 1080


class PipelineConfig(BaseModel):
    # Entry sources
    source_csv: str = "./source.csv"
    target_csv: str = "./target.csv"

    # Output layout
    baseline_dir: str = "./Baseline"
    checkpoint_dir: str = "./Checkpoint"
    results_dir: str = "./Results"

    # Capture settings
    timeout_ms: int = 25000
    settle_delay_ms: int = 2000
    wait_until: str = "networkidle"
    headless: bool = True
    user_agent: Optional[str] = None
    viewport: ViewportConfig = Field(default_factory=ViewportConfig)

    # Pixel diff
    diff_threshold: float = 0.1
    diff_alpha: float = 0.1

    # Reporting
    report_formats: list[str] = Field(default_factory=lambda: list(REPORT_FORMATS))

    @field_validator("diff_threshold", "diff_alpha")
    @classmethod
    def check_fraction(cls, v: float) -> float:
        if not 0.0 <= v <= 1.0:
            raise ValueError("must be between 0 and 1")
        return v

    @field_validator("wait_until")
    @classmethod
    def check_wait_until(cls, v: str) -> str:
        allowed = ("load", "domcontentloaded", "networkidle", "commit")
        if v not in allowed:
            raise ValueError(f"wait_until must be one of {', '.join(allowed)}")
        return v

    @field_validator("report_formats")
    @classmethod
    def check_report_formats(cls, v: list[str]) -> list[str]:
        unknown = [fmt for fmt in v if fmt not in REPORT_FORMATS]
        if unknown:
            raise ValueError(f"Unknown report format(s): {', '.join(unknown)}")
        return v

    @property
    def baseline_screenshots_dir(self) -> Path:
        return Path(self.baseline_dir) / "Screenshots"

    @property
    def checkpoint_screenshots_dir(self) -> Path:
        return Path(self.checkpoint_dir) / "Screenshots"

    @property
    def diffs_dir(self) -> Path:
        return Path(self.results_dir) / "diffs"

    @property
    def baseline_log(self) -> Path:
        return Path(self.baseline_dir) / "baseline.csv"

    @property
    def checkpoint_log(self) -> Path:
        return Path(self.checkpoint_dir) / "checkpoint.csv"

    def screenshots_dir(self, phase: str) -> Path:
        return self.baseline_screenshots_dir if phase == "baseline" else self.checkpoint_screenshots_dir

    def capture_log(self, phase: str) -> Path:
        return self.baseline_log if phase == "baseline" else self.checkpoint_log

    def source_for(self, phase: str) -> Path:
        return Path(self.source_csv if phase == "baseline" else self.target_csv)

    @classmethod
    def load(cls, path: str | Path) -> "PipelineConfig":
        """Load config from a JSON file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        with open(path) as f:
            data = json.load(f)
        return cls(**data)

    def save(self, path: str | Path) -> None:
        """Save config to a JSON file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(self.model_dump(), f, indent=2)
