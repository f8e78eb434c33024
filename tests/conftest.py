"""Pytest configuration and shared fixtures."""

import io
from pathlib import Path

import pytest
from PIL import Image

from shotdiff.models.config import PipelineConfig
from shotdiff.models.results import RunSummary


# ============================================================================
# Image helpers
# ============================================================================


def png_bytes(width: int = 100, height: int = 50, color=(255, 255, 255), block=None) -> bytes:
    """Encode a solid-colour PNG, optionally with a black block (x, y, w, h) drawn on it."""
    img = Image.new("RGB", (width, height), color)
    if block:
        x, y, w, h = block
        img.paste((0, 0, 0), (x, y, x + w, y + h))
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def make_png():
    """Factory fixture returning PNG bytes."""
    return png_bytes


@pytest.fixture
def write_png(tmp_path: Path):
    """Factory fixture writing a PNG to a path and returning the path."""

    def _write(path: Path, **kwargs) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(png_bytes(**kwargs))
        return path

    return _write


# ============================================================================
# Renderer fixtures
# ============================================================================


class FakeRenderer:
    """Deterministic stand-in for PlaywrightRenderer.

    ``pages`` maps URL -> PNG bytes, or -> an exception to raise on navigate.
    Unknown URLs render a plain white page.
    """

    def __init__(self, pages: dict | None = None, default: bytes | None = None):
        self.pages = pages or {}
        self.default = default if default is not None else png_bytes()
        self.navigations: list[tuple[str, int]] = []
        self.captures = 0
        self.entered = 0
        self.exited = 0
        self._current: str | None = None

    async def __aenter__(self) -> "FakeRenderer":
        self.entered += 1
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.exited += 1

    async def navigate(self, url: str, timeout_ms: int) -> None:
        self.navigations.append((url, timeout_ms))
        page = self.pages.get(url)
        if isinstance(page, Exception):
            raise page
        self._current = url

    async def capture(self) -> bytes:
        self.captures += 1
        page = self.pages.get(self._current)
        return page if isinstance(page, bytes) else self.default


@pytest.fixture
def fake_renderer() -> FakeRenderer:
    return FakeRenderer()


@pytest.fixture
def renderer_cls():
    """The FakeRenderer class, for tests that build their own pages."""
    return FakeRenderer


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def pipeline_config(tmp_path: Path) -> PipelineConfig:
    """A config whose every path lives under tmp_path."""
    return PipelineConfig(
        source_csv=str(tmp_path / "source.csv"),
        target_csv=str(tmp_path / "target.csv"),
        baseline_dir=str(tmp_path / "Baseline"),
        checkpoint_dir=str(tmp_path / "Checkpoint"),
        results_dir=str(tmp_path / "Results"),
        timeout_ms=5000,
        settle_delay_ms=0,
    )


@pytest.fixture
def summary() -> RunSummary:
    return RunSummary()


@pytest.fixture
def write_csv():
    """Factory fixture writing CSV text to a path."""

    def _write(path: Path, text: str) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write
