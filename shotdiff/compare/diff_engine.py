"""Pixel diff engine — counts perceptually different pixels between two images.

The comparison itself is pixelmatch: colour distance is measured in YIQ space
against ``threshold`` (a fraction of the largest possible distance) and
anti-aliased edges are detected and left out of the count. Differing pixels
are painted pink on the diff map; everything else is a faded grayscale copy
of the baseline.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from PIL import Image
from pixelmatch.contrib.PIL import pixelmatch

from shotdiff.errors import DimensionMismatch

logger = logging.getLogger(__name__)

DIFF_COLOR = (255, 192, 203)  # pink, #FFC0CB
DEFAULT_THRESHOLD = 0.1
DEFAULT_ALPHA = 0.1


@dataclass
class DiffResult:
    pixel_difference: int
    diff_percentage: float
    diff_map: Image.Image
    width: int
    height: int


def diff_percentage(pixel_difference: int, width: int, height: int) -> float:
    total = width * height
    if total == 0:
        return 0.0
    return 100 * pixel_difference / total


def load_image(path: Path) -> Image.Image:
    """Decode an image file fully into memory as RGBA."""
    with Image.open(path) as img:
        return img.convert("RGBA")


def compare_images(
    baseline: Image.Image,
    checkpoint: Image.Image,
    threshold: float = DEFAULT_THRESHOLD,
    alpha: float = DEFAULT_ALPHA,
) -> DiffResult:
    """Compare two same-sized images. Raises DimensionMismatch otherwise."""
    if baseline.size != checkpoint.size:
        raise DimensionMismatch(baseline.size, checkpoint.size)

    width, height = baseline.size
    baseline = baseline.convert("RGBA")
    checkpoint = checkpoint.convert("RGBA")
    diff_map = Image.new("RGBA", (width, height))

    pixel_difference = pixelmatch(
        baseline,
        checkpoint,
        diff_map,
        threshold=threshold,
        alpha=alpha,
        diff_color=DIFF_COLOR,
    )
    logger.debug("Compared %dx%d images: %d pixels differ", width, height, pixel_difference)
    return DiffResult(
        pixel_difference=pixel_difference,
        diff_percentage=diff_percentage(pixel_difference, width, height),
        diff_map=diff_map,
        width=width,
        height=height,
    )
