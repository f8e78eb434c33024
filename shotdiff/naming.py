"""File naming shared by capture and comparison — sanitize names, build and recover filenames."""

from __future__ import annotations

import re

BASELINE = "baseline"
CHECKPOINT = "checkpoint"
PHASES = (BASELINE, CHECKPOINT)

_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9]")
_PHASE_PREFIX = re.compile(r"^(baseline_|checkpoint_)")
_IMAGE_SUFFIX = re.compile(r"\.(png|jpg|jpeg)$", re.IGNORECASE)


def sanitize_name(name: str) -> str:
    """Replace every character outside [A-Za-z0-9] with an underscore."""
    return _UNSAFE_CHARS.sub("_", name)


def screenshot_filename(phase: str, name: str) -> str:
    return f"{phase}_{sanitize_name(name)}.png"


def diff_filename(name: str) -> str:
    return f"diff_{sanitize_name(name)}.png"


def recover_name(filename: str) -> str:
    """Strip one phase prefix and one image extension from a logged filename.

    Lossy: names that differed only in punctuation come back identical.
    """
    return _IMAGE_SUFFIX.sub("", _PHASE_PREFIX.sub("", filename, count=1), count=1)
