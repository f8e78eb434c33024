"""Entry source reader — turns a CSV file into an ordered list of UrlEntry.

Two row shapes are accepted:

* ``url,name`` — the hand-written source lists.
* ``filename,url[,timestamp,status]`` — a capture log reused as a source; the
  entry name is recovered from the logged filename.

Rows matching neither shape are skipped. A row matching both is read as
``url,name``. Header names are trimmed, but values are kept exactly
as written, surrounding spaces included.
"""

from __future__ import annotations

import csv
import logging
from pathlib import Path

from shotdiff.errors import SetupError, SourceUnreadable
from shotdiff.models.entries import UrlEntry
from shotdiff.naming import recover_name

logger = logging.getLogger(__name__)


def _field(row: dict, key: str) -> str:
    value = row.get(key)
    return value if isinstance(value, str) else ""


def entry_from_row(row: dict) -> UrlEntry | None:
    """Map one parsed CSV row to an entry, or None when it has no usable shape."""
    url = _field(row, "url")
    name = _field(row, "name")
    if url and name:
        return UrlEntry(url=url, name=name)

    filename = _field(row, "filename")
    if filename and url:
        recovered = recover_name(filename)
        if recovered:
            return UrlEntry(url=url, name=recovered)
    return None


def read_entries(path: str | Path) -> list[UrlEntry]:
    """Read all entries from a CSV source, preserving row order."""
    path = Path(path)
    entries: list[UrlEntry] = []
    try:
        with open(path, newline="", encoding="utf-8-sig") as f:
            reader = csv.DictReader(f, strict=True)
            if reader.fieldnames:
                reader.fieldnames = [name.strip() for name in reader.fieldnames]
            for line_no, row in enumerate(reader, start=2):
                entry = entry_from_row(row)
                if entry is None:
                    logger.debug("Skipping row %d of %s: no url/name or filename/url", line_no, path)
                    continue
                entries.append(entry)
    except (OSError, UnicodeDecodeError, csv.Error) as e:
        raise SourceUnreadable(f"Cannot read entry source {path}: {e}") from e

    logger.debug("Read %d entries from %s", len(entries), path)
    return entries


def validate_source(path: str | Path) -> int:
    """Check a required source exists, is non-empty and parses. Returns its entry count."""
    path = Path(path)
    if not path.exists():
        raise SetupError(f"CSV file not found: {path}")
    if path.stat().st_size == 0:
        raise SetupError(f"CSV file is empty: {path}")
    try:
        count = len(read_entries(path))
    except SourceUnreadable as e:
        raise SetupError(str(e)) from e
    logger.info("CSV file validated: %s (%d entries)", path, count)
    return count
