"""Rebuild the gale warning number timeline from saved bulletin snapshots.

Snapshots are text files named after their fetch time, for instance
``bulletin_2016_01_10T06_00_00.txt``. Older files used a ``T_`` separator
(``2016_01_10T_06_00_00``); both forms are accepted.
"""

import logging
import os
import re
from datetime import UTC, datetime
from pathlib import Path

from metmar.models.errors import ExtractionFailure
from metmar.models.gale import GaleWarning

logger = logging.getLogger(__name__)

# Bulletin spécial: Avis de Grand frais à Coup de vent numéro 36
WARNING_RE = re.compile(r"^\s*(?:Bulletin spécial:|BMS\s+côte\s+numéro).*?(\d+)", re.ASCII)
SNAPSHOT_RE = re.compile(r"(\d{4}_\d{2}_\d{2}T_?\d{2}_\d{2}_\d{2})\.txt$", re.ASCII)
TIMESTAMP_FORMAT = "%Y_%m_%dT%H_%M_%S"

MAX_WARNING_NUMBER = 2**31 - 1
GAP_SEED = 1


def extract_warning_number(path: str | Path) -> int:
    """Return the gale warning number announced in a snapshot, 0 if none.

    Bytes that are not valid UTF-8 are replaced, so Latin-1 snapshots still
    read; their accented markers just never match.
    """
    try:
        with open(path, encoding="utf-8", errors="replace") as f:
            for line in f:
                m = WARNING_RE.match(line)
                if m is None:
                    continue
                return _parse_number(m.group(1), path)
    except OSError as e:
        raise ExtractionFailure(f"could not read {path}: {e}") from e
    return 0


def _parse_number(digits: str, path: str | Path) -> int:
    try:
        n = int(digits)
    except ValueError as e:
        raise ExtractionFailure(f"invalid warning number in {path}: {digits!r}") from e
    if n > MAX_WARNING_NUMBER:
        raise ExtractionFailure(f"warning number out of range in {path}: {digits}")
    return n


def parse_snapshot_timestamp(name: str) -> datetime | None:
    """Parse the timestamp embedded in a snapshot path.

    Returns None when the name does not follow the snapshot convention.
    Raises ExtractionFailure when it does but the date is invalid.
    """
    m = SNAPSHOT_RE.search(name)
    if m is None:
        return None
    stamp = m.group(1).replace("T_", "T")
    try:
        return datetime.strptime(stamp, TIMESTAMP_FORMAT).replace(tzinfo=UTC)
    except ValueError as e:
        raise ExtractionFailure(f"invalid snapshot timestamp in {name}: {e}") from e


def _walk_snapshots(directory: Path):
    """Yield regular files under directory in lexical order, recursively."""

    def _raise(err: OSError) -> None:
        raise ExtractionFailure(f"could not walk {directory}: {err}") from err

    if not directory.is_dir():
        raise ExtractionFailure(f"not a directory: {directory}")
    for root, dirnames, filenames in os.walk(directory, onerror=_raise):
        dirnames.sort()
        for name in sorted(filenames):
            path = Path(root) / name
            if path.is_file() and not path.is_symlink():
                yield path


def fill_gaps(warnings: list[GaleWarning]) -> list[GaleWarning]:
    """Replace zero numbers with the last positive number seen before them."""
    filled: list[GaleWarning] = []
    current = GAP_SEED
    for w in warnings:
        if w.number != 0:
            current = w.number
            filled.append(w)
        else:
            filled.append(GaleWarning(number=current, timestamp=w.timestamp))
    return filled


def extract_warnings(directory: str | Path) -> list[GaleWarning]:
    """Return the chronological, gap-filled gale warnings of a snapshot dir.

    Files whose name does not embed a timestamp are skipped. Any read or
    parse failure on a matching file aborts the whole extraction.
    """
    directory = Path(directory)
    warnings: list[GaleWarning] = []
    for path in _walk_snapshots(directory):
        timestamp = parse_snapshot_timestamp(str(path))
        if timestamp is None:
            continue
        warnings.append(
            GaleWarning(number=extract_warning_number(path), timestamp=timestamp)
        )

    # sorted() is stable: equal timestamps keep walk order
    warnings = sorted(warnings, key=lambda w: w.timestamp)
    logger.info("Extracted %d gale snapshots from %s", len(warnings), directory)
    return fill_gaps(warnings)
