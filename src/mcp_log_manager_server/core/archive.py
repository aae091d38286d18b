"""Date/size filtering and the zip archive lifecycle.

Log files carry their date in the name (``2024.01.31_service.log``); archives
carry the range they replace (``01_01_2024-31_01_2024.zip``). Names that do
not fit either grammar never match and are never an error.
"""

from __future__ import annotations

import logging
import re
import zipfile
from datetime import date, datetime
from pathlib import Path

from .models import ARCHIVE_DATE_FORMAT, DateRange, LogFile, SizeRange, parse_log_date
from .paths import list_all_files, list_log_files

logger = logging.getLogger(__name__)

_ARCHIVE_TOKEN_RE = re.compile(r"^\d{2}_\d{2}_\d{4}$")


def files_in_date_range(range_: DateRange) -> list[Path]:
    """Logs whose filename date lies within the inclusive range."""
    out: list[Path] = []
    for path in list_log_files(range_.directory):
        day = parse_log_date(path)
        if day is not None and range_.contains(day):
            out.append(path)
    return out


def files_in_size_range(range_: SizeRange) -> list[Path]:
    """Logs whose size in whole KB lies within the inclusive range."""
    out: list[Path] = []
    for path in list_log_files(range_.directory):
        try:
            log = LogFile.from_path(path)
        except OSError as exc:
            logger.warning("Cannot stat %s: %s", path, exc)
            continue
        if range_.contains(log.size_kb):
            out.append(path)
    return out


def count_in_period(range_: DateRange) -> int:
    return len(files_in_date_range(range_))


def delete_by_period(range_: DateRange) -> list[Path]:
    """Delete every log in the range. Irreversible."""
    deleted: list[Path] = []
    for path in files_in_date_range(range_):
        path.unlink()
        deleted.append(path)
    logger.info("Deleted %d logs from %s", len(deleted), range_.directory)
    return deleted


def archive_logs(range_: DateRange) -> Path | None:
    """Move the range's logs into ``<directory>/<start>-<end>.zip``.

    Each original is removed as soon as its entry is written, so a crash
    leaves a partial archive next to the logs that were not yet moved.
    Returns None without touching the filesystem when nothing matches.
    """
    logs = files_in_date_range(range_)
    if not logs:
        return None

    archive_path = Path(range_.directory) / range_.archive_name
    with zipfile.ZipFile(archive_path, mode="x", compression=zipfile.ZIP_DEFLATED) as zf:
        for log in logs:
            zf.write(log, arcname=log.name)
            log.unlink()
    logger.info("Archived %d logs into %s", len(logs), archive_path)
    return archive_path


def parse_archive_range(name: str | Path) -> tuple[date, date] | None:
    """Parse ``dd_MM_yyyy-dd_MM_yyyy`` from a file name (extension ignored)."""
    parts = Path(name).stem.split("-")
    if len(parts) != 2:
        return None
    if not all(_ARCHIVE_TOKEN_RE.match(p) for p in parts):
        return None
    try:
        start = datetime.strptime(parts[0], ARCHIVE_DATE_FORMAT).date()
        end = datetime.strptime(parts[1], ARCHIVE_DATE_FORMAT).date()
    except ValueError:
        return None
    return start, end


def delete_archives_in_range(range_: DateRange) -> list[Path]:
    """Delete archives whose encoded range nests inside the query range.

    Every file name under the directory is tried, not only ``.zip`` files.
    """
    deleted: list[Path] = []
    for path in list_all_files(range_.directory):
        parsed = parse_archive_range(path)
        if parsed is None:
            continue
        start, end = parsed
        if start >= range_.start_date and end <= range_.end_date:
            path.unlink()
            deleted.append(path)
    logger.info("Deleted %d archives from %s", len(deleted), range_.directory)
    return deleted
