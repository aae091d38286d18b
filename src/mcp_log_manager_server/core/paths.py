"""Log file discovery."""

from __future__ import annotations

import logging
from pathlib import Path

from .errors import DirectoryNotFoundError

logger = logging.getLogger(__name__)

LOG_SUFFIX = ".log"


def list_log_files(directory: str | Path, *, strict: bool = False) -> list[Path]:
    """Return every ``*.log`` file under ``directory`` (recursive, sorted).

    A missing directory raises DirectoryNotFoundError when ``strict`` is set;
    otherwise it is logged and treated as empty.
    """
    root = Path(directory)
    if not root.is_dir():
        if strict:
            raise DirectoryNotFoundError(root)
        logger.warning("Directory not found, nothing to scan: %s", root)
        return []

    return sorted(p for p in root.rglob(f"*{LOG_SUFFIX}") if p.is_file())


def list_all_files(directory: str | Path) -> list[Path]:
    """Return every regular file under ``directory`` regardless of suffix."""
    root = Path(directory)
    if not root.is_dir():
        logger.warning("Directory not found, nothing to scan: %s", root)
        return []
    return sorted(p for p in root.rglob("*") if p.is_file())


def search_logs_by_directory(directory: str | Path) -> list[Path]:
    """User-facing directory search; fails on a missing directory."""
    return list_log_files(directory, strict=True)
