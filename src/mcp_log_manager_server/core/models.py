"""Core data models for log management."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

LOG_DATE_FORMAT = "%Y.%m.%d"
ARCHIVE_DATE_FORMAT = "%d_%m_%Y"

_LOG_DATE_RE = re.compile(r"^\d{4}\.\d{2}\.\d{2}$")


class CountMode(str, Enum):
    """Which per-file statistic an aggregation reports."""

    UNIQUE = "unique"
    DUPLICATE = "duplicate"


def parse_log_date(path: str | Path) -> date | None:
    """Return the date encoded as the first '_' token of a log file name."""
    token = Path(path).stem.split("_", 1)[0]
    if not _LOG_DATE_RE.match(token):
        return None
    try:
        return datetime.strptime(token, LOG_DATE_FORMAT).date()
    except ValueError:
        return None


@dataclass(frozen=True, slots=True)
class LogFile:
    """A log file as observed on disk."""

    path: Path
    size: int  # bytes
    date: date | None = None

    @classmethod
    def from_path(cls, path: str | Path) -> LogFile:
        p = Path(path)
        return cls(path=p, size=p.stat().st_size, date=parse_log_date(p))

    @property
    def size_kb(self) -> int:
        return self.size // 1024


@dataclass(frozen=True, slots=True)
class ErrorRecord:
    """A single error occurrence extracted from one line."""

    message: str


@dataclass(frozen=True, slots=True)
class PerFileStats:
    """Error statistics for one file."""

    unique_error_count: int
    duplicate_count: int

    @classmethod
    def from_counts(cls, counts: Mapping[str, int]) -> PerFileStats:
        return cls(
            unique_error_count=len(counts),
            duplicate_count=sum(n - 1 for n in counts.values() if n > 1),
        )

    def value(self, mode: CountMode) -> int:
        if mode is CountMode.UNIQUE:
            return self.unique_error_count
        return self.duplicate_count


class DateRange(BaseModel):
    """Directory plus an inclusive [start_date, end_date] window."""

    model_config = ConfigDict(frozen=True)

    directory: Path
    start_date: date
    end_date: date

    @property
    def archive_name(self) -> str:
        start = self.start_date.strftime(ARCHIVE_DATE_FORMAT)
        end = self.end_date.strftime(ARCHIVE_DATE_FORMAT)
        return f"{start}-{end}.zip"

    def contains(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date


class SizeRange(BaseModel):
    """Directory plus an inclusive [min_kb, max_kb] window."""

    model_config = ConfigDict(frozen=True)

    directory: Path
    min_kb: int = Field(ge=0)
    max_kb: int = Field(ge=0)

    def contains(self, size_kb: int) -> bool:
        return self.min_kb <= size_kb <= self.max_kb


class UploadRequest(BaseModel):
    """Upload every log under a directory to a remote endpoint."""

    model_config = ConfigDict(frozen=True)

    directory: Path
    server_url: str = Field(min_length=1)
