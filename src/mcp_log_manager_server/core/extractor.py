"""Error message extraction from single log lines.

Recognized lines look like::

    01.02.2024 10:00:00 Module: Disk full
    01.02.2024 10:00:00:1234 Worker 3 failed: connection reset

The message is everything after the first ``": "`` that follows the timestamp.
"""

from __future__ import annotations

import re

from .models import ErrorRecord

ERROR_LINE_RE = re.compile(
    r"\d{2}\.\d{2}\.\d{4} \d{2}:\d{2}:\d{2}(?::\d{4})? .*?: (.*)",
    re.DOTALL,
)


def extract_error(line: str) -> str | None:
    """Return the trimmed error message of a line, or None if it does not match."""
    if not line or not line.strip():
        return None

    m = ERROR_LINE_RE.search(line)
    if not m:
        return None
    return m.group(1).strip()


def parse_error_record(line: str) -> ErrorRecord | None:
    message = extract_error(line)
    if message is None:
        return None
    return ErrorRecord(message=message)
