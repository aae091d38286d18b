"""Per-file error statistics."""

from __future__ import annotations

from collections import Counter
from collections.abc import AsyncIterator
from pathlib import Path

import aiofiles

from .extractor import extract_error
from .models import PerFileStats

DEFAULT_BATCH_SIZE = 1000


async def iter_line_batches(
    path: str | Path,
    *,
    batch_size: int = DEFAULT_BATCH_SIZE,
    encoding: str = "utf-8",
    decode_errors: str = "replace",
) -> AsyncIterator[list[str]]:
    """Yield lists of up to ``batch_size`` non-blank lines."""
    if batch_size < 1:
        raise ValueError("batch_size must be >= 1")

    batch: list[str] = []
    async with aiofiles.open(path, encoding=encoding, errors=decode_errors) as f:
        async for line in f:
            if not line.strip():
                continue
            batch.append(line)
            if len(batch) >= batch_size:
                yield batch
                batch = []
    if batch:
        yield batch


async def count_messages(
    path: str | Path,
    *,
    batch_size: int = DEFAULT_BATCH_SIZE,
    encoding: str = "utf-8",
    decode_errors: str = "replace",
) -> Counter[str]:
    """Return occurrences per extracted error message."""
    counts: Counter[str] = Counter()
    async for batch in iter_line_batches(
        path, batch_size=batch_size, encoding=encoding, decode_errors=decode_errors
    ):
        for line in batch:
            message = extract_error(line)
            if message is not None:
                counts[message] += 1
    return counts


async def scan_file(
    path: str | Path,
    *,
    batch_size: int = DEFAULT_BATCH_SIZE,
    encoding: str = "utf-8",
    decode_errors: str = "replace",
) -> PerFileStats:
    """Read a whole file and compute its unique/duplicate error counts.

    Open and read errors propagate; nothing is returned for a file that fails midway.
    """
    counts = await count_messages(
        path, batch_size=batch_size, encoding=encoding, decode_errors=decode_errors
    )
    return PerFileStats.from_counts(counts)
