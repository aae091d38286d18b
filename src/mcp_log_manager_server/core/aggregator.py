"""Concurrent error accounting across a directory of logs.

Every discovered file is scanned in its own task; a semaphore sized from
``EngineConfig.max_workers`` limits how many files are open at once. A file
that fails to open or read is logged and left out of the result; it never
fails the whole call.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from .config import EngineConfig, resolve_engine_config
from .models import CountMode, PerFileStats
from .paths import list_log_files
from .scanner import scan_file

logger = logging.getLogger(__name__)


async def scan_directory(
    directory: str | Path,
    *,
    config: EngineConfig | None = None,
) -> dict[str, PerFileStats]:
    """Scan every log under ``directory`` and map path -> stats."""
    cfg = resolve_engine_config(config)
    files = list_log_files(directory)
    if not files:
        return {}

    semaphore = asyncio.Semaphore(cfg.max_workers)
    results: dict[str, PerFileStats] = {}

    async def scan_one(path: Path) -> None:
        async with semaphore:
            try:
                stats = await scan_file(
                    path,
                    batch_size=cfg.batch_size,
                    encoding=cfg.encoding,
                    decode_errors=cfg.decode_errors,
                )
            except Exception as exc:
                logger.warning("Error processing file %s: %s", path, exc)
                return
        results[str(path)] = stats

    await asyncio.gather(*(scan_one(p) for p in files))
    logger.debug("Scanned %d/%d files under %s", len(results), len(files), directory)
    return results


async def count_errors(
    directory: str | Path,
    mode: CountMode | str,
    *,
    config: EngineConfig | None = None,
) -> dict[str, int]:
    """Map each readable log file to its unique or duplicate error count."""
    mode = CountMode(mode)
    stats = await scan_directory(directory, config=config)
    return {path: s.value(mode) for path, s in stats.items()}


async def count_unique_errors(
    directory: str | Path, *, config: EngineConfig | None = None
) -> dict[str, int]:
    return await count_errors(directory, CountMode.UNIQUE, config=config)


async def count_duplicate_errors(
    directory: str | Path, *, config: EngineConfig | None = None
) -> dict[str, int]:
    return await count_errors(directory, CountMode.DUPLICATE, config=config)
