"""MCP tool implementations.

This module contains the *implementation* behind the exposed MCP tools.
Keep this layer thin: validate inputs, translate them into core calls, time
each call, and return JSON-serializable data structures. Failures never
escape; they become ``{"error": ..., "execution_time_ms": 0}``.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Awaitable, Callable, Sequence
from datetime import date
from pathlib import Path
from typing import Any

from mcp_log_manager_server.core.aggregator import count_duplicate_errors, count_unique_errors
from mcp_log_manager_server.core.archive import (
    archive_logs,
    count_in_period,
    delete_archives_in_range,
    delete_by_period,
    files_in_size_range,
)
from mcp_log_manager_server.core.models import DateRange, SizeRange, UploadRequest
from mcp_log_manager_server.core.paths import search_logs_by_directory
from mcp_log_manager_server.core.upload import upload_directory, upload_log, upload_logs

logger = logging.getLogger(__name__)


def _paths(paths: Sequence[Path]) -> list[str]:
    return [str(p) for p in paths]


def _date_range(directory: str, start_date: str | date, end_date: str | date) -> DateRange:
    return DateRange(directory=directory, start_date=start_date, end_date=end_date)


async def _timed(call: Callable[[], Awaitable[Any]]) -> dict[str, Any]:
    """Run ``call`` and wrap its result (or failure) with the elapsed time."""
    started = time.perf_counter()
    try:
        result = await call()
    except Exception as exc:
        logger.warning("Operation failed: %s", exc)
        return {"error": str(exc), "execution_time_ms": 0}
    elapsed_ms = int((time.perf_counter() - started) * 1000)
    return {"result": result, "execution_time_ms": elapsed_ms}


async def count_unique_errors_impl(*, directory: str) -> dict[str, Any]:
    return await _timed(lambda: count_unique_errors(directory))


async def count_duplicate_errors_impl(*, directory: str) -> dict[str, Any]:
    return await _timed(lambda: count_duplicate_errors(directory))


async def search_logs_by_directory_impl(*, directory: str) -> dict[str, Any]:
    async def call() -> list[str]:
        return _paths(search_logs_by_directory(directory))

    return await _timed(call)


async def search_logs_by_size_impl(*, directory: str, min_kb: int, max_kb: int) -> dict[str, Any]:
    async def call() -> list[str]:
        rng = SizeRange(directory=directory, min_kb=min_kb, max_kb=max_kb)
        return _paths(files_in_size_range(rng))

    return await _timed(call)


async def count_logs_in_period_impl(
    *, directory: str, start_date: str, end_date: str
) -> dict[str, Any]:
    async def call() -> int:
        return count_in_period(_date_range(directory, start_date, end_date))

    return await _timed(call)


async def delete_logs_by_period_impl(
    *, directory: str, start_date: str, end_date: str
) -> dict[str, Any]:
    async def call() -> list[str]:
        return _paths(delete_by_period(_date_range(directory, start_date, end_date)))

    return await _timed(call)


async def archive_logs_impl(*, directory: str, start_date: str, end_date: str) -> dict[str, Any]:
    async def call() -> str | None:
        archive = archive_logs(_date_range(directory, start_date, end_date))
        return str(archive) if archive is not None else None

    return await _timed(call)


async def delete_archives_impl(*, directory: str, start_date: str, end_date: str) -> dict[str, Any]:
    async def call() -> list[str]:
        return _paths(delete_archives_in_range(_date_range(directory, start_date, end_date)))

    return await _timed(call)


async def upload_log_impl(*, file_path: str, server_url: str) -> dict[str, Any]:
    return await _timed(lambda: upload_log(file_path, server_url))


async def upload_logs_impl(*, file_paths: Sequence[str], server_url: str) -> dict[str, Any]:
    return await _timed(lambda: upload_logs(file_paths, server_url))


async def upload_directory_impl(*, directory: str, server_url: str) -> dict[str, Any]:
    async def call() -> dict[str, int]:
        request = UploadRequest(directory=directory, server_url=server_url)
        return await upload_directory(request)

    return await _timed(call)
