from __future__ import annotations

import logging
from pathlib import Path

import pytest

from mcp_log_manager_server.core import aggregator
from mcp_log_manager_server.core.aggregator import (
    count_duplicate_errors,
    count_errors,
    count_unique_errors,
    scan_directory,
)
from mcp_log_manager_server.core.config import EngineConfig
from mcp_log_manager_server.core.models import CountMode, PerFileStats
from mcp_log_manager_server.core.paths import list_log_files


@pytest.mark.asyncio
async def test_count_unique_and_duplicate_errors(tmp_path: Path, write_error_log) -> None:
    a = tmp_path / "2024.02.01_a.log"
    b = tmp_path / "nested" / "2024.02.02_b.log"
    write_error_log(a)
    b.parent.mkdir()
    b.write_text("01.02.2024 10:00:00 X: one\n", encoding="utf-8")

    assert await count_unique_errors(tmp_path) == {str(a): 3, str(b): 1}
    assert await count_duplicate_errors(tmp_path) == {str(a): 2, str(b): 0}


@pytest.mark.asyncio
async def test_count_errors_accepts_mode_string(tmp_path: Path, write_error_log) -> None:
    a = tmp_path / "a.log"
    write_error_log(a)

    assert await count_errors(tmp_path, "duplicate") == {str(a): 2}


@pytest.mark.asyncio
async def test_count_errors_ignores_non_log_files(tmp_path: Path, write_error_log) -> None:
    write_error_log(tmp_path / "notes.txt")

    assert await count_errors(tmp_path, CountMode.UNIQUE) == {}


@pytest.mark.asyncio
async def test_missing_directory_yields_empty_mapping(tmp_path: Path) -> None:
    assert await count_unique_errors(tmp_path / "missing") == {}


@pytest.mark.asyncio
async def test_failing_file_is_excluded_and_logged(
    tmp_path: Path,
    write_error_log,
    monkeypatch: pytest.MonkeyPatch,
    caplog: pytest.LogCaptureFixture,
) -> None:
    good = tmp_path / "good.log"
    bad = tmp_path / "bad.log"
    write_error_log(good)
    write_error_log(bad)

    real_scan = aggregator.scan_file

    async def flaky_scan(path, **kwargs):
        if Path(path) == bad:
            raise PermissionError(f"denied: {path}")
        return await real_scan(path, **kwargs)

    monkeypatch.setattr(aggregator, "scan_file", flaky_scan)

    with caplog.at_level(logging.WARNING):
        result = await count_unique_errors(tmp_path)

    assert result == {str(good): 3}
    assert set(result) <= {str(p) for p in list_log_files(tmp_path)}
    assert "bad.log" in caplog.text


@pytest.mark.asyncio
async def test_scan_directory_respects_worker_limit(
    tmp_path: Path, make_logs, monkeypatch: pytest.MonkeyPatch
) -> None:
    make_logs(tmp_path, [f"{i}.log" for i in range(8)])
    active = 0
    peak = 0

    real_scan = aggregator.scan_file

    async def tracking_scan(path, **kwargs):
        nonlocal active, peak
        active += 1
        peak = max(peak, active)
        try:
            return await real_scan(path, **kwargs)
        finally:
            active -= 1

    monkeypatch.setattr(aggregator, "scan_file", tracking_scan)

    stats = await scan_directory(tmp_path, config=EngineConfig(max_workers=2))

    assert len(stats) == 8
    assert peak <= 2
    assert all(s == PerFileStats(1, 0) for s in stats.values())


@pytest.mark.asyncio
async def test_invalid_env_max_workers_raises(
    tmp_path: Path, make_logs, monkeypatch: pytest.MonkeyPatch
) -> None:
    make_logs(tmp_path, ["a.log"])
    monkeypatch.setenv("LOG_MANAGER_MAX_WORKERS", "0")

    with pytest.raises(ValueError, match="LOG_MANAGER_MAX_WORKERS"):
        await count_unique_errors(tmp_path)


@pytest.mark.asyncio
async def test_unexpected_per_file_errors_do_not_fail_the_scan(tmp_path: Path, make_logs) -> None:
    make_logs(tmp_path, ["a.log", "b.log"])

    stats = await scan_directory(tmp_path, config=EngineConfig(encoding="no-such-codec"))

    assert stats == {}
