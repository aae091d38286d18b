from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest


@pytest.fixture
def write_error_log() -> Callable[[Path], None]:
    def _write(path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            "\n".join(
                [
                    "01.02.2024 10:00:00 Storage: Disk full",
                    "01.02.2024 10:00:01:0042 Storage: Disk full",
                    "01.02.2024 10:00:02 Storage: Disk full",
                    "01.02.2024 10:01:00 Api: Upstream timeout",
                    "",
                    "service started",
                    "01.02.2024 10:02:00 Auth: Token expired",
                ]
            )
            + "\n",
            encoding="utf-8",
        )

    return _write


@pytest.fixture
def make_logs() -> Callable[[Path, list[str]], list[Path]]:
    """Create small log files with the given names under a directory."""

    def _make(directory: Path, names: list[str]) -> list[Path]:
        out: list[Path] = []
        for name in names:
            path = directory / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(f"01.02.2024 10:00:00 Test: {name}\n", encoding="utf-8")
            out.append(path)
        return out

    return _make
