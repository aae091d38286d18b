"""MCP resource registry.

Resources are addressable by URI and can be fetched by the MCP client on demand.
"""

from __future__ import annotations

import asyncio
import os
from dataclasses import asdict
from pathlib import Path
from typing import Any

from mcp.server.fastmcp import FastMCP

from mcp_log_manager_server.core.config import resolve_engine_config
from mcp_log_manager_server.core.extractor import ERROR_LINE_RE
from mcp_log_manager_server.core.paths import LOG_SUFFIX, list_log_files

BASE_DIR_ENV = "LOG_MANAGER_BASE_DIR"
TEXT_ENCODING = "utf-8"
TEXT_ERRORS = "replace"


def _base_dir() -> Path:
    """Return the resolved base directory for file resources."""
    raw = os.getenv(BASE_DIR_ENV, os.getcwd())
    return Path(raw).resolve()


def _safe_resolve(path: str) -> Path:
    """Resolve a path under the configured base directory."""
    base = _base_dir()
    p = Path(path).expanduser()
    if not p.is_absolute():
        p = base / p
    p = p.resolve()
    if base not in p.parents and p != base:
        raise ValueError("Path escapes base dir")
    return p


def _resolve_log_path(path: str) -> Path:
    """Resolve and validate a log file path."""
    resolved = _safe_resolve(path)
    if not resolved.is_file():
        raise FileNotFoundError(f"File not found: {resolved}")
    if resolved.suffix != LOG_SUFFIX:
        raise ValueError(f"File type not allowed. Allowed: {LOG_SUFFIX}.")
    return resolved


def _read_text(path: Path) -> str:
    return path.read_text(encoding=TEXT_ENCODING, errors=TEXT_ERRORS)


def register_resources(mcp: FastMCP) -> None:
    """Register resource handlers on the MCP server."""

    @mcp.resource("app://log-manager/help")
    def help_resource() -> str:
        """Return a short list of available resource URIs."""
        base = _base_dir()
        return (
            "Resources:\n"
            "- app://log-manager/help\n"
            "- app://log-manager/conventions\n"
            "- app://log-manager/config\n"
            "- app://log-manager/examples/sample-log\n"
            f"- log://{{path}} (restricted to {BASE_DIR_ENV}; allowed: {LOG_SUFFIX})\n"
            f"- logs://{{directory}} (lists {LOG_SUFFIX} files under a directory)\n"
            f"\nBase directory: {base}\n"
        )

    @mcp.resource("app://log-manager/conventions")
    def conventions() -> dict[str, str]:
        """Describe the file naming and line grammars the tools rely on."""
        return {
            "log_file_name": "yyyy.MM.dd_<anything>.log (e.g., 2024.01.31_api.log)",
            "archive_file_name": "dd_MM_yyyy-dd_MM_yyyy.zip (e.g., 01_01_2024-31_01_2024.zip)",
            "error_line_pattern": ERROR_LINE_RE.pattern,
            "error_line_example": "01.02.2024 10:00:00 Module: Disk full",
        }

    @mcp.resource("app://log-manager/config")
    def engine_config() -> dict[str, Any]:
        """Return the effective engine configuration (env overrides applied)."""
        return asdict(resolve_engine_config())

    @mcp.resource("app://log-manager/examples/sample-log")
    def sample_log() -> str:
        """Return a tiny sample log for demos and tests."""
        return (
            "01.02.2024 10:00:00 Storage: Disk full\n"
            "01.02.2024 10:00:05:0042 Storage: Disk full\n"
            "01.02.2024 10:01:00 Api: Upstream timeout\n"
            "service started\n"
        )

    @mcp.resource("log://{path}")
    async def read_log(path: str) -> str:
        """Return the full contents of a log within LOG_MANAGER_BASE_DIR."""
        p = _resolve_log_path(path)
        return await asyncio.to_thread(_read_text, p)

    @mcp.resource("logs://{directory}")
    async def list_logs(directory: str) -> list[str]:
        """List log files under a directory within LOG_MANAGER_BASE_DIR."""
        root = _safe_resolve(directory)
        files = await asyncio.to_thread(list_log_files, root, strict=True)
        return [str(f) for f in files]
