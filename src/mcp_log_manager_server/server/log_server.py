"""MCP server entrypoint (stdio transport).

This module wires together:
- Tools: callable actions (count errors, search, archive, upload)
- Resources: addressable data blobs (help, naming conventions, config)
- Prompts: reusable conversation templates that clients can invoke

Run locally (stdio):
    python -m mcp_log_manager_server.server.log_server
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Sequence
from typing import Any

from mcp.server.fastmcp import FastMCP

from mcp_log_manager_server.prompts.registry import register_prompts
from mcp_log_manager_server.resources.registry import register_resources
from mcp_log_manager_server.tools.logs import (
    archive_logs_impl,
    count_duplicate_errors_impl,
    count_logs_in_period_impl,
    count_unique_errors_impl,
    delete_archives_impl,
    delete_logs_by_period_impl,
    search_logs_by_directory_impl,
    search_logs_by_size_impl,
    upload_directory_impl,
    upload_log_impl,
    upload_logs_impl,
)

LOGGER = logging.getLogger(__name__)


def _configure_logging() -> None:
    """Configure a reasonable default logging setup.

    The MCP client typically captures stderr; keeping logs concise makes them easier to consume.
    """
    level_name = os.getenv("LOG_MANAGER_LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


mcp = FastMCP("log-manager", json_response=True)

register_resources(mcp)
register_prompts(mcp)


@mcp.tool()
async def count_unique_errors(directory: str) -> dict[str, Any]:
    """Count distinct error messages per log file under a directory.

    Returns
    -------
    dict:
        {"result": {path: count}, "execution_time_ms": int} or {"error": str, ...}
    """
    return await count_unique_errors_impl(directory=directory)


@mcp.tool()
async def count_duplicate_errors(directory: str) -> dict[str, Any]:
    """Count repeated error occurrences (occurrences - 1 per message) per log file."""
    return await count_duplicate_errors_impl(directory=directory)


@mcp.tool()
async def search_logs_by_directory(directory: str) -> dict[str, Any]:
    """List every .log file under a directory. Fails if the directory is missing."""
    return await search_logs_by_directory_impl(directory=directory)


@mcp.tool()
async def search_logs_by_size(directory: str, min_kb: int, max_kb: int) -> dict[str, Any]:
    """List log files whose size in KB is within [min_kb, max_kb]."""
    return await search_logs_by_size_impl(directory=directory, min_kb=min_kb, max_kb=max_kb)


@mcp.tool()
async def count_logs_in_period(directory: str, start_date: str, end_date: str) -> dict[str, Any]:
    """Count logs whose filename date (yyyy.MM.dd_...) is within the period.

    Parameters
    ----------
    directory:
        Root directory, searched recursively.
    start_date/end_date:
        ISO dates (YYYY-MM-DD), both inclusive.
    """
    return await count_logs_in_period_impl(
        directory=directory, start_date=start_date, end_date=end_date
    )


@mcp.tool()
async def delete_logs_by_period(directory: str, start_date: str, end_date: str) -> dict[str, Any]:
    """Delete logs from the period. There is no confirmation and no undo."""
    return await delete_logs_by_period_impl(
        directory=directory, start_date=start_date, end_date=end_date
    )


@mcp.tool()
async def archive_logs(directory: str, start_date: str, end_date: str) -> dict[str, Any]:
    """Move logs from the period into <directory>/dd_MM_yyyy-dd_MM_yyyy.zip."""
    return await archive_logs_impl(directory=directory, start_date=start_date, end_date=end_date)


@mcp.tool()
async def delete_archives(directory: str, start_date: str, end_date: str) -> dict[str, Any]:
    """Delete archives whose encoded range lies entirely inside the period."""
    return await delete_archives_impl(directory=directory, start_date=start_date, end_date=end_date)


@mcp.tool()
async def upload_log(file_path: str, server_url: str) -> dict[str, Any]:
    """POST one file as multipart/form-data (field "file") to server_url."""
    return await upload_log_impl(file_path=file_path, server_url=server_url)


@mcp.tool()
async def upload_logs(file_paths: list[str], server_url: str) -> dict[str, Any]:
    """Upload several files concurrently; any failure fails the whole call."""
    return await upload_logs_impl(file_paths=file_paths, server_url=server_url)


@mcp.tool()
async def upload_directory(directory: str, server_url: str) -> dict[str, Any]:
    """Upload every .log file under a directory. Fails when there is nothing to upload."""
    return await upload_directory_impl(directory=directory, server_url=server_url)


def main(argv: Sequence[str] | None = None) -> None:
    """Start the MCP server over stdio."""
    _configure_logging()
    LOGGER.debug("Starting MCP server (transport=stdio)")
    _ = argv or sys.argv[1:]
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
