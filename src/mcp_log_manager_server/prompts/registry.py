"""MCP prompt registry.

Prompts are predefined conversation/workflow templates that the client can invoke explicitly.
"""

from __future__ import annotations

from typing import Any

from mcp.server.fastmcp import FastMCP


def register_prompts(mcp: FastMCP) -> None:
    """Register prompt templates on the MCP server."""

    @mcp.prompt()
    def review_error_counts(directory: str) -> list[dict[str, Any]]:
        """Build a prompt that ranks noisy log files by their error counts."""
        return [
            {
                "role": "system",
                "content": (
                    "You are an operations assistant. Report only numbers returned by tools; "
                    "do not invent files or counts."
                ),
            },
            {
                "role": "user",
                "content": (
                    "Review error volume in a log directory. Follow this workflow:\n"
                    f"- Call count_unique_errors with directory={directory}.\n"
                    f"- Call count_duplicate_errors with directory={directory}.\n"
                    "- If either call returns an error, report it and stop.\n"
                    "- Files missing from a result could not be read; list them separately "
                    "if search_logs_by_directory shows them.\n\n"
                    "Return this structure:\n"
                    "1) Top 5 files by unique errors (path, unique, duplicates)\n"
                    "2) Files where duplicates dominate (duplicates > 10x unique)\n"
                    "3) Next actions (1-3 bullets)\n"
                ),
            },
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": "The line grammar used for counting is described here:"},
                    {"type": "resource", "uri": "app://log-manager/conventions"},
                ],
            },
        ]

    @mcp.prompt()
    def cleanup_period(
        directory: str,
        start_date: str,
        end_date: str,
        delete_instead_of_archive: bool = False,
    ) -> list[dict[str, Any]]:
        """Build a prompt for archiving (or deleting) logs from a period."""
        action = "delete_logs_by_period" if delete_instead_of_archive else "archive_logs"
        return [
            {
                "role": "system",
                "content": (
                    "You are a careful operations assistant. Deletions are irreversible; "
                    "always confirm the file count with the user before calling a destructive tool."
                ),
            },
            {
                "role": "user",
                "content": (
                    "Clean up old logs. Follow this workflow:\n"
                    f"- Call count_logs_in_period with directory={directory}, "
                    f"start_date={start_date}, end_date={end_date}.\n"
                    "- If the count is 0, say so and stop.\n"
                    f"- Otherwise ask for confirmation, then call {action} with the same arguments.\n"
                    "- Finally call count_logs_in_period again and confirm it returns 0.\n"
                ),
            },
        ]
