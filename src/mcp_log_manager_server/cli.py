from __future__ import annotations

import argparse
import asyncio
import json
import sys
from collections.abc import Sequence
from datetime import date
from typing import Any

from mcp_log_manager_server.core.aggregator import count_errors
from mcp_log_manager_server.core.archive import (
    archive_logs,
    count_in_period,
    delete_archives_in_range,
    delete_by_period,
    files_in_size_range,
)
from mcp_log_manager_server.core.models import CountMode, DateRange, SizeRange, UploadRequest
from mcp_log_manager_server.core.paths import search_logs_by_directory
from mcp_log_manager_server.core.upload import upload_directory, upload_logs


def _parse_date(s: str) -> date:
    try:
        return date.fromisoformat(s)
    except ValueError as e:
        raise argparse.ArgumentTypeError("dates must look like YYYY-MM-DD (e.g., 2024-01-31)") from e


def _date_range(args: argparse.Namespace) -> DateRange:
    return DateRange(directory=args.directory, start_date=args.start, end_date=args.end)


def _add_period(p: argparse.ArgumentParser) -> None:
    p.add_argument("directory")
    p.add_argument("--start", type=_parse_date, required=True, help="YYYY-MM-DD (inclusive)")
    p.add_argument("--end", type=_parse_date, required=True, help="YYYY-MM-DD (inclusive)")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Count errors in, search, archive and upload log files.")
    sub = p.add_subparsers(dest="command", required=True)

    errors = sub.add_parser("errors", help="Per-file error counts")
    errors.add_argument("directory")
    errors.add_argument("--mode", choices=[m.value for m in CountMode], default=CountMode.UNIQUE.value)

    search = sub.add_parser("search", help="List logs under a directory")
    search.add_argument("directory")

    size = sub.add_parser("size", help="List logs within a size range")
    size.add_argument("directory")
    size.add_argument("--min-kb", type=int, default=0)
    size.add_argument("--max-kb", type=int, required=True)

    _add_period(sub.add_parser("count", help="Count logs in a period"))
    _add_period(sub.add_parser("delete", help="Delete logs in a period (irreversible)"))
    _add_period(sub.add_parser("archive", help="Zip logs in a period and remove the originals"))
    _add_period(sub.add_parser("delete-archives", help="Delete archives nested in a period"))

    upload = sub.add_parser("upload", help="Upload files as multipart/form-data")
    upload.add_argument("url")
    upload.add_argument("files", nargs="+")

    upload_dir = sub.add_parser("upload-dir", help="Upload every log under a directory")
    upload_dir.add_argument("directory")
    upload_dir.add_argument("url")
    return p


def _run(args: argparse.Namespace) -> Any:
    if args.command == "errors":
        return asyncio.run(count_errors(args.directory, args.mode))
    if args.command == "search":
        return [str(f) for f in search_logs_by_directory(args.directory)]
    if args.command == "size":
        rng = SizeRange(directory=args.directory, min_kb=args.min_kb, max_kb=args.max_kb)
        return [str(f) for f in files_in_size_range(rng)]
    if args.command == "count":
        return count_in_period(_date_range(args))
    if args.command == "delete":
        return [str(f) for f in delete_by_period(_date_range(args))]
    if args.command == "archive":
        archive = archive_logs(_date_range(args))
        return str(archive) if archive is not None else None
    if args.command == "delete-archives":
        return [str(f) for f in delete_archives_in_range(_date_range(args))]
    if args.command == "upload":
        return asyncio.run(upload_logs(args.files, args.url))
    if args.command == "upload-dir":
        request = UploadRequest(directory=args.directory, server_url=args.url)
        return asyncio.run(upload_directory(request))
    raise ValueError(f"Unknown command: {args.command}")


def main(argv: Sequence[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    try:
        result = _run(args)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        raise SystemExit(2)

    print(json.dumps(result, indent=2))


if __name__ == "__main__":
    main()
