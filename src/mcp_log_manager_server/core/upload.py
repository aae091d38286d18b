"""Upload log files to a remote endpoint as multipart/form-data."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from contextlib import asynccontextmanager
from pathlib import Path

import httpx

from .config import EngineConfig, resolve_engine_config
from .errors import UploadError
from .models import UploadRequest
from .paths import list_log_files

logger = logging.getLogger(__name__)

UPLOAD_FIELD = "file"


@asynccontextmanager
async def _client_scope(client: httpx.AsyncClient | None, *, timeout: float):
    """Use the caller's client, or own a fresh one for the duration."""
    if client is not None:
        yield client
        return
    async with httpx.AsyncClient(timeout=timeout) as owned:
        yield owned


async def _post_file(client: httpx.AsyncClient, path: Path, url: str) -> int:
    if not path.is_file():
        raise FileNotFoundError(f"The file '{path}' does not exist.")

    # httpx reads the handle in chunks while sending the multipart body.
    with path.open("rb") as f:
        response = await client.post(url, files={UPLOAD_FIELD: (path.name, f)})
    if not response.is_success:
        raise UploadError(path, response.status_code)
    logger.debug("Uploaded %s -> %s (%s)", path, url, response.status_code)
    return response.status_code


async def upload_log(
    path: str | Path,
    url: str,
    *,
    client: httpx.AsyncClient | None = None,
    config: EngineConfig | None = None,
) -> int:
    """Upload one file and return the response status code."""
    cfg = resolve_engine_config(config)
    async with _client_scope(client, timeout=cfg.upload_timeout) as c:
        return await _post_file(c, Path(path), url)


async def upload_logs(
    paths: Iterable[str | Path],
    url: str,
    *,
    client: httpx.AsyncClient | None = None,
    config: EngineConfig | None = None,
) -> dict[str, int]:
    """Upload several files concurrently to the same endpoint.

    The first failure (missing file or non-success status) is raised once all
    started uploads have settled; uploads that already succeeded stay uploaded.
    """
    files = [Path(p) for p in paths]
    if not files:
        raise ValueError("No files provided for upload.")

    cfg = resolve_engine_config(config)
    semaphore = asyncio.Semaphore(cfg.upload_max_concurrency)

    async with _client_scope(client, timeout=cfg.upload_timeout) as c:

        async def upload_one(path: Path) -> int:
            async with semaphore:
                return await _post_file(c, path, url)

        results = await asyncio.gather(
            *(upload_one(p) for p in files), return_exceptions=True
        )

    statuses: dict[str, int] = {}
    for path, result in zip(files, results):
        if isinstance(result, BaseException):
            logger.warning("Upload failed for %s: %s", path, result)
            raise result
        statuses[str(path)] = result
    return statuses


async def upload_directory(
    request: UploadRequest,
    *,
    client: httpx.AsyncClient | None = None,
    config: EngineConfig | None = None,
) -> dict[str, int]:
    """Upload every log under ``request.directory``."""
    files = list_log_files(request.directory)
    return await upload_logs(files, request.server_url, client=client, config=config)
