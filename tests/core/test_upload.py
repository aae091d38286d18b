from __future__ import annotations

from pathlib import Path

import httpx
import pytest

from mcp_log_manager_server.core.errors import UploadError
from mcp_log_manager_server.core.models import UploadRequest
from mcp_log_manager_server.core.upload import upload_directory, upload_log, upload_logs

URL = "https://logs.example.test/upload"


def _recording_client(received: list[httpx.Request], *, fail_for: str | None = None) -> httpx.AsyncClient:
    def handler(request: httpx.Request) -> httpx.Response:
        received.append(request)
        body = request.read()
        if fail_for is not None and fail_for.encode() in body:
            return httpx.Response(503)
        return httpx.Response(201)

    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_upload_log_sends_multipart_file_field(tmp_path: Path) -> None:
    path = tmp_path / "2024.01.01_api.log"
    path.write_text("01.01.2024 10:00:00 Api: boom\n", encoding="utf-8")
    received: list[httpx.Request] = []

    async with _recording_client(received) as client:
        status = await upload_log(path, URL, client=client)

    assert status == 201
    (request,) = received
    assert request.method == "POST"
    assert str(request.url) == URL
    assert request.headers["content-type"].startswith("multipart/form-data")
    body = request.content
    assert b'name="file"' in body
    assert b'filename="2024.01.01_api.log"' in body
    assert b"Api: boom" in body


@pytest.mark.asyncio
async def test_upload_log_missing_file_sends_nothing(tmp_path: Path) -> None:
    received: list[httpx.Request] = []

    async with _recording_client(received) as client:
        with pytest.raises(FileNotFoundError):
            await upload_log(tmp_path / "missing.log", URL, client=client)

    assert received == []


@pytest.mark.asyncio
async def test_upload_log_non_success_status_raises(tmp_path: Path) -> None:
    path = tmp_path / "a.log"
    path.write_text("payload\n", encoding="utf-8")

    async with _recording_client([], fail_for="payload") as client:
        with pytest.raises(UploadError) as excinfo:
            await upload_log(path, URL, client=client)

    assert excinfo.value.status_code == 503
    assert "503" in str(excinfo.value)


@pytest.mark.asyncio
async def test_upload_logs_uploads_every_file(tmp_path: Path, make_logs) -> None:
    files = make_logs(tmp_path, ["a.log", "b.log", "c.log"])
    received: list[httpx.Request] = []

    async with _recording_client(received) as client:
        statuses = await upload_logs(files, URL, client=client)

    assert statuses == {str(f): 201 for f in files}
    assert len(received) == 3


@pytest.mark.asyncio
async def test_upload_logs_fails_when_any_upload_fails(tmp_path: Path, make_logs) -> None:
    files = make_logs(tmp_path, ["a.log", "b.log", "c.log"])
    received: list[httpx.Request] = []

    async with _recording_client(received, fail_for="b.log") as client:
        with pytest.raises(UploadError) as excinfo:
            await upload_logs(files, URL, client=client)

    assert excinfo.value.path == files[1]
    # Siblings are not cancelled or rolled back.
    assert len(received) == 3


@pytest.mark.asyncio
async def test_upload_logs_missing_file_fails_batch(tmp_path: Path, make_logs) -> None:
    files = make_logs(tmp_path, ["a.log"])

    async with _recording_client([]) as client:
        with pytest.raises(FileNotFoundError):
            await upload_logs([*files, tmp_path / "missing.log"], URL, client=client)


@pytest.mark.asyncio
async def test_upload_logs_requires_files() -> None:
    with pytest.raises(ValueError, match="No files"):
        await upload_logs([], URL)


@pytest.mark.asyncio
async def test_upload_directory(tmp_path: Path, make_logs) -> None:
    files = make_logs(tmp_path, ["a.log", "sub/b.log"])
    (tmp_path / "skip.txt").write_text("x", encoding="utf-8")
    received: list[httpx.Request] = []

    async with _recording_client(received) as client:
        statuses = await upload_directory(
            UploadRequest(directory=tmp_path, server_url=URL), client=client
        )

    assert set(statuses) == {str(f) for f in files}


@pytest.mark.asyncio
async def test_upload_log_missing_file_without_client(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError, match="does not exist"):
        await upload_log(tmp_path / "missing.log", URL)
