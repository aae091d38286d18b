"""Engine exceptions.

Builtin exceptions are used where they fit (FileNotFoundError, ValueError, OSError);
the classes below only add what callers need to tell failures apart.
"""

from __future__ import annotations

from pathlib import Path


class DirectoryNotFoundError(FileNotFoundError):
    """Raised by strict directory lookups when the directory is missing."""

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)
        super().__init__(f"The directory '{self.directory}' does not exist.")


class UploadError(RuntimeError):
    """Remote endpoint answered an upload with a non-success status."""

    def __init__(self, path: str | Path, status_code: int) -> None:
        self.path = Path(path)
        self.status_code = status_code
        super().__init__(
            f"Failed to upload log file '{self.path}'. Status code: {status_code}"
        )
