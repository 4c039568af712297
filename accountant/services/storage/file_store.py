"""
Local File Storage Implementation

DESIGN DECISION: Each key is one file in a data directory. This is the
desktop equivalent of an application-settings blob store:
1. No database setup required
2. The user can back up or inspect the file directly
3. One fixed key holding the whole collection is fine at personal scale

Writes go to a temporary file in the same directory and are moved into
place with os.replace, so a crash mid-write never leaves a half-written
value behind.
"""

import os
import tempfile
from pathlib import Path
from typing import Optional

from tenacity import (
    RetryError,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from accountant.logger import get_logger
from accountant.services.storage.interface import BlobStoreInterface, StorageError


logger = get_logger(__name__)


class FileBlobStore(BlobStoreInterface):
    """
    File-per-key blob storage.

    Values live at `<directory>/<key>.json`.
    """

    def __init__(self, directory: Path):
        self._directory = Path(directory)

    @property
    def directory(self) -> Path:
        return self._directory

    def path_for(self, key: str) -> Path:
        """File path holding the value of `key`."""
        if not key or "/" in key or "\\" in key or key in {".", ".."}:
            raise StorageError(f"Invalid storage key: {key!r}")
        return self._directory / f"{key}.json"

    def get(self, key: str) -> Optional[bytes]:
        path = self.path_for(key)
        try:
            return path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.error("blob_read_failed", key=key, error=str(e))
            raise StorageError(f"Failed to read {path}: {e}") from e

    def set(self, key: str, value: bytes) -> None:
        path = self.path_for(key)
        try:
            self._write_atomic(path, value)
        except RetryError as e:
            cause = e.last_attempt.exception()
            logger.error("blob_write_failed", key=key, error=str(cause))
            raise StorageError(f"Failed to write {path}: {cause}") from cause

    def remove(self, key: str) -> bool:
        path = self.path_for(key)
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            raise StorageError(f"Failed to remove {path}: {e}") from e
        return True

    @retry(
        retry=retry_if_exception_type(OSError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.1, min=0.1, max=1),
    )
    def _write_atomic(self, path: Path, value: bytes) -> None:
        """Write `value` to a temp file and move it over `path`."""
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.stem}-",
            suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(value)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
