"""File credential backend."""

import asyncio
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

from ...core.exceptions import CredentialStorageError

logger = logging.getLogger(__name__)


class FileCredentialBackend:
    """File-based credential backend following maximum separation principle.

    Handles ONLY reading and writing one file per storage key inside a
    directory. Writes go through a temporary file and ``os.replace`` so a
    reader never sees a partially written credential. Files are created with
    mode 0600.
    """

    backend_name = "file"

    def __init__(self, directory: Path):
        """Initialize file credential backend.

        Args:
            directory: Directory holding one file per storage key
        """
        if not directory:
            raise ValueError("Storage directory is required")
        self.directory = Path(directory)

    def _path_for(self, key: str) -> Path:
        if not key or os.sep in key or (os.altsep and os.altsep in key) or key in (".", ".."):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.directory / key

    def _read(self, path: Path) -> Optional[str]:
        try:
            return path.read_text(encoding="utf-8").strip()
        except FileNotFoundError:
            return None

    def _write(self, path: Path, value: str) -> None:
        self.directory.mkdir(mode=0o700, parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.directory, prefix=f".{path.name}.")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(value)
            os.chmod(tmp_name, 0o600)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def _remove(self, path: Path) -> None:
        path.unlink(missing_ok=True)

    async def get(self, key: str) -> Optional[str]:
        path = self._path_for(key)
        try:
            return await asyncio.to_thread(self._read, path)
        except OSError as e:
            logger.error(f"Failed to read credential file {path}: {e}")
            raise CredentialStorageError(
                "Credential file could not be read",
                operation="get",
                backend=self.backend_name,
            ) from e

    async def set(self, key: str, value: str) -> None:
        path = self._path_for(key)
        try:
            await asyncio.to_thread(self._write, path, value)
        except OSError as e:
            logger.error(f"Failed to write credential file {path}: {e}")
            raise CredentialStorageError(
                "Credential file could not be written",
                operation="set",
                backend=self.backend_name,
            ) from e

    async def delete(self, key: str) -> None:
        path = self._path_for(key)
        try:
            await asyncio.to_thread(self._remove, path)
        except OSError as e:
            logger.error(f"Failed to remove credential file {path}: {e}")
            raise CredentialStorageError(
                "Credential file could not be removed",
                operation="delete",
                backend=self.backend_name,
            ) from e
