"""
Catalog cache store - last fetched snapshot on durable storage.

Provides:
- CacheStore protocol consumed by the refresh pipeline
- FileCacheStore: single file, replaced atomically, mtime = fetch time
- MemoryCacheStore: in-process stand-in with a settable timestamp
"""

import logging
import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Optional, Protocol, Union

from ..core.exceptions import CacheError

logger = logging.getLogger(__name__)


class CacheStore(Protocol):
    """Storage of the most recent raw catalog snapshot."""

    def exists(self) -> bool:
        """Whether a snapshot is stored."""

    def last_modified(self) -> Optional[datetime]:
        """Aware UTC time the stored snapshot was written, None if absent."""

    def read(self) -> bytes:
        """Return the stored snapshot verbatim."""

    def write(self, payload: bytes) -> None:
        """Replace the stored snapshot as a whole."""


class FileCacheStore:
    """
    Snapshot cache backed by one file.

    Writes go to a temporary file in the same directory and are moved into
    place with os.replace(), so readers see either the old or the new
    snapshot and never a partial one. The file's modification time is the
    authoritative "last fetched" marker.
    """

    def __init__(self, path: Union[str, Path]):
        """
        Initialize file cache.

        Args:
            path: Cache file location; parent directories are created on write
        """
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.is_file()

    def last_modified(self) -> Optional[datetime]:
        try:
            mtime = os.path.getmtime(self.path)
        except FileNotFoundError:
            return None
        return datetime.fromtimestamp(mtime, tz=timezone.utc)

    def read(self) -> bytes:
        """
        Read the cached snapshot.

        Raises:
            CacheError: If the file is missing or unreadable
        """
        try:
            payload = self.path.read_bytes()
        except OSError as e:
            raise CacheError(
                f"Can't read catalog cache: {e}",
                details={"path": str(self.path)},
            ) from e

        logger.debug("Loaded catalog cache %s (%d bytes)", self.path, len(payload))
        return payload

    def write(self, payload: bytes) -> None:
        """
        Replace the cached snapshot.

        Raises:
            CacheError: If the file can't be written
        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
            )
        except OSError as e:
            raise CacheError(
                f"Can't write catalog cache: {e}",
                details={"path": str(self.path)},
            ) from e

        try:
            with os.fdopen(fd, "wb") as tmp_file:
                tmp_file.write(payload)
                tmp_file.flush()
                os.fsync(tmp_file.fileno())
            os.replace(tmp_name, self.path)
        except OSError as e:
            Path(tmp_name).unlink(missing_ok=True)
            raise CacheError(
                f"Can't write catalog cache: {e}",
                details={"path": str(self.path)},
            ) from e

        logger.info("Saved catalog cache %s (%d bytes)", self.path, len(payload))


class MemoryCacheStore:
    """
    Snapshot cache held in memory.

    Args:
        payload: Initial snapshot, None for an empty cache
        modified_at: Timestamp of the initial snapshot (defaults to now)
        clock: Source of timestamps for later writes
    """

    def __init__(
        self,
        payload: Optional[bytes] = None,
        modified_at: Optional[datetime] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._payload = payload
        self._modified_at = None
        if payload is not None:
            self._modified_at = modified_at or self._clock()
        self.writes = 0

    def exists(self) -> bool:
        return self._payload is not None

    def last_modified(self) -> Optional[datetime]:
        return self._modified_at

    def read(self) -> bytes:
        if self._payload is None:
            raise CacheError("Catalog cache is empty")
        return self._payload

    def write(self, payload: bytes) -> None:
        self._payload = bytes(payload)
        self._modified_at = self._clock()
        self.writes += 1
