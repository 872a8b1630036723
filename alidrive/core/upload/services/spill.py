"""
Spill-to-disk byte store.

Materializes a forward-only stream into a uniquely named temp file while
hashing it in the same read loop, then serves random-access reads from it.
The file only lives for one ``async with`` block.
"""
import os
import tempfile
from pathlib import Path
from typing import Optional, Union
import logging
import aiofiles
import aiofiles.os

from ...crypto import ContentHasher
from ...exceptions import LocalIOError


class SpillFile:
    """
    Temporary seekable copy of an upload stream.

    The temp file is created lazily by ``absorb()`` and removed when the
    context exits, on success and error paths alike.

    Example:
        >>> async with SpillFile(temp_dir) as spill:
        ...     digest = await spill.absorb(stream)
        ...     await spill.seek(100)
        ...     window = await spill.read(8)
    """

    COPY_BUFFER_SIZE = 1024 * 1024
    PREFIX = 'file-'

    def __init__(self, temp_dir: Optional[Union[str, Path]] = None):
        self._temp_dir = str(temp_dir) if temp_dir is not None else None
        self._path: Optional[str] = None
        self._handle = None
        self._length = 0
        self._logger = logging.getLogger('alidrive.upload.spill')

    @property
    def path(self) -> Optional[str]:
        """Temp file path, once created."""
        return self._path

    @property
    def length(self) -> int:
        """Bytes absorbed."""
        return self._length

    async def __aenter__(self) -> 'SpillFile':
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.cleanup()

    async def _create(self) -> None:
        try:
            fd, self._path = tempfile.mkstemp(prefix=self.PREFIX, dir=self._temp_dir)
            os.close(fd)
            self._handle = await aiofiles.open(self._path, 'w+b')
        except OSError as e:
            raise LocalIOError(f"Could not create temp file: {e}") from e
        self._logger.debug(f"Spill file created: {self._path}")

    async def absorb(self, stream) -> ContentHasher:
        """
        Copy a stream into the temp file while hashing it.

        Args:
            stream: Async readable, consumed to the end

        Returns:
            Hasher holding the SHA-1 of everything copied

        Raises:
            LocalIOError: If the temp file cannot be created or written
        """
        if self._handle is None:
            await self._create()

        hasher = ContentHasher()
        while True:
            data = await stream.read(self.COPY_BUFFER_SIZE)
            if not data:
                break
            hasher.update(data)
            try:
                await self._handle.write(data)
            except OSError as e:
                raise LocalIOError(f"Could not write temp file {self._path}: {e}") from e

        try:
            await self._handle.flush()
        except OSError as e:
            raise LocalIOError(f"Could not flush temp file {self._path}: {e}") from e

        self._length = hasher.length
        self._logger.debug(f"Absorbed {self._length} bytes into {self._path}")
        return hasher

    async def seek(self, offset: int) -> int:
        self._require_open()
        try:
            return await self._handle.seek(offset)
        except OSError as e:
            raise LocalIOError(f"Could not seek temp file {self._path}: {e}") from e

    async def rewind(self) -> None:
        """Position the store at offset 0 for a full re-read."""
        await self.seek(0)

    async def read(self, size: int = -1) -> bytes:
        self._require_open()
        try:
            return await self._handle.read(size)
        except OSError as e:
            raise LocalIOError(f"Could not read temp file {self._path}: {e}") from e

    def _require_open(self) -> None:
        if self._handle is None:
            raise LocalIOError("Spill file has not been written yet")

    async def cleanup(self) -> None:
        """Close and delete the temp file (best effort)."""
        if self._handle is not None:
            try:
                await self._handle.close()
            except OSError as e:
                self._logger.warning(f"Could not close temp file {self._path}: {e}")
            self._handle = None

        if self._path is not None:
            try:
                await aiofiles.os.remove(self._path)
                self._logger.debug(f"Spill file removed: {self._path}")
            except FileNotFoundError:
                pass
            except OSError as e:
                self._logger.warning(f"Could not remove temp file {self._path}: {e}")
            self._path = None
