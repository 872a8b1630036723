"""
File validation and byte source services.

Single Responsibility: Each class handles one specific task.
"""
import asyncio
import inspect
import io
from pathlib import Path
from typing import Tuple, Optional, Union, Any
import logging
import aiofiles

from ..protocols import AsyncReadable


async def read_up_to(stream: AsyncReadable, size: int) -> bytes:
    """
    Read until ``size`` bytes are collected or the stream ends.

    Async readers may return short reads; this loops over them.
    """
    if size <= 0:
        return b''
    chunks = []
    remaining = size
    while remaining > 0:
        data = await stream.read(remaining)
        if not data:
            break
        chunks.append(data)
        remaining -= len(data)
    return b''.join(chunks)


class FileValidator:
    """
    Validates files before upload.

    Responsibilities:
    - Check file existence
    - Verify file is not a directory
    - Get file size
    """

    def validate(self, file_path: Union[str, Path]) -> Tuple[Path, int]:
        """
        Validate a file for upload.

        Args:
            file_path: Path to the file

        Returns:
            Tuple of (validated Path, file size in bytes)

        Raises:
            FileNotFoundError: If file doesn't exist
            ValueError: If path is not a regular file
        """
        path = Path(file_path) if isinstance(file_path, str) else file_path

        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        if not path.is_file():
            raise ValueError(f"Path is not a file: {path}")

        file_size = path.stat().st_size

        return path, file_size


class BytesSource:
    """In-memory async byte source."""

    def __init__(self, data: bytes):
        self._buffer = io.BytesIO(data)

    async def read(self, size: int = -1) -> bytes:
        return self._buffer.read(size)

    async def seek(self, offset: int) -> int:
        return self._buffer.seek(offset)


class SyncReaderSource:
    """
    Async adapter for a blocking binary reader (``open(path, 'rb')``, ``io.BytesIO``).

    Reads run in the default executor so a slow disk does not stall the loop.
    """

    def __init__(self, reader):
        self._reader = reader

    async def read(self, size: int = -1) -> bytes:
        loop = asyncio.get_running_loop()
        data = await loop.run_in_executor(None, self._reader.read, size)
        if isinstance(data, str):
            raise TypeError("Upload streams must be opened in binary mode")
        return data

    @staticmethod
    def remaining_size(reader) -> Optional[int]:
        """Bytes left from the current position, or None if not seekable."""
        seekable = getattr(reader, 'seekable', None)
        if seekable is None or not seekable():
            return None
        position = reader.tell()
        end = reader.seek(0, io.SEEK_END)
        reader.seek(position)
        return end - position


class UploadSource:
    """
    Resolves what the caller passed to ``upload()`` into an async stream.

    Accepts a path (opened with aiofiles), raw bytes, an async readable, or a
    blocking binary file object. Async streams need an explicit name and size.

    Example:
        >>> async with UploadSource("report.pdf") as src:
        ...     data = await src.stream.read(1024)
    """

    def __init__(
        self,
        source: Any,
        name: Optional[str] = None,
        size: Optional[int] = None,
        validator: Optional[FileValidator] = None
    ):
        self._source = source
        self._validator = validator or FileValidator()
        self._handle = None
        self._logger = logging.getLogger('alidrive.upload.file')
        self.name = name
        self.size = size
        self.stream = None

    async def __aenter__(self) -> 'UploadSource':
        source = self._source

        if isinstance(source, (str, Path)):
            path, file_size = self._validator.validate(source)
            self._handle = await aiofiles.open(path, 'rb')
            self.stream = self._handle
            self.name = self.name or path.name
            if self.size is None:
                self.size = file_size
            self._logger.debug(f"Opened {path} ({self.size} bytes)")
        elif isinstance(source, (bytes, bytearray, memoryview)):
            data = bytes(source)
            self.stream = BytesSource(data)
            if self.size is None:
                self.size = len(data)
        elif isinstance(source, io.TextIOBase):
            raise TypeError("Upload streams must be opened in binary mode")
        elif hasattr(source, 'read') and inspect.iscoroutinefunction(source.read):
            self.stream = source
        elif hasattr(source, 'read'):
            self.stream = SyncReaderSource(source)
            if self.size is None:
                self.size = SyncReaderSource.remaining_size(source)
            if not self.name and isinstance(getattr(source, 'name', None), str):
                self.name = Path(source.name).name
        else:
            raise TypeError(f"Unsupported upload source: {type(source).__name__}")

        if not self.name:
            raise ValueError("A file name is required for stream uploads")
        if self.size is None:
            raise ValueError("A declared size is required for stream uploads")
        if self.size < 0:
            raise ValueError(f"Declared size must be >= 0, got {self.size}")

        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self._handle is not None:
            await self._handle.close()
            self._handle = None
