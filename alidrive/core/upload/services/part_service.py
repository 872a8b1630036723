"""
Part upload service.

Streams fixed-size slices of the source to the server-issued part URLs.
"""
from typing import Optional, Sequence
import logging
import time

from ..models import PartInfo, DEFAULT_PART_SIZE
from ..protocols import AsyncReadable, DriveAPIProtocol, ProgressCallback
from .file_service import read_up_to


class ChunkedTransferExecutor:
    """
    Uploads parts sequentially.

    Responsibilities:
    - Read up to ``part_size`` bytes per part from the source
    - PUT each slice raw to its pre-signed URL, in part number order
    - Report integer percent progress after each part

    A failed part aborts the transfer; the part URLs stay valid on the server
    until the session expires.
    """

    def __init__(
        self,
        api_client: DriveAPIProtocol,
        part_size: int = DEFAULT_PART_SIZE
    ):
        """
        Initialize executor.

        Args:
            api_client: Client providing ``upload_part(url, data)``
            part_size: Bytes per part
        """
        if part_size <= 0:
            raise ValueError("Part size must be positive")
        self._api = api_client
        self._part_size = part_size
        self._logger = logging.getLogger('alidrive.upload.part')

    @property
    def part_size(self) -> int:
        return self._part_size

    @staticmethod
    def progress_percent(index: int, part_count: int) -> Optional[int]:
        """
        Percent complete after ``index`` parts (1-based).

        Returns None when there is nothing to divide by.
        """
        if part_count <= 0:
            return None
        return min(100, index * 100 // part_count)

    async def transfer(
        self,
        parts: Sequence[PartInfo],
        source: AsyncReadable,
        part_count: int,
        progress_callback: Optional[ProgressCallback] = None
    ) -> int:
        """
        Upload all parts.

        Args:
            parts: Server-issued parts with upload URLs
            source: Async readable positioned at offset 0
            part_count: Parts requested at negotiation (progress denominator)
            progress_callback: Called with percent after each part

        Returns:
            Number of parts uploaded
        """
        ordered = sorted(parts, key=lambda part: part.part_number)
        total_mb = (len(ordered) * self._part_size) / (1024 * 1024)
        self._logger.info(f"Uploading {len(ordered)} parts (up to {total_mb:.1f} MB)")

        uploaded = 0
        for index, part in enumerate(ordered, start=1):
            data = await read_up_to(source, self._part_size)
            size_kb = len(data) / 1024
            start = time.time()
            self._logger.debug(f"Uploading part {part.part_number} ({size_kb:.1f} KB)")

            try:
                await self._api.upload_part(part.upload_url, data)
            except Exception as e:
                self._logger.error(f"Part {part.part_number} failed after {time.time() - start:.2f}s: {e}")
                raise

            elapsed = time.time() - start
            speed_kbps = (size_kb / elapsed) if elapsed > 0 else 0
            self._logger.debug(f"Part {part.part_number} uploaded in {elapsed:.2f}s ({speed_kbps:.1f} KB/s)")
            uploaded += 1

            percent = self.progress_percent(index, part_count)
            if percent is not None and progress_callback:
                progress_callback(percent)

        return uploaded
