"""
Pre-hash sampling service.

Hashes a bounded prefix of a stream without losing those bytes for the
consumers that read the stream afterwards.
"""
import logging

from ..models import PrehashSample, PREHASH_SIZE
from ..protocols import AsyncReadable
from ...crypto import sha1_hex
from .file_service import read_up_to


class ReplayStream:
    """
    Composite stream: a buffered prefix followed by the rest of a stream.

    Reads are served from the prefix first and never mix both sources in
    one call, except for a read-all (``size < 0``).
    """

    def __init__(self, prefix: bytes, stream: AsyncReadable):
        self._prefix = prefix
        self._position = 0
        self._stream = stream

    async def read(self, size: int = -1) -> bytes:
        pending = len(self._prefix) - self._position
        if pending > 0:
            if size is None or size < 0:
                data = self._prefix[self._position:]
                self._position = len(self._prefix)
                return data + await self._stream.read(-1)
            take = min(size, pending)
            data = self._prefix[self._position:self._position + take]
            self._position += take
            return data
        return await self._stream.read(size)


class HashSampler:
    """
    Samples the first ``budget`` bytes of a stream for the pre-hash.

    Responsibilities:
    - Buffer at most ``budget`` bytes from the original stream
    - Hash the buffer (SHA-1, hex)
    - Hand back a stream that replays the buffer before the remainder
    """

    def __init__(self, budget: int = PREHASH_SIZE):
        if budget < 0:
            raise ValueError("Sample budget must be >= 0")
        self._budget = budget
        self._logger = logging.getLogger('alidrive.upload.sampler')

    @property
    def budget(self) -> int:
        return self._budget

    async def sample(self, stream: AsyncReadable) -> PrehashSample:
        """
        Sample a stream.

        Args:
            stream: Async readable; may be shorter than the budget

        Returns:
            PrehashSample whose ``stream`` must be used instead of the original
        """
        data = await read_up_to(stream, self._budget)
        pre_hash = sha1_hex(data)
        self._logger.debug(f"Pre-hash over {len(data)} bytes: {pre_hash}")
        return PrehashSample(
            data=data,
            pre_hash=pre_hash,
            stream=ReplayStream(data, stream)
        )
