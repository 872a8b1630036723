"""
Proof-of-possession code.

The server picks an 8-byte window of the file at an offset derived from the
caller's access token and the declared size, and expects the client to send
those bytes back. The derivation must match the server bit for bit:

    offset = int(md5(token).hex()[:16], 16) % size    (0 when size == 0)
    window = file[offset:min(offset + 8, size)]
"""
from dataclasses import dataclass

from .hashing import md5_hex
from .encoding import Base64Encoder


PROOF_VERSION = 'v1'


@dataclass(frozen=True)
class ProofCode:
    """
    Proof code extracted from a file.

    Attributes:
        offset: Start of the window in the file
        data: Bytes actually read (up to 8, fewer near end-of-file)
    """
    offset: int
    data: bytes

    @property
    def encoded(self) -> str:
        """Standard base64 of the window bytes."""
        return Base64Encoder.encode(self.data)


class ProofCodeCalculator:
    """Computes proof codes against a seekable byte source."""

    WINDOW_SIZE = 8
    HASH_PREFIX_CHARS = 16

    def offset(self, secret: str, size: int) -> int:
        """
        Compute the window offset for a secret and declared size.

        Args:
            secret: Session secret (the access token)
            size: Declared file size in bytes

        Returns:
            Offset in ``[0, size)``, or 0 for an empty file

        Raises:
            ValueError: If size is negative
        """
        if size < 0:
            raise ValueError(f"Declared size must be >= 0, got {size}")
        if size == 0:
            return 0
        value = int(md5_hex(secret or '')[:self.HASH_PREFIX_CHARS], 16)
        return value % size

    def window_length(self, offset: int, size: int) -> int:
        """Bytes to read at ``offset``; never past ``size``."""
        return max(0, min(self.WINDOW_SIZE, size - offset))

    async def compute(self, secret: str, size: int, source) -> ProofCode:
        """
        Read the proof window from a seekable source.

        Args:
            secret: Session secret (the access token)
            size: Declared file size in bytes
            source: Object with async ``seek(offset)`` and ``read(n)``

        Returns:
            ProofCode with the bytes actually read
        """
        offset = self.offset(secret, size)
        length = self.window_length(offset, size)
        if length == 0:
            return ProofCode(offset=offset, data=b'')

        await source.seek(offset)
        data = await source.read(length)
        return ProofCode(offset=offset, data=data or b'')
