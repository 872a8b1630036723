"""Content hashing helpers backed by pycryptodome."""
from Crypto.Hash import MD5, SHA1


def sha1_hex(data: bytes) -> str:
    """Lowercase hex SHA-1 digest of ``data``."""
    return SHA1.new(data).hexdigest()


def md5_hex(text) -> str:
    """Lowercase hex MD5 digest of a string or bytes."""
    if isinstance(text, str):
        text = text.encode()
    return MD5.new(text).hexdigest()


class ContentHasher:
    """
    Incremental SHA-1 accumulator.
    
    Fed chunk by chunk while the same bytes are written elsewhere.
    """
    
    name = 'sha1'
    
    def __init__(self):
        self._hash = SHA1.new()
        self._length = 0
    
    def update(self, data: bytes) -> None:
        self._hash.update(data)
        self._length += len(data)
    
    @property
    def length(self) -> int:
        """Number of bytes hashed so far."""
        return self._length
    
    def hexdigest(self) -> str:
        return self._hash.hexdigest()
