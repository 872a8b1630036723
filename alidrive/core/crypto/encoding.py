"""Encoding utilities."""
import base64


class Base64Encoder:
    """Standard Base64 encoder (with padding)."""

    @staticmethod
    def encode(data: bytes) -> str:
        """Encodes bytes to standard padded Base64."""
        return base64.b64encode(data).decode()
