"""
Custom exceptions for AliDrive upload operations.

This module defines exception classes raised by the upload subsystem.
"""
from typing import Optional, Any


class AliDriveException(Exception):
    """Base exception for all alidrive errors."""

    def __init__(self, message: str, payload: Any = None) -> None:
        """
        Initialize the exception.

        Args:
            message: Error message
            payload: Raw server payload (if available)
        """
        self.payload = payload
        super().__init__(message)


class TransportError(AliDriveException):
    """Network, authentication or HTTP failure reported by the transport."""
    pass


class ProtocolMismatchError(AliDriveException):
    """
    Exception raised when the server answers outside the upload protocol.

    Typically the completion response does not echo the negotiated file id.
    The raw payload is kept for diagnostics and rendered into the message.
    """

    def __init__(
        self,
        message: str,
        payload: Any = None,
        expected_file_id: Optional[str] = None
    ) -> None:
        self.expected_file_id = expected_file_id
        super().__init__(f"{message}: {payload!r}", payload)


class LocalIOError(AliDriveException):
    """Exception raised when temporary local storage cannot be used."""
    pass


class ChallengeSignal(AliDriveException):
    """
    Server asked for a stronger proof of possession.

    Raised and absorbed inside the negotiator; never reaches callers.
    """

    def __init__(self, code: str, payload: Any = None) -> None:
        self.code = code
        super().__init__(f"challenge issued: {code}", payload)
