"""AliDrive API error codes and exceptions."""
from typing import Dict, Any, Optional

from ...exceptions import TransportError


class APIErrorCodes:
    """AliDrive API error codes."""

    PRE_HASH_MATCHED = 'PreHashMatched'

    # Codes that ask the client to resubmit with a stronger proof
    CHALLENGE_CODES = frozenset({PRE_HASH_MATCHED})

    ERROR_CODES: Dict[str, str] = {
        'PreHashMatched': 'The pre-hash matched an existing object, prove full possession.',
        'AccessTokenInvalid': 'The access token is invalid or expired.',
        'ForbiddenNoPermission.File': 'No permission to access the file.',
        'NotFound.File': 'The specified file was not found.',
        'NotFound.UploadId': 'The upload session was not found or has expired.',
        'InvalidParameter.ProofCode': 'The proof code does not match the file content.',
        'QuotaExhausted.Drive': 'The drive has no space left.',
        'TooManyRequests': 'Request rate limit exceeded, try again later.',
    }

    @classmethod
    def get_message(cls, code: Optional[str]) -> str:
        """Gets error message for error code."""
        if not code:
            return "Unknown error"
        return cls.ERROR_CODES.get(code, f"Unknown error: {code}")

    @classmethod
    def is_challenge(cls, code: Optional[str]) -> bool:
        """Returns True if the code requests a full-hash resubmission."""
        return code in cls.CHALLENGE_CODES


class DriveAPIError(TransportError):
    """Exception raised for structured AliDrive API errors."""

    def __init__(
        self,
        code: Optional[str],
        message: Optional[str] = None,
        status: int = 0,
        payload: Any = None
    ):
        self.code = code
        self.status = status
        self.message = message or APIErrorCodes.get_message(code)
        super().__init__(f"{code} ({status}): {self.message}", payload)

    @classmethod
    def from_response(cls, status: int, payload: Any) -> 'DriveAPIError':
        """Build an error from an HTTP status and decoded body."""
        if isinstance(payload, dict):
            return cls(
                payload.get('code'),
                payload.get('message'),
                status=status,
                payload=payload
            )
        return cls(None, f"HTTP {status}", status=status, payload=payload)
