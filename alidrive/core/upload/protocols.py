"""
Protocol definitions for upload module.

Defines the interfaces the upload services depend on, so the HTTP client,
byte sources and callbacks can be swapped in tests.
"""
from typing import Protocol, Dict, Any, Optional, Callable


ProgressCallback = Callable[[int], None]


class AsyncReadable(Protocol):
    """Async byte stream."""

    async def read(self, size: int = -1) -> bytes:
        """
        Read up to ``size`` bytes (all remaining if negative).

        Returns:
            b'' at end of stream
        """
        ...


class DriveAPIProtocol(Protocol):
    """Subset of the API client used by the upload services."""

    access_token: Optional[str]

    async def create_upload(self, body: Dict[str, Any]) -> Dict[str, Any]:
        ...

    async def upload_part(self, upload_url: str, data: bytes) -> None:
        ...

    async def complete_upload(
        self,
        drive_id: str,
        file_id: str,
        upload_id: str
    ) -> Any:
        ...
