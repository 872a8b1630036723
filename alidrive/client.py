"""
AliDriveClient - High-level async client for AliDrive uploads.

Example:
    >>> async with AliDriveClient(access_token) as drive:
    ...     result = await drive.upload("backup.tar.gz", parent_id="root")
    ...     print(result.file_id)
"""
import logging
from pathlib import Path
from typing import Optional, Any, Dict, Union

from .core.api import AsyncAPIClient, APIConfig
from .core.upload import UploadCoordinator, UploadConfig, UploadResult, ProgressCallback

logger = logging.getLogger(__name__)


class AliDriveClient:
    """
    High-level client.

    Wraps the API client and the upload coordinator. The access token can be
    replaced at any time (for example by an external refresh task); uploads
    read it when they need it.
    """

    def __init__(
        self,
        access_token: str,
        drive_id: Optional[str] = None,
        config: Optional[APIConfig] = None,
        upload_config: Optional[UploadConfig] = None,
        api_client: Optional[AsyncAPIClient] = None
    ):
        """
        Initialize client.

        Args:
            access_token: Bearer token
            drive_id: Drive to use (resolved on connect if omitted)
            config: API configuration
            upload_config: Upload configuration
            api_client: Pre-built API client (tests, shared sessions)
        """
        self._api = api_client or AsyncAPIClient(access_token, config)
        if api_client is not None:
            self._api.access_token = access_token
        self._drive_id = drive_id
        self._upload_config = upload_config or UploadConfig()

    @property
    def api(self) -> AsyncAPIClient:
        return self._api

    @property
    def drive_id(self) -> Optional[str]:
        return self._drive_id

    @property
    def access_token(self) -> Optional[str]:
        return self._api.access_token

    @access_token.setter
    def access_token(self, value: str):
        self._api.access_token = value

    async def __aenter__(self) -> 'AliDriveClient':
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def connect(self) -> str:
        """Resolve the default drive id if not given."""
        if not self._drive_id:
            self._drive_id = await self._api.get_drive_id()
            logger.info(f"Using drive {self._drive_id}")
        return self._drive_id

    async def close(self):
        await self._api.close()

    async def _require_drive(self) -> str:
        if not self._drive_id:
            await self.connect()
        return self._drive_id

    async def upload(
        self,
        source: Union[str, Path, bytes, Any],
        parent_id: str = 'root',
        name: Optional[str] = None,
        size: Optional[int] = None,
        progress_callback: Optional[ProgressCallback] = None,
        rapid_upload: Optional[bool] = None
    ) -> UploadResult:
        """
        Upload a file.

        Args:
            source: Local path, bytes, or async readable (needs name and size)
            parent_id: Parent folder id
            name: Remote name (defaults to the local file name)
            size: Declared size for stream sources
            progress_callback: Receives percent complete after each part
            rapid_upload: Override the configured rapid upload setting

        Returns:
            UploadResult
        """
        drive_id = await self._require_drive()
        coordinator = UploadCoordinator(self._api, drive_id, self._upload_config)
        return await coordinator.upload(
            source,
            parent_id=parent_id,
            name=name,
            size=size,
            progress_callback=progress_callback,
            rapid_upload=rapid_upload
        )

    async def get_office_preview_url(self, file_id: str) -> Dict[str, Any]:
        """Office document preview info for a file."""
        drive_id = await self._require_drive()
        return await self._api.get_office_preview_url(drive_id, file_id)

    async def get_video_preview_play_info(self, file_id: str) -> Dict[str, Any]:
        """Video live-transcoding play info for a file."""
        drive_id = await self._require_drive()
        return await self._api.get_video_preview_play_info(drive_id, file_id)
