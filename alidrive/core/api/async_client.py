"""
Async AliDrive API client.

Thin authenticated transport used by the upload subsystem. Retries and
token refresh are left to the caller.
"""
import json
import asyncio
import logging
from typing import Dict, Optional, Any
import aiohttp

from .config import APIConfig
from .errors import DriveAPIError
from ..exceptions import TransportError
from ..logging import get_logger


class AsyncAPIClient:
    """
    Asynchronous AliDrive API client.

    Features:
    - Full async/await support
    - Configurable proxy, SSL, timeouts
    - Connection pooling
    - Structured error codes on failed requests

    Example:
        >>> async with AsyncAPIClient(token) as client:
        ...     drive_id = await client.get_drive_id()
    """

    CREATE_UPLOAD = '/adrive/v2/file/createWithFolders'
    COMPLETE_UPLOAD = '/v2/file/complete'
    USER_GET = '/v2/user/get'
    OFFICE_PREVIEW = '/v2/file/get_office_preview_url'
    VIDEO_PREVIEW = '/v2/file/get_video_preview_play_info'

    def __init__(
        self,
        access_token: Optional[str] = None,
        config: Optional[APIConfig] = None
    ):
        """
        Initialize async API client.

        Args:
            access_token: Bearer token used for API calls
            config: API configuration (uses defaults if not provided)
        """
        self._config = config or APIConfig.default()
        self._access_token = access_token
        self._session: Optional[aiohttp.ClientSession] = None
        self._connector: Optional[aiohttp.TCPConnector] = None
        self._closed = False

        self._logger = get_logger('alidrive.api')
        root_logger = logging.getLogger()
        if not root_logger.handlers:
            self._logger.setLevel(self._config.log_level)

    @property
    def access_token(self) -> Optional[str]:
        """Current access token (read at call time)."""
        return self._access_token

    @access_token.setter
    def access_token(self, value: Optional[str]):
        self._access_token = value

    @property
    def config(self) -> APIConfig:
        """Get current configuration."""
        return self._config

    async def __aenter__(self) -> 'AsyncAPIClient':
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure session is created and open."""
        if self._session is None or self._session.closed:
            self._connector = aiohttp.TCPConnector(
                **self._config.get_connector_kwargs()
            )
            self._session = aiohttp.ClientSession(
                connector=self._connector,
                **self._config.get_session_kwargs()
            )
        return self._session

    async def close(self):
        """Close client and release resources."""
        self._closed = True

        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None

        if self._connector and not self._connector.closed:
            await self._connector.close()
            self._connector = None

    def _auth_headers(self) -> Dict[str, str]:
        if not self._access_token:
            return {}
        return {'Authorization': f"Bearer {self._access_token}"}

    def _proxy(self) -> Optional[str]:
        return self._config.proxy

    async def request(
        self,
        endpoint: str,
        body: Optional[Dict[str, Any]] = None
    ) -> Any:
        """
        Make an authenticated JSON POST request.

        Args:
            endpoint: API path (e.g. '/v2/file/complete') or absolute URL
            body: JSON body

        Returns:
            Decoded response data

        Raises:
            DriveAPIError: If the server answers with an error status
            TransportError: If the request cannot be completed
        """
        if self._closed:
            raise TransportError("Client is closed")

        session = await self._ensure_session()
        url = self._config.url_for(endpoint)
        data = json.dumps(body or {})

        self._logger.debug(f"Request to {url}")
        self._logger.debug(f"Request data: {data[:300] if len(data) > 300 else data}")

        try:
            async with session.post(
                url,
                data=data,
                headers={'Content-Type': 'application/json', **self._auth_headers()},
                proxy=self._proxy()
            ) as response:
                response_text = await response.text()
                self._logger.debug(f"Response data: {response_text[:1000] if len(response_text) > 1000 else response_text}")
                result = self._parse_response(response_text)

                if response.status >= 400:
                    error = DriveAPIError.from_response(response.status, result)
                    self._logger.debug(f"API error from {url}: {error}")
                    raise error

                return result
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            self._logger.error(f"Network error: {e}")
            raise TransportError(f"Network error: {e}") from e

    async def upload_part(self, upload_url: str, data: bytes) -> None:
        """
        PUT raw bytes to a pre-signed part URL.

        The body is sent as-is: no JSON envelope and no Content-Type header,
        since the URL signature does not cover one.

        Raises:
            TransportError: If the upload fails
        """
        if self._closed:
            raise TransportError("Client is closed")

        session = await self._ensure_session()

        try:
            async with session.put(
                upload_url,
                data=data,
                skip_auto_headers=['Content-Type'],
                proxy=self._proxy()
            ) as response:
                if response.status >= 400:
                    response_text = await response.text()
                    raise TransportError(
                        f"Part upload failed with HTTP {response.status}",
                        payload=response_text
                    )
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            self._logger.error(f"Network error during part upload: {e}")
            raise TransportError(f"Network error: {e}") from e

    def _parse_response(self, response_text: str) -> Any:
        """Parse API response."""
        if not response_text:
            return {}
        try:
            return json.loads(response_text)
        except json.JSONDecodeError:
            return response_text

    # Convenience methods

    async def get_drive_id(self) -> str:
        """Resolve the user's default drive id."""
        result = await self.request(self.USER_GET)
        drive_id = result.get('default_drive_id') if isinstance(result, dict) else None

        if not drive_id:
            raise TransportError("Could not resolve default drive id", payload=result)

        return drive_id

    async def create_upload(self, body: Dict[str, Any]) -> Dict[str, Any]:
        """Submit a create-upload (negotiation) request."""
        return await self.request(self.CREATE_UPLOAD, body)

    async def complete_upload(
        self,
        drive_id: str,
        file_id: str,
        upload_id: str
    ) -> Any:
        """Commit an upload session."""
        return await self.request(self.COMPLETE_UPLOAD, {
            'drive_id': drive_id,
            'file_id': file_id,
            'upload_id': upload_id,
        })

    async def get_office_preview_url(self, drive_id: str, file_id: str) -> Any:
        """Get an office document preview URL for a file."""
        return await self.request(self.OFFICE_PREVIEW, {
            'drive_id': drive_id,
            'file_id': file_id,
            'access_token': self._access_token,
        })

    async def get_video_preview_play_info(self, drive_id: str, file_id: str) -> Any:
        """Get live-transcoding play info for a video file."""
        return await self.request(self.VIDEO_PREVIEW, {
            'drive_id': drive_id,
            'file_id': file_id,
            'category': 'live_transcoding',
        })
