"""Tests for the async API client."""
import json
import ssl
from unittest.mock import Mock, AsyncMock

import aiohttp
import pytest

from alidrive.core.api import AsyncAPIClient, APIConfig, DriveAPIError, APIErrorCodes
from alidrive.core.exceptions import TransportError


class FakeResponse:
    """Minimal aiohttp response usable as an async context manager."""

    def __init__(self, status=200, body=None):
        self.status = status
        self._text = body if isinstance(body, str) else json.dumps(body if body is not None else {})

    async def text(self):
        return self._text

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False


def client_with(session, token='tok'):
    client = AsyncAPIClient(token)
    client._ensure_session = AsyncMock(return_value=session)
    return client


class TestAsyncAPIClient:
    """Test suite for AsyncAPIClient."""

    @pytest.mark.asyncio
    async def test_request_returns_json(self):
        """Test JSON POST with bearer auth returns the decoded body."""
        session = Mock()
        session.post = Mock(return_value=FakeResponse(200, {'default_drive_id': 'd1'}))
        client = client_with(session)

        result = await client.request('/v2/user/get', {'a': 1})

        assert result == {'default_drive_id': 'd1'}
        args, kwargs = session.post.call_args
        assert args[0] == 'https://api.aliyundrive.com/v2/user/get'
        assert json.loads(kwargs['data']) == {'a': 1}
        assert kwargs['headers']['Authorization'] == 'Bearer tok'

    @pytest.mark.asyncio
    async def test_token_read_at_call_time(self):
        """Test a replaced token is used by the next request."""
        session = Mock()
        session.post = Mock(return_value=FakeResponse(200, {}))
        client = client_with(session, token='old')
        client.access_token = 'new'

        await client.request('/v2/user/get')

        assert session.post.call_args[1]['headers']['Authorization'] == 'Bearer new'

    @pytest.mark.asyncio
    async def test_challenge_code_is_structured(self):
        """Test PreHashMatched surfaces as a structured DriveAPIError."""
        body = {'code': 'PreHashMatched', 'message': 'Pre hash matched.', 'file_id': 'f1'}
        session = Mock()
        session.post = Mock(return_value=FakeResponse(409, body))
        client = client_with(session)

        with pytest.raises(DriveAPIError) as exc_info:
            await client.create_upload({'name': 'x'})

        error = exc_info.value
        assert error.code == APIErrorCodes.PRE_HASH_MATCHED
        assert APIErrorCodes.is_challenge(error.code)
        assert error.status == 409
        assert error.payload == body
        assert isinstance(error, TransportError)

    @pytest.mark.asyncio
    async def test_non_json_error(self):
        """Test a plain-text error body is kept as payload."""
        session = Mock()
        session.post = Mock(return_value=FakeResponse(502, "Bad Gateway"))
        client = client_with(session)

        with pytest.raises(DriveAPIError) as exc_info:
            await client.request('/v2/file/complete')

        assert exc_info.value.code is None
        assert exc_info.value.payload == "Bad Gateway"
        assert not APIErrorCodes.is_challenge(exc_info.value.code)

    @pytest.mark.asyncio
    async def test_network_error(self):
        """Test connection errors become TransportError."""
        session = Mock()
        session.post = Mock(side_effect=aiohttp.ClientConnectionError("refused"))
        client = client_with(session)

        with pytest.raises(TransportError, match="refused"):
            await client.request('/v2/user/get')

    @pytest.mark.asyncio
    async def test_upload_part_sends_raw_body(self):
        """Test part PUT sends raw bytes without Content-Type."""
        session = Mock()
        session.put = Mock(return_value=FakeResponse(200, ""))
        client = client_with(session)

        await client.upload_part('https://oss.example.com/p1?sig=x', b"raw bytes")

        args, kwargs = session.put.call_args
        assert args[0] == 'https://oss.example.com/p1?sig=x'
        assert kwargs['data'] == b"raw bytes"
        assert 'Content-Type' in kwargs['skip_auto_headers']

    @pytest.mark.asyncio
    async def test_upload_part_http_error(self):
        """Test a rejected part PUT raises with the response text."""
        session = Mock()
        session.put = Mock(return_value=FakeResponse(403, "<Error>SignatureDoesNotMatch</Error>"))
        client = client_with(session)

        with pytest.raises(TransportError) as exc_info:
            await client.upload_part('https://oss.example.com/p1', b"x")

        assert "403" in str(exc_info.value)
        assert "SignatureDoesNotMatch" in exc_info.value.payload

    @pytest.mark.asyncio
    async def test_complete_upload_body(self):
        """Test complete request body and endpoint."""
        session = Mock()
        session.post = Mock(return_value=FakeResponse(200, {'file_id': 'f1'}))
        client = client_with(session)

        result = await client.complete_upload('d1', 'f1', 'u1')

        assert result == {'file_id': 'f1'}
        assert session.post.call_args[0][0].endswith('/v2/file/complete')
        assert json.loads(session.post.call_args[1]['data']) == {
            'drive_id': 'd1', 'file_id': 'f1', 'upload_id': 'u1'
        }

    @pytest.mark.asyncio
    async def test_get_drive_id(self):
        """Test default drive id lookup."""
        session = Mock()
        session.post = Mock(return_value=FakeResponse(200, {'default_drive_id': 'd9'}))

        assert await client_with(session).get_drive_id() == 'd9'

    @pytest.mark.asyncio
    async def test_get_drive_id_missing(self):
        """Test missing drive id raises."""
        session = Mock()
        session.post = Mock(return_value=FakeResponse(200, {}))

        with pytest.raises(TransportError):
            await client_with(session).get_drive_id()

    @pytest.mark.asyncio
    async def test_preview_requests(self):
        """Test preview request bodies."""
        session = Mock()
        session.post = Mock(return_value=FakeResponse(200, {'url': 'https://preview'}))
        client = client_with(session)

        await client.get_office_preview_url('d1', 'f1')
        office_body = json.loads(session.post.call_args[1]['data'])
        await client.get_video_preview_play_info('d1', 'f1')
        video_body = json.loads(session.post.call_args[1]['data'])

        assert office_body['access_token'] == 'tok'
        assert video_body['category'] == 'live_transcoding'

    @pytest.mark.asyncio
    async def test_closed_client(self):
        """Test requests fail after close."""
        client = AsyncAPIClient('tok')
        await client.close()

        with pytest.raises(TransportError):
            await client.request('/v2/user/get')


class TestAPIConfig:
    """Test suite for APIConfig."""

    def test_url_for(self):
        """Test endpoint resolution against the API base."""
        config = APIConfig.default()

        assert config.url_for('/v2/file/complete') == 'https://api.aliyundrive.com/v2/file/complete'
        assert config.url_for('https://other.example.com/x') == 'https://other.example.com/x'

    def test_from_options_proxy(self):
        """Test a proxy URL is kept as given."""
        config = APIConfig.from_options(proxy='http://user:pw@proxy:8080')

        assert config.proxy == 'http://user:pw@proxy:8080'
        assert config.verify_ssl is True

    def test_from_options_empty_proxy(self):
        """Test an empty proxy string means a direct connection."""
        assert APIConfig.from_options(proxy='').proxy is None

    def test_insecure(self):
        """Test insecure mode disables certificate verification."""
        config = APIConfig.from_options(insecure=True)

        assert config.get_connector_kwargs()['ssl'] is False

    def test_secure_by_default(self):
        """Test the default connector verifies certificates."""
        assert isinstance(APIConfig().get_connector_kwargs()['ssl'], ssl.SSLContext)

    def test_session_headers(self):
        """Test default and extra session headers."""
        kwargs = APIConfig(extra_headers={'X-Test': '1'}).get_session_kwargs()

        assert kwargs['headers']['Referer'] == 'https://www.aliyundrive.com/'
        assert kwargs['headers']['X-Test'] == '1'

    @pytest.mark.asyncio
    async def test_proxy_used_for_requests(self):
        """Test the configured proxy is passed to API calls and part uploads."""
        session = Mock()
        session.post = Mock(return_value=FakeResponse(200, {}))
        session.put = Mock(return_value=FakeResponse(200, ""))
        client = AsyncAPIClient('tok', APIConfig.from_options(proxy='http://proxy:8080'))
        client._ensure_session = AsyncMock(return_value=session)

        await client.request('/v2/user/get')
        await client.upload_part('https://oss.example.com/p1', b"x")

        assert session.post.call_args[1]['proxy'] == 'http://proxy:8080'
        assert session.put.call_args[1]['proxy'] == 'http://proxy:8080'
