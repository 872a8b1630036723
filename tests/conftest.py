"""Pytest fixtures for alidrive tests."""
import copy

import pytest

from alidrive.core.api.errors import DriveAPIError, APIErrorCodes
from alidrive.core.exceptions import TransportError


class TrickleStream:
    """Async stream returning at most ``chunk`` bytes per read and counting consumption."""

    def __init__(self, data: bytes, chunk: int = 1 << 30):
        self._data = data
        self._position = 0
        self._chunk = chunk
        self.consumed = 0

    async def read(self, size: int = -1) -> bytes:
        if size is None or size < 0:
            size = len(self._data) - self._position
        size = min(size, self._chunk)
        data = self._data[self._position:self._position + size]
        self._position += len(data)
        self.consumed += len(data)
        return data


class FakeDriveAPI:
    """In-memory stand-in for AsyncAPIClient."""

    def __init__(self, access_token='test-token', drive_id='drive-1'):
        self.access_token = access_token
        self.drive_id = drive_id
        self.create_responses = []
        self.create_calls = []
        self.parts = []
        self.fail_on_part = None
        self.complete_calls = []
        self.complete_response = None
        self.closed = False

    async def get_drive_id(self):
        return self.drive_id

    async def create_upload(self, body):
        self.create_calls.append(copy.deepcopy(body))
        item = self.create_responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    async def upload_part(self, upload_url, data):
        if self.fail_on_part is not None and upload_url == self.fail_on_part:
            raise TransportError(f"Part upload failed with HTTP 403: {upload_url}")
        self.parts.append((upload_url, data))

    async def complete_upload(self, drive_id, file_id, upload_id):
        self.complete_calls.append((drive_id, file_id, upload_id))
        if self.complete_response is not None:
            return self.complete_response
        return {'file_id': file_id, 'name': 'uploaded'}

    async def close(self):
        self.closed = True


def session_response(file_id='file-1', upload_id='upload-1', parts=1, rapid=False):
    """Create-upload response body."""
    return {
        'file_id': file_id,
        'upload_id': upload_id,
        'rapid_upload': rapid,
        'part_info_list': [
            {'part_number': i, 'upload_url': f'https://oss.example.com/{file_id}/{i}'}
            for i in range(1, parts + 1)
        ],
    }


def challenge(payload=None):
    """PreHashMatched error as raised by the API client."""
    body = {'code': APIErrorCodes.PRE_HASH_MATCHED, 'message': 'Pre hash matched.'}
    body.update(payload or {})
    return DriveAPIError.from_response(409, body)


@pytest.fixture
def fake_api():
    """Fake API client."""
    return FakeDriveAPI()


@pytest.fixture
def temp_dir(tmp_path):
    """Dedicated directory for spill files."""
    path = tmp_path / "spill"
    path.mkdir()
    return path


@pytest.fixture
def sample_data():
    """5000 bytes of non-repeating-ish content."""
    return bytes((i * 7 + i // 256) % 256 for i in range(5000))
