"""Tests for upload completion."""
import pytest

from alidrive.core.exceptions import ProtocolMismatchError
from alidrive.core.upload import SessionFinalizer
from alidrive.core.upload.models import UploadSession


class TestSessionFinalizer:
    """Test suite for SessionFinalizer."""

    @pytest.fixture
    def session(self):
        return UploadSession('file-1', 'upload-1')

    @pytest.mark.asyncio
    async def test_matching_file_id(self, fake_api, session):
        """Test completion with matching file id."""
        response = await SessionFinalizer(fake_api).finalize('drive-1', session)

        assert response['file_id'] == 'file-1'
        assert fake_api.complete_calls == [('drive-1', 'file-1', 'upload-1')]

    @pytest.mark.asyncio
    async def test_mismatched_file_id(self, fake_api, session):
        """Test mismatched file id raises with the payload."""
        fake_api.complete_response = {'file_id': 'other', 'status': 'weird'}

        with pytest.raises(ProtocolMismatchError) as exc_info:
            await SessionFinalizer(fake_api).finalize('drive-1', session)

        assert exc_info.value.payload == {'file_id': 'other', 'status': 'weird'}
        assert exc_info.value.expected_file_id == 'file-1'
        assert "'status': 'weird'" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_missing_file_id(self, fake_api, session):
        """Test completion without file id raises."""
        fake_api.complete_response = {'name': 'x'}

        with pytest.raises(ProtocolMismatchError):
            await SessionFinalizer(fake_api).finalize('drive-1', session)

    @pytest.mark.asyncio
    async def test_non_json_response(self, fake_api, session):
        """Test non-dict completion response raises."""
        fake_api.complete_response = "<html>gateway</html>"

        with pytest.raises(ProtocolMismatchError) as exc_info:
            await SessionFinalizer(fake_api).finalize('drive-1', session)

        assert exc_info.value.payload == "<html>gateway</html>"
