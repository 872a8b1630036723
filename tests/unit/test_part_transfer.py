"""Tests for chunked part transfer."""
import pytest

from alidrive.core.exceptions import TransportError
from alidrive.core.upload.models import PartInfo
from alidrive.core.upload.services import ChunkedTransferExecutor, BytesSource

from conftest import TrickleStream


def make_parts(count):
    return [PartInfo(i, f'https://oss.example.com/part/{i}') for i in range(1, count + 1)]


class TestChunkedTransferExecutor:
    """Test suite for ChunkedTransferExecutor."""

    @pytest.fixture
    def executor(self, fake_api):
        return ChunkedTransferExecutor(fake_api, part_size=4)

    @pytest.mark.asyncio
    async def test_slices_source_per_part(self, executor, fake_api):
        """Test each part gets its own slice."""
        uploaded = await executor.transfer(make_parts(3), BytesSource(b"0123456789"), 3)

        assert uploaded == 3
        assert fake_api.parts == [
            ('https://oss.example.com/part/1', b"0123"),
            ('https://oss.example.com/part/2', b"4567"),
            ('https://oss.example.com/part/3', b"89"),
        ]

    @pytest.mark.asyncio
    async def test_progress_reported_after_each_part(self, executor):
        """Test progress after every part."""
        progress = []

        await executor.transfer(make_parts(3), BytesSource(b"0123456789"), 3, progress.append)

        assert progress == [33, 66, 100]

    @pytest.mark.asyncio
    async def test_progress_is_non_decreasing_and_ends_at_100(self, fake_api):
        """Test progress is monotonic and ends at 100."""
        executor = ChunkedTransferExecutor(fake_api, part_size=1)
        progress = []

        await executor.transfer(make_parts(7), BytesSource(b"abcdefg"), 7, progress.append)

        assert len(progress) == 7
        assert progress == sorted(progress)
        assert progress[-1] == 100

    @pytest.mark.asyncio
    async def test_parts_sent_in_ascending_order(self, executor, fake_api):
        """Test parts are sorted by part number."""
        parts = list(reversed(make_parts(3)))

        await executor.transfer(parts, BytesSource(b"0123456789"), 3)

        assert [url for url, _ in fake_api.parts] == [
            'https://oss.example.com/part/1',
            'https://oss.example.com/part/2',
            'https://oss.example.com/part/3',
        ]

    @pytest.mark.asyncio
    async def test_zero_part_count_skips_progress(self, executor, fake_api):
        """Test no parts means no progress calls."""
        progress = []

        uploaded = await executor.transfer([], BytesSource(b""), 0, progress.append)

        assert uploaded == 0
        assert progress == []
        assert fake_api.parts == []

    @pytest.mark.asyncio
    async def test_short_reads_fill_parts(self, executor, fake_api):
        """Test short reads are combined per part."""
        source = TrickleStream(b"0123456789", chunk=3)

        await executor.transfer(make_parts(3), source, 3)

        assert [data for _, data in fake_api.parts] == [b"0123", b"4567", b"89"]

    @pytest.mark.asyncio
    async def test_failure_aborts_remaining_parts(self, executor, fake_api):
        """Test first failure stops the transfer."""
        fake_api.fail_on_part = 'https://oss.example.com/part/2'
        progress = []

        with pytest.raises(TransportError):
            await executor.transfer(make_parts(3), BytesSource(b"0123456789"), 3, progress.append)

        assert len(fake_api.parts) == 1
        assert progress == [33]

    def test_progress_percent(self):
        """Test percent calculation."""
        assert ChunkedTransferExecutor.progress_percent(1, 3) == 33
        assert ChunkedTransferExecutor.progress_percent(3, 3) == 100
        assert ChunkedTransferExecutor.progress_percent(5, 3) == 100
        assert ChunkedTransferExecutor.progress_percent(1, 0) is None

    def test_invalid_part_size(self, fake_api):
        """Test part size must be positive."""
        with pytest.raises(ValueError):
            ChunkedTransferExecutor(fake_api, part_size=0)
