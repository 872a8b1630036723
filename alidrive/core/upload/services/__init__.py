"""Upload services module."""
from .file_service import FileValidator, BytesSource, SyncReaderSource, UploadSource, read_up_to
from .sampler import HashSampler, ReplayStream
from .spill import SpillFile
from .part_service import ChunkedTransferExecutor
from .finalize_service import SessionFinalizer

__all__ = [
    'FileValidator',
    'BytesSource',
    'SyncReaderSource',
    'UploadSource',
    'read_up_to',
    'HashSampler',
    'ReplayStream',
    'SpillFile',
    'ChunkedTransferExecutor',
    'SessionFinalizer',
]
