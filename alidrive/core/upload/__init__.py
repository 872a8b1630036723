"""
Upload module for AliDrive file uploads.

Negotiates rapid (deduplicated) uploads and falls back to chunked part
transfer when the server does not already hold the content.
"""
from .coordinator import UploadCoordinator
from .negotiator import UploadNegotiator
from .models import (
    UploadConfig,
    UploadResult,
    UploadRequest,
    UploadSession,
    PartInfo,
    NegotiationState,
    NegotiationOutcome,
)
from .services import HashSampler, SpillFile, ChunkedTransferExecutor, SessionFinalizer
from .protocols import AsyncReadable, DriveAPIProtocol, ProgressCallback

__all__ = [
    # Main classes
    'UploadCoordinator',
    'UploadNegotiator',
    'HashSampler',
    'SpillFile',
    'ChunkedTransferExecutor',
    'SessionFinalizer',

    # Models
    'UploadConfig',
    'UploadResult',
    'UploadRequest',
    'UploadSession',
    'PartInfo',
    'NegotiationState',
    'NegotiationOutcome',

    # Protocols
    'AsyncReadable',
    'DriveAPIProtocol',
    'ProgressCallback',
]
