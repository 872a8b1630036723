"""
alidrive - Async Python client for AliDrive uploads with rapid-upload negotiation.

Usage:
    >>> from alidrive import AliDriveClient
    >>>
    >>> async with AliDriveClient(token) as drive:
    ...     result = await drive.upload("video.mp4")
    ...     print(result.file_id, result.rapid_upload)
"""
import logging
from .client import AliDriveClient

# Configuration
from .core.api import (
    APIConfig,
    TimeoutConfig,
    AsyncAPIClient,
    DriveAPIError,
    APIErrorCodes
)

from .core.upload import UploadConfig, UploadResult, UploadCoordinator
from .core.exceptions import (
    AliDriveException,
    TransportError,
    ProtocolMismatchError,
    LocalIOError
)

__version__ = '1.0.0'


def setup_logging(level=logging.INFO):
    """
    Configure logging for alidrive modules.

    Args:
        level: Logging level (default: logging.INFO)
    """
    loggers = [
        'alidrive',
        'alidrive.api',
        'alidrive.client',
        'alidrive.upload',
        'alidrive.upload.coordinator',
        'alidrive.upload.negotiator',
        'alidrive.upload.sampler',
        'alidrive.upload.spill',
        'alidrive.upload.part',
        'alidrive.upload.finalize',
        'alidrive.upload.file',
    ]

    for logger_name in loggers:
        logger = logging.getLogger(logger_name)
        logger.setLevel(level)
        logger.propagate = True


__all__ = [
    'AliDriveClient',
    'AsyncAPIClient',
    'APIConfig',
    'TimeoutConfig',
    'UploadConfig',
    'UploadResult',
    'UploadCoordinator',
    'AliDriveException',
    'TransportError',
    'DriveAPIError',
    'APIErrorCodes',
    'ProtocolMismatchError',
    'LocalIOError',
    'setup_logging',
]
