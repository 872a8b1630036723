"""AliDrive API module."""
from .errors import DriveAPIError, APIErrorCodes
from .config import APIConfig, TimeoutConfig
from .async_client import AsyncAPIClient

__all__ = [
    # Async client
    'AsyncAPIClient',
    
    # Configuration
    'APIConfig',
    'TimeoutConfig',
    
    # Errors
    'DriveAPIError',
    'APIErrorCodes',
]
