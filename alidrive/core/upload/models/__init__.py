"""Upload data models."""
from .upload_models import (
    DEFAULT_PART_SIZE,
    PREHASH_SIZE,
    PartInfo,
    PreHashPayload,
    FullHashPayload,
    NegotiationPayload,
    UploadRequest,
    UploadSession,
    CreateUploadResponse,
    NegotiationState,
    NegotiationOutcome,
    UploadConfig,
    UploadResult,
    PrehashSample,
)

__all__ = [
    'DEFAULT_PART_SIZE',
    'PREHASH_SIZE',
    'PartInfo',
    'PreHashPayload',
    'FullHashPayload',
    'NegotiationPayload',
    'UploadRequest',
    'UploadSession',
    'CreateUploadResponse',
    'NegotiationState',
    'NegotiationOutcome',
    'UploadConfig',
    'UploadResult',
    'PrehashSample',
]
