"""
Data models for upload module.

Uses dataclasses for immutable, type-safe data structures.
"""
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, Any, Optional, Tuple, Union

from ...crypto.proof import PROOF_VERSION


DEFAULT_PART_SIZE = 10 * 1024 * 1024  # 10 MiB
PREHASH_SIZE = 1024


@dataclass(frozen=True)
class PartInfo:
    """
    One part of a chunked upload.

    Attributes:
        part_number: 1-based sequential part number
        upload_url: Pre-signed target (empty until issued by the server)
    """
    part_number: int
    upload_url: str = ''

    def to_dict(self) -> Dict[str, Any]:
        """Request form: only the part number is sent."""
        return {'part_number': self.part_number}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PartInfo':
        return cls(
            part_number=int(data.get('part_number', 0)),
            upload_url=data.get('upload_url', '') or ''
        )


@dataclass(frozen=True)
class PreHashPayload:
    """Phase 1 payload: SHA-1 of the first 1024 bytes."""
    pre_hash: str

    def to_dict(self) -> Dict[str, Any]:
        return {'pre_hash': self.pre_hash}


@dataclass(frozen=True)
class FullHashPayload:
    """Phase 2 payload: full content hash plus proof code."""
    content_hash: str
    proof_code: str
    proof_version: str = PROOF_VERSION
    content_hash_name: str = 'sha1'

    def to_dict(self) -> Dict[str, Any]:
        return {
            'content_hash': self.content_hash,
            'content_hash_name': self.content_hash_name,
            'proof_code': self.proof_code,
            'proof_version': self.proof_version,
        }


NegotiationPayload = Union[PreHashPayload, FullHashPayload]


@dataclass(frozen=True)
class UploadRequest:
    """
    Create-upload request metadata.

    Attributes:
        drive_id: Target drive
        name: File name
        parent_id: Parent folder id ('root' for the drive root)
        size: Declared size in bytes
        part_info_list: Requested parts, one per part_size slice
        check_name_mode: Server behavior on name clash
    """
    drive_id: str
    name: str
    parent_id: str
    size: int
    part_info_list: Tuple[PartInfo, ...] = ()
    check_name_mode: str = 'overwrite'

    @property
    def part_count(self) -> int:
        return len(self.part_info_list)

    def to_body(self, payload: Optional[NegotiationPayload] = None) -> Dict[str, Any]:
        """
        Render the JSON body for one negotiation phase.

        Args:
            payload: Pre-hash or full-hash variant (exactly one is merged)
        """
        body = {
            'check_name_mode': self.check_name_mode,
            'drive_id': self.drive_id,
            'name': self.name,
            'parent_file_id': self.parent_id,
            'part_info_list': [part.to_dict() for part in self.part_info_list],
            'size': self.size,
            'type': 'file',
        }
        if payload is not None:
            body.update(payload.to_dict())
        return body


@dataclass(frozen=True)
class UploadSession:
    """Server-allocated upload session."""
    file_id: str
    upload_id: str


@dataclass(frozen=True)
class CreateUploadResponse:
    """
    Parsed create-upload response.

    Attributes:
        file_id: Allocated file id (may be empty)
        upload_id: Allocated upload id (may be empty)
        part_info_list: Parts with pre-signed upload URLs
        rapid_upload: True when the server confirmed deduplication
        raw: Raw response payload
    """
    file_id: str = ''
    upload_id: str = ''
    part_info_list: Tuple[PartInfo, ...] = ()
    rapid_upload: bool = False
    raw: Dict[str, Any] = field(default_factory=dict)

    @property
    def session(self) -> Optional[UploadSession]:
        """Upload session, if the response allocated one."""
        if self.file_id and self.upload_id:
            return UploadSession(self.file_id, self.upload_id)
        return None

    @classmethod
    def from_dict(cls, data: Any) -> 'CreateUploadResponse':
        if not isinstance(data, dict):
            return cls()
        parts = tuple(
            PartInfo.from_dict(item)
            for item in data.get('part_info_list') or []
            if isinstance(item, dict)
        )
        return cls(
            file_id=data.get('file_id') or '',
            upload_id=data.get('upload_id') or '',
            part_info_list=parts,
            rapid_upload=bool(data.get('rapid_upload', False)),
            raw=data
        )


class NegotiationState(Enum):
    """States of the upload negotiation."""
    PREHASH_PENDING = 'prehash_pending'
    RAPID_CONFIRMED = 'rapid_confirmed'
    HASH_CHALLENGE_ISSUED = 'hash_challenge_issued'
    RAPID_CONFIRMED_2 = 'rapid_confirmed_2'
    TRANSFER_REQUIRED = 'transfer_required'


@dataclass
class NegotiationOutcome:
    """
    Result of a negotiation.

    Attributes:
        state: Terminal negotiation state
        response: Last create-upload response
        session: Session to transfer into and finalize (None when rapid)
        part_info_list: Parts to transfer
        source: Byte source positioned at offset 0 (None when rapid)
    """
    state: NegotiationState
    response: CreateUploadResponse
    session: Optional[UploadSession] = None
    part_info_list: Tuple[PartInfo, ...] = ()
    source: Optional[Any] = None

    @property
    def requires_transfer(self) -> bool:
        return self.state is NegotiationState.TRANSFER_REQUIRED

    @property
    def is_rapid(self) -> bool:
        return self.state in (
            NegotiationState.RAPID_CONFIRMED,
            NegotiationState.RAPID_CONFIRMED_2
        )


@dataclass
class UploadConfig:
    """
    Configuration for uploads.

    Attributes:
        rapid_upload: Try the pre-hash round-trip before the full hash
        temp_dir: Directory for the spill file (system default if None)
        part_size: Bytes per part
        prehash_size: Bytes sampled for the pre-hash
        check_name_mode: Server behavior on name clash
    """
    rapid_upload: bool = True
    temp_dir: Optional[Union[str, Path]] = None
    part_size: int = DEFAULT_PART_SIZE
    prehash_size: int = PREHASH_SIZE
    check_name_mode: str = 'overwrite'

    def __post_init__(self):
        if isinstance(self.temp_dir, str):
            self.temp_dir = Path(self.temp_dir)
        if self.part_size <= 0:
            raise ValueError("Part size must be positive")
        if self.prehash_size < 0:
            raise ValueError("Pre-hash size must be >= 0")


@dataclass(frozen=True)
class UploadResult:
    """
    Result of a successful upload.

    Attributes:
        file_id: Id of the stored file
        name: File name
        size: Declared size
        rapid_upload: True when no bytes were transferred
        parts_uploaded: Number of parts sent
        response: Raw final response (completion or negotiation)
    """
    file_id: str
    name: str
    size: int
    rapid_upload: bool = False
    parts_uploaded: int = 0
    response: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class PrehashSample:
    """
    Buffered stream prefix and its hash.

    Attributes:
        data: First min(budget, length) bytes of the stream
        pre_hash: SHA-1 hex digest of ``data``
        stream: Composite stream replaying ``data`` then the remainder
    """
    data: bytes
    pre_hash: str
    stream: Any
