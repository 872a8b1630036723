"""Crypto module: hashing, encoding and proof-of-possession codes."""
from .encoding import Base64Encoder
from .hashing import sha1_hex, md5_hex, ContentHasher
from .proof import ProofCode, ProofCodeCalculator, PROOF_VERSION

__all__ = [
    'Base64Encoder',
    'sha1_hex',
    'md5_hex',
    'ContentHasher',
    'ProofCode',
    'ProofCodeCalculator',
    'PROOF_VERSION',
]
