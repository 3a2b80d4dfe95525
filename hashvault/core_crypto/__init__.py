# Core Cryptography Module
"""
Pure-Python SHA-256 (FIPS 180-4):
- 32-bit word operations
- Sha256Context low-level primitive and compute_hash one-shot API
- Sha256Stream incremental hasher
"""

from .sha256 import (
    BLOCK_LENGTH,
    DIGEST_LENGTH,
    MAX_MESSAGE_LENGTH,
    InvalidInputError,
    InvalidInputKind,
    PadResult,
    PadStatus,
    Sha256Context,
    compute_hash,
    sha256,
    sha256_hex,
    sha256_string,
)
from .stream import Sha256Stream, hash_chunks

__all__ = [
    'BLOCK_LENGTH',
    'DIGEST_LENGTH',
    'MAX_MESSAGE_LENGTH',
    'InvalidInputError',
    'InvalidInputKind',
    'PadResult',
    'PadStatus',
    'Sha256Context',
    'Sha256Stream',
    'compute_hash',
    'hash_chunks',
    'sha256',
    'sha256_hex',
    'sha256_string',
]
