"""
HashVault - SHA-256 message digests in pure Python.
"""

from .core_crypto import (
    InvalidInputError,
    InvalidInputKind,
    PadResult,
    PadStatus,
    Sha256Context,
    Sha256Stream,
    compute_hash,
    hash_chunks,
    sha256,
    sha256_hex,
    sha256_string,
)

__version__ = "1.0.0"

__all__ = [
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
