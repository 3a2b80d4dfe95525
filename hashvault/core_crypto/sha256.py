"""
SHA-256 Hash Implementation (From Scratch)

Implements the SHA-256 cryptographic hash function as defined in FIPS 180-4.
This implementation avoids using hashlib and builds the algorithm from scratch.

Two levels of API are provided:

- compute_hash(): one call for a message held entirely in memory
- Sha256Context: the low-level primitive (init, transform_block, pad_block,
  get_digest, clear_state) for data arriving incrementally. The caller
  tracks the total message length.

Low-level usage:

    ctx = Sha256Context()
    ctx.init()
    for block in full_blocks:              # each exactly 64 bytes
        ctx.transform_block(block)
    result = Sha256Context.pad_block(tail, len(tail), total_length)
    ctx.transform_block(result.block)
    if not result.complete:
        result = Sha256Context.pad_block(None, 0, total_length)
        ctx.transform_block(result.block)
    digest = ctx.get_digest()
    ctx.clear_state()
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from .words import (
    MASK_32, add32, ch, maj, big_sigma0, big_sigma1, small_sigma0,
    small_sigma1, load_be_words, store_be_u64, words_to_bytes,
)


# ============================================================================
# Constants
# ============================================================================

BLOCK_LENGTH = 512 // 8         # 64 bytes per compression block
DIGEST_LENGTH = 256 // 8        # 32-byte digest
STATE_WORDS = 8
LENGTH_FIELD_SIZE = 8           # 64-bit big-endian bit count
PAD_BYTE = 0x80

# Message length ceiling in bytes; keeps the bit count within 64 bits
MAX_MESSAGE_LENGTH = 0x2000000000000000

# Last offset at which data can end and still leave room for 0x80 + length
_MAX_SINGLE_BLOCK_TAIL = BLOCK_LENGTH - 1 - LENGTH_FIELD_SIZE

# Initial hash values: first 32 bits of fractional parts of square roots of first 8 primes
H_INITIAL: Tuple[int, ...] = (
    0x6a09e667, 0xbb67ae85, 0x3c6ef372, 0xa54ff53a,
    0x510e527f, 0x9b05688c, 0x1f83d9ab, 0x5be0cd19,
)

# Round constants: first 32 bits of fractional parts of cube roots of first 64 primes
K: Tuple[int, ...] = (
    0x428a2f98, 0x71374491, 0xb5c0fbcf, 0xe9b5dba5,
    0x3956c25b, 0x59f111f1, 0x923f82a4, 0xab1c5ed5,
    0xd807aa98, 0x12835b01, 0x243185be, 0x550c7dc3,
    0x72be5d74, 0x80deb1fe, 0x9bdc06a7, 0xc19bf174,
    0xe49b69c1, 0xefbe4786, 0x0fc19dc6, 0x240ca1cc,
    0x2de92c6f, 0x4a7484aa, 0x5cb0a9dc, 0x76f988da,
    0x983e5152, 0xa831c66d, 0xb00327c8, 0xbf597fc7,
    0xc6e00bf3, 0xd5a79147, 0x06ca6351, 0x14292967,
    0x27b70a85, 0x2e1b2138, 0x4d2c6dfc, 0x53380d13,
    0x650a7354, 0x766a0abb, 0x81c2c92e, 0x92722c85,
    0xa2bfe8a1, 0xa81a664b, 0xc24b8b70, 0xc76c51a3,
    0xd192e819, 0xd6990624, 0xf40e3585, 0x106aa070,
    0x19a4c116, 0x1e376c08, 0x2748774c, 0x34b0bcb5,
    0x391c0cb3, 0x4ed8aa4a, 0x5b9cca4f, 0x682e6ff3,
    0x748f82ee, 0x78a5636f, 0x84c87814, 0x8cc70208,
    0x90befffa, 0xa4506ceb, 0xbef9a3f7, 0xc67178f2,
)


# ============================================================================
# Errors
# ============================================================================

class InvalidInputKind(Enum):
    """Which input contract was violated."""
    MESSAGE_TOO_LONG = "message_too_long"
    MALFORMED_BLOCK = "malformed_block"
    LENGTH_MISMATCH = "length_mismatch"


class InvalidInputError(ValueError):
    """Raised when an input violates the hashing contract."""

    def __init__(self, kind: InvalidInputKind, message: str):
        super().__init__(message)
        self.kind = kind


def _check_message_length(message_length: int) -> None:
    if not 0 <= message_length < MAX_MESSAGE_LENGTH:
        raise InvalidInputError(
            InvalidInputKind.MESSAGE_TOO_LONG,
            f"Message length must be in [0, {MAX_MESSAGE_LENGTH:#x}) bytes, "
            f"got {message_length}"
        )


# ============================================================================
# Padding Result
# ============================================================================

class PadStatus(Enum):
    """Outcome of one padding step."""
    COMPLETE = "complete"
    NEEDS_FINAL_BLOCK = "needs_final_block"


@dataclass(frozen=True)
class PadResult:
    """
    A padded 64-byte block plus whether padding is finished.

    NEEDS_FINAL_BLOCK means the length field did not fit: transform this
    block, then call pad_block(None, 0, message_length) for the last one.
    """
    status: PadStatus
    block: bytes

    @property
    def complete(self) -> bool:
        return self.status is PadStatus.COMPLETE


# ============================================================================
# Compression
# ============================================================================

def _create_message_schedule(words: List[int]) -> List[int]:
    """
    Expand 16 words into 64 words for the message schedule.

    For i from 16 to 63:
        W[i] = σ1(W[i-2]) + W[i-7] + σ0(W[i-15]) + W[i-16]
    """
    w = list(words)
    for i in range(16, 64):
        w.append(add32(small_sigma1(w[i - 2]), w[i - 7], small_sigma0(w[i - 15]), w[i - 16]))
    return w


class Sha256Context:
    """
    Low-level SHA-256 hashing primitive.

    Holds the eight 32-bit words of the intermediate hash value. The state
    is meaningful only after init(); a new context starts zeroed. Calls on
    one context must be made in order and are not synchronized: share a
    context between threads only with external locking.
    """

    block_length = BLOCK_LENGTH
    digest_length = DIGEST_LENGTH

    def __init__(self):
        self._state: List[int] = [0] * STATE_WORDS

    @property
    def state(self) -> Tuple[int, ...]:
        """Snapshot of the current state words."""
        return tuple(self._state)

    def init(self) -> None:
        """Prepare or reset the context for a new message."""
        self._state[:] = H_INITIAL

    def copy(self) -> 'Sha256Context':
        """Independent context carrying the same state."""
        other = Sha256Context()
        other._state[:] = self._state
        return other

    def transform_block(self, block: bytes) -> None:
        """
        Feed exactly one 64-byte block through the compression function,
        updating the intermediate hash value.

        Args:
            block: 64 bytes (bytes, bytearray or memoryview)

        Raises:
            InvalidInputError: If the block is not 64 bytes long
        """
        if len(block) != BLOCK_LENGTH:
            raise InvalidInputError(
                InvalidInputKind.MALFORMED_BLOCK,
                f"Block must be {BLOCK_LENGTH} bytes, got {len(block)}"
            )

        w = _create_message_schedule(load_be_words(block))

        # Initialize working variables
        a, b, c, d, e, f, g, h = self._state

        # 64 rounds
        for i in range(64):
            t1 = add32(h, big_sigma1(e), ch(e, f, g), K[i], w[i])
            t2 = add32(big_sigma0(a), maj(a, b, c))

            h = g
            g = f
            f = e
            e = (d + t1) & MASK_32
            d = c
            c = b
            b = a
            a = (t1 + t2) & MASK_32

        # Add compressed chunk to current hash value
        for i, value in enumerate((a, b, c, d, e, f, g, h)):
            self._state[i] = (self._state[i] + value) & MASK_32

    @staticmethod
    def pad_block(
        data: Optional[bytes],
        data_length: int,
        message_length: int,
        result_buffer: Optional[bytearray] = None
    ) -> PadResult:
        """
        Pad the final block of a message.

        Padding rules:
        1. Copy the remaining data (0-63 bytes)
        2. Append the byte 0x80
        3. Append zeros until the block holds 56 bytes
        4. Append the message length in bits as a 64-bit big-endian integer

        When more than 55 bytes of data remain the length does not fit: the
        block is zero filled after 0x80 and NEEDS_FINAL_BLOCK is returned.
        Call again with data=None and data_length=0 to get the last block
        (zeros followed by the length).

        Args:
            data: Remaining message bytes, or None for the final length block
            data_length: Number of bytes of data to use (< 64)
            message_length: Total message length in bytes
            result_buffer: Optional writable 64-byte buffer to fill. It may
                be the same buffer that holds data.

        Returns:
            PadResult with the padded block

        Raises:
            InvalidInputError: On a message too long or malformed sizes
        """
        _check_message_length(message_length)

        if result_buffer is None:
            buf = bytearray(BLOCK_LENGTH)
        else:
            if len(result_buffer) < BLOCK_LENGTH:
                raise InvalidInputError(
                    InvalidInputKind.LENGTH_MISMATCH,
                    f"Result buffer must hold {BLOCK_LENGTH} bytes"
                )
            buf = result_buffer

        bit_count = message_length * 8

        if data is None:
            if data_length != 0:
                raise InvalidInputError(
                    InvalidInputKind.MALFORMED_BLOCK,
                    "data_length must be 0 when data is None"
                )
            for i in range(BLOCK_LENGTH - LENGTH_FIELD_SIZE):
                buf[i] = 0
            store_be_u64(buf, BLOCK_LENGTH - LENGTH_FIELD_SIZE, bit_count)
            return PadResult(PadStatus.COMPLETE, bytes(buf[:BLOCK_LENGTH]))

        if not 0 <= data_length < BLOCK_LENGTH:
            raise InvalidInputError(
                InvalidInputKind.MALFORMED_BLOCK,
                f"Final block data must be shorter than {BLOCK_LENGTH} bytes, "
                f"got {data_length}"
            )
        if len(data) < data_length:
            raise InvalidInputError(
                InvalidInputKind.LENGTH_MISMATCH,
                f"data holds {len(data)} bytes, data_length is {data_length}"
            )

        if data is not buf:
            buf[:data_length] = bytes(data[:data_length])

        p = data_length
        buf[p] = PAD_BYTE
        p += 1

        if data_length <= _MAX_SINGLE_BLOCK_TAIL:
            while p < BLOCK_LENGTH - LENGTH_FIELD_SIZE:
                buf[p] = 0
                p += 1
            store_be_u64(buf, p, bit_count)
            return PadResult(PadStatus.COMPLETE, bytes(buf[:BLOCK_LENGTH]))

        while p < BLOCK_LENGTH:
            buf[p] = 0
            p += 1
        return PadResult(PadStatus.NEEDS_FINAL_BLOCK, bytes(buf[:BLOCK_LENGTH]))

    def get_digest(self, result_buffer: Optional[bytearray] = None) -> bytes:
        """
        Retrieve the message digest: each state word big-endian, first word
        first. The state is left untouched.

        Args:
            result_buffer: Optional writable buffer of at least 32 bytes

        Returns:
            256-bit (32-byte) digest as bytes
        """
        digest = words_to_bytes(self._state)
        if result_buffer is not None:
            if len(result_buffer) < DIGEST_LENGTH:
                raise InvalidInputError(
                    InvalidInputKind.LENGTH_MISMATCH,
                    f"Result buffer must hold {DIGEST_LENGTH} bytes"
                )
            result_buffer[:DIGEST_LENGTH] = digest
        return digest

    def clear_state(self) -> None:
        """
        Zero the state words in place.

        The list object itself is overwritten, never replaced, so any
        reference to it sees the zeros.
        """
        for i in range(STATE_WORDS):
            self._state[i] = 0


# ============================================================================
# One-shot API
# ============================================================================

def compute_hash(
    data: bytes,
    data_length: Optional[int] = None,
    result: Optional[bytearray] = None
) -> bytes:
    """
    Compute the SHA-256 digest of a message held in memory.

    Args:
        data: Message bytes (bytes, bytearray or memoryview)
        data_length: Number of leading bytes of data to hash (default: all)
        result: Optional writable buffer of at least 32 bytes to receive
            the digest

    Returns:
        256-bit (32-byte) digest as bytes

    Raises:
        InvalidInputError: If data_length is too long or exceeds data
    """
    view = memoryview(data).cast('B')
    if data_length is None:
        data_length = len(view)

    _check_message_length(data_length)
    if data_length > len(view):
        raise InvalidInputError(
            InvalidInputKind.LENGTH_MISMATCH,
            f"data holds {len(view)} bytes, data_length is {data_length}"
        )
    if result is not None and len(result) < DIGEST_LENGTH:
        raise InvalidInputError(
            InvalidInputKind.LENGTH_MISMATCH,
            f"Result buffer must hold {DIGEST_LENGTH} bytes"
        )

    full_length = data_length & ~(BLOCK_LENGTH - 1)

    ctx = Sha256Context()
    ctx.init()
    try:
        # Blocks are chained: each transform depends on the previous state
        for offset in range(0, full_length, BLOCK_LENGTH):
            ctx.transform_block(view[offset:offset + BLOCK_LENGTH])

        buf = bytearray(BLOCK_LENGTH)
        padded = Sha256Context.pad_block(
            view[full_length:data_length], data_length - full_length, data_length, buf
        )
        ctx.transform_block(buf)
        if not padded.complete:
            Sha256Context.pad_block(None, 0, data_length, buf)
            ctx.transform_block(buf)

        return ctx.get_digest(result)
    finally:
        ctx.clear_state()


def sha256(data: bytes) -> bytes:
    """
    Compute the SHA-256 hash of the input data.

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return compute_hash(data)


def sha256_hex(data: bytes) -> str:
    """Compute SHA-256 hash and return as a 64-character hex string."""
    return compute_hash(data).hex()


def sha256_string(text: str, encoding: str = 'utf-8') -> bytes:
    """Compute SHA-256 hash of a string."""
    return compute_hash(text.encode(encoding))
