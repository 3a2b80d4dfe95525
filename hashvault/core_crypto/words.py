"""
32-bit Word Operations for SHA-256

Bit-level building blocks of the SHA-256 compression function (FIPS 180-4,
sections 3.2 and 4.1.2). Python integers are unbounded, so every result
that could overflow is masked back to 32 bits; this masking is what gives
the modular (wraparound) arithmetic the algorithm depends on.

Also holds the explicit big-endian (de)serialization helpers used for the
message words, the length field and the digest. Bytes are assembled by
shifting, so the result never depends on the host byte order.
"""

from typing import List, Sequence


# Mask for 32-bit arithmetic
MASK_32 = 0xFFFFFFFF

# Mask for the 64-bit message length field
MASK_64 = 0xFFFFFFFFFFFFFFFF

WORD_SIZE = 4   # bytes
WORD_BITS = 32


# ============================================================================
# Primitive Operations
# ============================================================================

def shr(x: int, n: int) -> int:
    """Right shift: discard the right-most n bits, fill with zeros on the left."""
    assert 0 <= n < WORD_BITS
    return x >> n


def rotr(x: int, n: int) -> int:
    """Rotate a 32-bit word right by n positions."""
    assert 0 < n < WORD_BITS
    return ((x >> n) | (x << (WORD_BITS - n))) & MASK_32


def add32(*values: int) -> int:
    """Sum any number of words modulo 2^32."""
    return sum(values) & MASK_32


# ============================================================================
# Logical Functions
# ============================================================================

def ch(x: int, y: int, z: int) -> int:
    """Choice: for each bit, x selects y (1) or z (0)."""
    return ((x & y) ^ (~x & z)) & MASK_32


def maj(x: int, y: int, z: int) -> int:
    """Majority vote of the three bits in each position."""
    return (x & y) ^ (x & z) ^ (y & z)


def big_sigma0(x: int) -> int:
    """Uppercase Sigma 0, applied to working variable a."""
    return rotr(x, 2) ^ rotr(x, 13) ^ rotr(x, 22)


def big_sigma1(x: int) -> int:
    """Uppercase Sigma 1, applied to working variable e."""
    return rotr(x, 6) ^ rotr(x, 11) ^ rotr(x, 25)


def small_sigma0(x: int) -> int:
    """Lowercase sigma 0, used in the message schedule."""
    return rotr(x, 7) ^ rotr(x, 18) ^ shr(x, 3)


def small_sigma1(x: int) -> int:
    """Lowercase sigma 1, used in the message schedule."""
    return rotr(x, 17) ^ rotr(x, 19) ^ shr(x, 10)


# ============================================================================
# Big-Endian Conversions
# ============================================================================

def load_be_words(block: bytes, count: int = 16) -> List[int]:
    """
    Read `count` big-endian 32-bit words from the start of a buffer.

    Args:
        block: Source bytes (bytes, bytearray or memoryview)
        count: Number of words to read

    Returns:
        List of word values
    """
    words = []
    for i in range(0, count * WORD_SIZE, WORD_SIZE):
        words.append(
            (block[i] << 24) | (block[i + 1] << 16) | (block[i + 2] << 8) | block[i + 3]
        )
    return words


def store_be_word(buffer: bytearray, offset: int, value: int) -> None:
    """Write a 32-bit word into buffer at offset, most significant byte first."""
    buffer[offset] = (value >> 24) & 0xFF
    buffer[offset + 1] = (value >> 16) & 0xFF
    buffer[offset + 2] = (value >> 8) & 0xFF
    buffer[offset + 3] = value & 0xFF


def store_be_u64(buffer: bytearray, offset: int, value: int) -> None:
    """Write a 64-bit value into buffer at offset, most significant byte first."""
    value &= MASK_64
    for i in range(8):
        buffer[offset + i] = (value >> (56 - 8 * i)) & 0xFF


def words_to_bytes(words: Sequence[int]) -> bytes:
    """Serialize words big-endian, first word first."""
    out = bytearray(len(words) * WORD_SIZE)
    for i, word in enumerate(words):
        store_be_word(out, i * WORD_SIZE, word)
    return bytes(out)
