"""
Incremental SHA-256

Sha256Stream wraps the low-level Sha256Context with the bookkeeping the
primitive leaves to its caller: buffering a partial block between updates
and counting the total message length. Data may be fed in chunks of any
size; the digest does not depend on how the message was split.

Reading the data (from a file, socket, queue...) stays with the caller.
"""

from typing import Iterable, Optional

from .sha256 import (
    BLOCK_LENGTH, DIGEST_LENGTH, MAX_MESSAGE_LENGTH,
    InvalidInputError, InvalidInputKind, Sha256Context,
)


class Sha256Stream:
    """
    hashlib-style incremental SHA-256 hasher.

    Example:
        >>> h = Sha256Stream()
        >>> h.update(b"a").update(b"bc").hexdigest()[:16]
        'ba7816bf8f01cfea'
    """

    name = "sha256"
    digest_size = DIGEST_LENGTH
    block_size = BLOCK_LENGTH

    def __init__(self, data: Optional[bytes] = None):
        self._ctx = Sha256Context()
        self._ctx.init()
        self._buffer = bytearray()
        self._length = 0

        if data is not None:
            self.update(data)

    @property
    def message_length(self) -> int:
        """Total number of bytes fed so far."""
        return self._length

    def update(self, data: bytes) -> 'Sha256Stream':
        """
        Feed more message bytes.

        Raises:
            TypeError: If data is not bytes-like
            InvalidInputError: If the total length reaches the SHA-256 limit
        """
        if isinstance(data, str):
            raise TypeError("Strings must be encoded before hashing")
        view = memoryview(data).cast('B')
        if not view:
            return self

        if self._length + len(view) >= MAX_MESSAGE_LENGTH:
            raise InvalidInputError(
                InvalidInputKind.MESSAGE_TOO_LONG,
                f"Message would exceed {MAX_MESSAGE_LENGTH:#x} bytes"
            )
        self._length += len(view)

        offset = 0
        if self._buffer:
            take = min(BLOCK_LENGTH - len(self._buffer), len(view))
            self._buffer += view[:take]
            offset = take
            if len(self._buffer) < BLOCK_LENGTH:
                return self
            self._ctx.transform_block(self._buffer)
            self._buffer.clear()

        # Full blocks go straight from the caller's data
        end = offset + (len(view) - offset) // BLOCK_LENGTH * BLOCK_LENGTH
        for start in range(offset, end, BLOCK_LENGTH):
            self._ctx.transform_block(view[start:start + BLOCK_LENGTH])

        self._buffer += view[end:]
        return self

    def digest(self) -> bytes:
        """
        Digest of everything fed so far. The stream itself is not
        finalized and may be updated further.
        """
        ctx = self._ctx.copy()
        try:
            buf = bytearray(BLOCK_LENGTH)
            padded = Sha256Context.pad_block(self._buffer, len(self._buffer), self._length, buf)
            ctx.transform_block(buf)
            if not padded.complete:
                Sha256Context.pad_block(None, 0, self._length, buf)
                ctx.transform_block(buf)
            return ctx.get_digest()
        finally:
            ctx.clear_state()

    def hexdigest(self) -> str:
        return self.digest().hex()

    def copy(self) -> 'Sha256Stream':
        other = Sha256Stream.__new__(Sha256Stream)
        other._ctx = self._ctx.copy()
        other._buffer = bytearray(self._buffer)
        other._length = self._length
        return other

    def clear(self) -> None:
        """
        Wipe the state, any buffered bytes and the length count.

        The state is left zeroed, not re-initialized: a cleared stream is
        finished and should not be fed again. Start a new Sha256Stream instead.
        """
        self._ctx.clear_state()
        for i in range(len(self._buffer)):
            self._buffer[i] = 0
        self._buffer.clear()
        self._length = 0


def hash_chunks(chunks: Iterable[bytes]) -> bytes:
    """
    Hash a message delivered as an iterable of byte chunks.

    Args:
        chunks: Any iterable of bytes-like objects (a generator reading a
            file, a list of network frames...)

    Returns:
        256-bit (32-byte) digest as bytes
    """
    stream = Sha256Stream()
    try:
        for chunk in chunks:
            stream.update(chunk)
        return stream.digest()
    finally:
        stream.clear()
