"""
Tests for incremental hashing.

Tests:
- Sha256Stream chunking independence
- Driving the Sha256Context primitive from a read loop
- hash_chunks helper
"""

import io

import pytest

from hashvault.core_crypto.sha256 import (
    BLOCK_LENGTH, MAX_MESSAGE_LENGTH, InvalidInputError, InvalidInputKind,
    Sha256Context, compute_hash, sha256,
)
from hashvault.core_crypto.stream import Sha256Stream, hash_chunks


MESSAGE = bytes(range(256)) * 5 + b"tail"


def chunked(data: bytes, size: int):
    for i in range(0, len(data), size):
        yield data[i:i + size]


def read_loop_digest(stream: io.BytesIO) -> bytes:
    """Hash a stream of unknown length with the primitive, one block per read."""
    total_length = 0
    ctx = Sha256Context()
    ctx.init()

    while True:
        buf = bytearray(stream.read(BLOCK_LENGTH))
        total_length += len(buf)

        if len(buf) == BLOCK_LENGTH:
            ctx.transform_block(buf)
            continue

        buf.extend(bytes(BLOCK_LENGTH - len(buf)))
        done = Sha256Context.pad_block(buf, total_length % BLOCK_LENGTH, total_length, buf)
        ctx.transform_block(buf)
        if not done.complete:
            Sha256Context.pad_block(None, 0, total_length, buf)
            ctx.transform_block(buf)
        break

    digest = ctx.get_digest()
    ctx.clear_state()
    return digest


class TestSha256Stream:
    """Tests for the incremental hasher."""

    @pytest.mark.parametrize("size", [1, 3, 55, 56, 63, 64, 65, 128, 1000, len(MESSAGE)])
    def test_chunking_does_not_change_digest(self, size):
        stream = Sha256Stream()
        for chunk in chunked(MESSAGE, size):
            stream.update(chunk)
        assert stream.digest() == compute_hash(MESSAGE)

    def test_one_byte_at_a_time(self):
        stream = Sha256Stream()
        for i in range(130):
            stream.update(MESSAGE[i:i + 1])
        assert stream.digest() == compute_hash(MESSAGE[:130])

    def test_constructor_data(self):
        assert Sha256Stream(b"abc").digest() == sha256(b"abc")

    def test_empty_stream(self):
        assert Sha256Stream().hexdigest() == (
            "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
        )

    def test_empty_updates_are_ignored(self):
        stream = Sha256Stream(b"ab")
        stream.update(b"")
        stream.update(b"c")
        assert stream.digest() == sha256(b"abc")
        assert stream.message_length == 3

    def test_update_is_chainable(self):
        assert Sha256Stream().update(b"a").update(b"bc").digest() == sha256(b"abc")

    def test_digest_does_not_finalize(self):
        """The stream keeps accepting data after a digest is taken."""
        stream = Sha256Stream(b"ab")
        assert stream.digest() == sha256(b"ab")
        stream.update(b"c")
        assert stream.digest() == sha256(b"abc")

    def test_copy_is_independent(self):
        stream = Sha256Stream(b"x" * 70)
        clone = stream.copy()
        clone.update(b"more")
        assert stream.digest() == sha256(b"x" * 70)
        assert clone.digest() == sha256(b"x" * 70 + b"more")

    def test_attributes(self):
        stream = Sha256Stream()
        assert stream.name == "sha256"
        assert stream.digest_size == 32
        assert stream.block_size == 64

    def test_accepts_bytes_like(self):
        stream = Sha256Stream()
        stream.update(bytearray(b"ab"))
        stream.update(memoryview(b"c"))
        assert stream.digest() == sha256(b"abc")

    def test_rejects_str(self):
        with pytest.raises(TypeError):
            Sha256Stream().update("abc")

    def test_rejects_message_too_long(self):
        stream = Sha256Stream()
        stream._length = MAX_MESSAGE_LENGTH - 1
        with pytest.raises(InvalidInputError) as exc_info:
            stream.update(b"ab")
        assert exc_info.value.kind is InvalidInputKind.MESSAGE_TOO_LONG

    def test_clear_wipes_state(self):
        stream = Sha256Stream(b"x" * 70)
        stream.clear()
        assert stream._ctx.state == (0,) * 8
        assert len(stream._buffer) == 0

    def test_clear_resets_length(self):
        stream = Sha256Stream(b"x" * 70)
        stream.clear()
        assert stream.message_length == 0


class TestStreamingPrimitive:
    """Driving Sha256Context directly, with caller-side length tracking."""

    @pytest.mark.parametrize("length", [0, 1, 55, 56, 63, 64, 65, 119, 120, 128, 300])
    def test_read_loop_matches_one_shot(self, length):
        data = bytes((i * 31) & 0xFF for i in range(length))
        assert read_loop_digest(io.BytesIO(data)) == compute_hash(data)


class TestHashChunks:
    """Tests for hash_chunks."""

    def test_generator_input(self):
        assert hash_chunks(chunked(MESSAGE, 77)) == compute_hash(MESSAGE)

    def test_no_chunks(self):
        assert hash_chunks([]) == sha256(b"")

    def test_file_like_chunks(self):
        source = io.BytesIO(MESSAGE)
        digest = hash_chunks(iter(lambda: source.read(100), b""))
        assert digest == compute_hash(MESSAGE)
