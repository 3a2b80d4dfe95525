"""
SHA-256 Self Test

Verifies the from-scratch implementation two ways:

- Known-answer vectors from FIPS 180-4 / NIST examples, including the
  padding boundaries (55, 56 and 64 byte messages)
- Cross-check against the `cryptography` package's SHA-256 on boundary
  lengths and random messages, both one-shot and fed in random chunks

Every check is reported to an EventLogger.
"""

import os
import random
from dataclasses import dataclass, field
from typing import Callable, Iterable, Iterator, List, Optional, Tuple

from cryptography.hazmat.primitives import hashes

from ..core_crypto.sha256 import BLOCK_LENGTH, compute_hash
from ..core_crypto.stream import Sha256Stream
from .event_logger import EventLogger, EventType


# ============================================================================
# Constants
# ============================================================================

DEFAULT_REFERENCE_ROUNDS = 64
MAX_RANDOM_LENGTH = 4 * 1024     # bytes, for random cross-check messages
LONG_VECTOR_LABEL = "million-a"

# (label, message, expected hex digest)
KNOWN_ANSWER_VECTORS: List[Tuple[str, bytes, str]] = [
    ("empty", b"",
     "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"),
    ("abc", b"abc",
     "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"),
    ("hello", b"hello",
     "2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824"),
    ("quick-brown-fox", b"The quick brown fox jumps over the lazy dog",
     "d7a8fbb307d7809469ca9abcb0082e4f8d5651e46d3cdb762d02d0bf37c9e592"),
    ("zero-32", bytes(32),
     "66687aadf862bd776c8fc18b8e9f8e20089714856ee233b3902a591d0d5f2925"),
    # 55 bytes: largest message that pads within one block
    ("a-55", b"a" * 55,
     "9f4390f8d30c2dd92ec9f095b65e2b9ae9b0a925a5258e241c9f1e910f734318"),
    # 56 bytes: length field spills into a second padding block
    ("nist-448-bit", b"abcdbcdecdefdefgefghfghighijhijkijkljklmklmnlmnomnopnopq",
     "248d6a61d20638b8e5c026930c3e6039a33ce45964ff2167f6ecedd419db06c1"),
    # Exactly one block: padding adds a whole block
    ("zero-64", bytes(64),
     "f5a5fd42d16a20302798ef6ed309979b43003d2320d9f0e8ea9831a92759fb4b"),
    ("a-64", b"a" * 64,
     "ffe054fe7ae0cb6dc65c3af9b61d5209f439851db43d0ba5997337df154668eb"),
    # Two full blocks before the padding block
    ("zero-128", bytes(128),
     "38723a2e5e8a17aa7950dc008209944e898f69a7bd10a23c839d341e935fd5ca"),
    ("nist-896-bit",
     b"abcdefghbcdefghicdefghijdefghijkefghijklfghijklmghijklmn"
     b"hijklmnoijklmnopjklmnopqklmnopqrlmnopqrsmnopqrstnopqrstu",
     "cf5b16a778af8380036ce59e7b0492370b249b11e8f07a51afac45037afee9d1"),
]

LONG_VECTOR = (
    LONG_VECTOR_LABEL, b"a" * 1_000_000,
    "cdc76e5c9914fb9281a1c7e284d73e67f1809a48a497200e046d39ccc7112cd0",
)

HashFunction = Callable[[bytes], bytes]


# ============================================================================
# Report
# ============================================================================

@dataclass
class SelfTestReport:
    """Tally of a self-test run."""
    passed: int = 0
    failed: int = 0
    failures: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.failed == 0 and self.passed > 0

    @property
    def total(self) -> int:
        return self.passed + self.failed

    def record(self, label: str, success: bool) -> None:
        if success:
            self.passed += 1
        else:
            self.failed += 1
            self.failures.append(label)

    def merge(self, other: 'SelfTestReport') -> 'SelfTestReport':
        return SelfTestReport(
            passed=self.passed + other.passed,
            failed=self.failed + other.failed,
            failures=self.failures + other.failures,
        )


# ============================================================================
# Reference Implementation
# ============================================================================

def reference_sha256(data: bytes) -> bytes:
    """SHA-256 from the `cryptography` package (OpenSSL backed)."""
    digest = hashes.Hash(hashes.SHA256())
    digest.update(bytes(data))
    return digest.finalize()


def boundary_messages() -> Iterator[bytes]:
    """Random messages of every length from 0 to two blocks plus two bytes."""
    for length in range(2 * BLOCK_LENGTH + 3):
        yield os.urandom(length)


def random_messages(rounds: int, max_length: int = MAX_RANDOM_LENGTH,
                    seed: Optional[int] = None) -> Iterator[bytes]:
    """Random messages with random lengths in [0, max_length]."""
    rng = random.Random(seed)
    for _ in range(rounds):
        length = rng.randint(0, max_length)
        yield bytes(rng.getrandbits(8) for _ in range(length))


def _random_chunks(data: bytes, rng: random.Random) -> Iterator[bytes]:
    offset = 0
    while offset < len(data):
        size = rng.randint(1, 2 * BLOCK_LENGTH + 1)
        yield data[offset:offset + size]
        offset += size


def _stream_digest(data: bytes, rng: random.Random) -> bytes:
    stream = Sha256Stream()
    for chunk in _random_chunks(data, rng):
        stream.update(chunk)
    return stream.digest()


# ============================================================================
# Checks
# ============================================================================

def run_known_answer_tests(
    logger: Optional[EventLogger] = None,
    include_long: bool = False,
    hash_function: HashFunction = compute_hash
) -> SelfTestReport:
    """
    Check the known-answer vectors.

    Args:
        logger: Optional event logger receiving one event per vector
        include_long: Also hash one million 'a' bytes (slow in pure Python)
        hash_function: Function under test

    Returns:
        SelfTestReport for the vectors
    """
    report = SelfTestReport()
    vectors = list(KNOWN_ANSWER_VECTORS)
    if include_long:
        vectors.append(LONG_VECTOR)

    for label, message, expected in vectors:
        got = hash_function(message).hex()
        success = got == expected
        report.record(label, success)
        if logger is not None:
            logger.log(
                EventType.VECTOR_PASSED if success else EventType.VECTOR_FAILED,
                label,
                length=len(message),
                expected=expected,
                got=got,
            )

    return report


def cross_check_reference(
    messages: Iterable[bytes],
    logger: Optional[EventLogger] = None,
    hash_function: HashFunction = compute_hash,
    seed: Optional[int] = None
) -> SelfTestReport:
    """
    Compare digests against the reference implementation.

    Each message is hashed in one call and again through a Sha256Stream fed
    in random chunk sizes; both must equal the reference digest.
    """
    rng = random.Random(seed)
    report = SelfTestReport()

    for message in messages:
        expected = reference_sha256(message)
        one_shot = hash_function(message)
        streamed = _stream_digest(message, rng)
        success = one_shot == expected and streamed == expected
        label = f"length-{len(message)}"
        report.record(label, success)
        if logger is not None:
            logger.log(
                EventType.REFERENCE_MATCH if success else EventType.REFERENCE_MISMATCH,
                label,
                length=len(message),
                expected=expected.hex(),
                one_shot=one_shot.hex(),
                streamed=streamed.hex(),
            )

    return report


def run_selftest(
    logger: Optional[EventLogger] = None,
    include_long: bool = False,
    random_rounds: int = DEFAULT_REFERENCE_ROUNDS,
    seed: Optional[int] = None
) -> SelfTestReport:
    """Run the known-answer vectors and the reference cross-check."""
    if logger is not None:
        logger.log(EventType.SELFTEST_START, "selftest",
                   include_long=include_long, random_rounds=random_rounds)

    report = run_known_answer_tests(logger, include_long=include_long)

    messages = list(boundary_messages())
    messages.extend(random_messages(random_rounds, seed=seed))
    report = report.merge(cross_check_reference(messages, logger, seed=seed))

    if logger is not None:
        logger.log(EventType.SELFTEST_COMPLETE, "selftest",
                   passed=report.passed, failed=report.failed)

    return report
