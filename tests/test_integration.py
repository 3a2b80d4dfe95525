"""
Integration tests for HashVault.

Tests the self test, the event log it reports to, and the console entry
point working together.
"""

import json

import pytest

from hashvault.core_crypto.sha256 import compute_hash
from hashvault.integration.event_logger import (
    DigestEvent, EventLogger, EventType, create_event_logger,
)
from hashvault.integration.selftest import (
    KNOWN_ANSWER_VECTORS, SelfTestReport, boundary_messages,
    cross_check_reference, random_messages, reference_sha256,
    run_known_answer_tests, run_selftest,
)
from hashvault import main as main_module


def broken_hash(data: bytes) -> bytes:
    return bytes(32)


class TestKnownAnswers:
    """Known-answer vectors through the event log."""

    def test_all_vectors_pass(self):
        logger = EventLogger()
        report = run_known_answer_tests(logger)

        assert report.ok
        assert report.passed == len(KNOWN_ANSWER_VECTORS)
        assert len(logger.filter(EventType.VECTOR_PASSED)) == len(KNOWN_ANSWER_VECTORS)
        assert logger.failures() == []

    def test_broken_function_reported(self):
        logger = EventLogger()
        report = run_known_answer_tests(logger, hash_function=broken_hash)

        assert not report.ok
        assert report.failed == len(KNOWN_ANSWER_VECTORS)
        assert "abc" in report.failures
        failed = logger.filter(EventType.VECTOR_FAILED)
        assert failed[0].details["got"] == "00" * 32

    def test_without_logger(self):
        assert run_known_answer_tests().ok

    def test_vectors_cover_padding_boundaries(self):
        lengths = {len(message) for _, message, _ in KNOWN_ANSWER_VECTORS}
        assert {0, 55, 56, 64, 128}.issubset(lengths)


class TestReferenceCrossCheck:
    """Cross-check against the cryptography package."""

    def test_reference_agrees_on_abc(self):
        assert reference_sha256(b"abc") == compute_hash(b"abc")

    def test_boundary_messages_match(self):
        logger = EventLogger()
        messages = list(boundary_messages())
        report = cross_check_reference(messages, logger, seed=7)

        assert report.ok
        assert report.total == len(messages)
        assert len(logger.filter(EventType.REFERENCE_MATCH)) == len(messages)

    def test_random_messages_match(self):
        messages = list(random_messages(4, max_length=300, seed=11))
        assert len(messages) == 4
        assert cross_check_reference(messages, seed=11).ok

    def test_random_messages_are_reproducible(self):
        assert list(random_messages(3, 100, seed=5)) == list(random_messages(3, 100, seed=5))

    def test_mismatch_reported(self):
        logger = EventLogger()
        report = cross_check_reference([b"abc"], logger, hash_function=broken_hash)

        assert not report.ok
        event = logger.failures()[0]
        assert event.event_type == EventType.REFERENCE_MISMATCH
        assert event.details["expected"] == reference_sha256(b"abc").hex()


class TestSelfTest:
    """Full self-test runs."""

    def test_run_selftest(self):
        logger = EventLogger()
        report = run_selftest(logger, random_rounds=3, seed=1)

        assert report.ok
        events = logger.events
        assert events[0].event_type == EventType.SELFTEST_START
        assert events[-1].event_type == EventType.SELFTEST_COMPLETE
        assert events[-1].details["failed"] == 0
        assert events[-1].details["passed"] == report.passed

    def test_report_merge(self):
        a = SelfTestReport(passed=2, failed=1, failures=["x"])
        b = SelfTestReport(passed=1, failed=1, failures=["y"])
        merged = a.merge(b)
        assert (merged.passed, merged.failed, merged.failures) == (3, 2, ["x", "y"])
        assert not merged.ok

    def test_empty_report_is_not_ok(self):
        assert not SelfTestReport().ok


class TestEventLogger:
    """Event log behaviour."""

    def test_record_round_trip(self):
        logger = create_event_logger("unit")
        event = logger.log(EventType.VECTOR_PASSED, "abc", length=3)
        record = event.to_record()

        parsed = DigestEvent.from_record(record)
        assert parsed.event_type == EventType.VECTOR_PASSED
        assert parsed.label == "abc"
        assert parsed.details == {"length": 3, "source": "unit"}

    def test_record_is_compact_json(self):
        event = EventLogger().log(EventType.REFERENCE_MATCH, "length-3")
        record = event.to_record()
        assert ", " not in record
        assert json.loads(record)["type"] == "reference_match"

    def test_export_filtered(self):
        logger = EventLogger()
        logger.log(EventType.VECTOR_PASSED, "a")
        logger.log(EventType.VECTOR_FAILED, "b")
        records = logger.export_records(EventType.VECTOR_FAILED)
        assert len(records) == 1
        assert json.loads(records[0])["label"] == "b"
        assert len(logger.export_records()) == 2
        assert len(logger) == 2

    def test_callbacks(self):
        logger = EventLogger()
        seen = []
        logger.add_callback(seen.append)
        logger.log(EventType.VECTOR_PASSED, "a")
        logger.remove_callback(seen.append)
        logger.log(EventType.VECTOR_PASSED, "b")
        assert [e.label for e in seen] == ["a"]

    def test_callback_errors_propagate(self):
        logger = EventLogger()

        def failing(event):
            raise RuntimeError("sink unavailable")

        logger.add_callback(failing)
        with pytest.raises(RuntimeError):
            logger.log(EventType.VECTOR_PASSED, "a")

    def test_events_is_a_copy(self):
        logger = EventLogger()
        logger.log(EventType.VECTOR_PASSED, "a")
        logger.events.clear()
        assert len(logger) == 1


class TestMain:
    """Console entry point."""

    def test_success_exit_code(self, capsys):
        assert main_module.main(["--rounds", "2", "--seed", "3"]) == 0
        out = capsys.readouterr().out
        assert "All tests passed!" in out
        assert "vector_passed" in out

    def test_quiet(self, capsys):
        assert main_module.main(["--rounds", "0", "-q"]) == 0
        out = capsys.readouterr().out
        assert "vector_passed" not in out
        assert "Passed:" in out

    def test_failure_exit_code(self, capsys, monkeypatch):
        monkeypatch.setattr(
            main_module, "run_selftest",
            lambda *args, **kwargs: SelfTestReport(passed=1, failed=1, failures=["abc"]),
        )
        assert main_module.main([]) == 1
        out = capsys.readouterr().out
        assert "Failures: abc" in out
        assert "Some tests failed!" in out

    def test_negative_rounds(self, capsys):
        assert main_module.main(["--rounds", "-1"]) == 2
        assert "non-negative" in capsys.readouterr().err
