"""
HashVault - Main Entry Point
Runs the SHA-256 self test and prints a report.
"""

import argparse
import sys
from typing import List, Optional

from .integration.event_logger import EventLogger, DigestEvent
from .integration.selftest import DEFAULT_REFERENCE_ROUNDS, run_selftest


def _print_event(event: DigestEvent) -> None:
    if event.event_type.value.startswith("selftest"):
        return
    status = "FAIL" if event.is_failure else "ok"
    print(f"  [{status:>4}] {event.event_type.value:<20} {event.label}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hashvault-selftest",
        description="Verify the pure-Python SHA-256 implementation",
    )
    parser.add_argument("--long", action="store_true",
                        help="include the one-million-byte test vector")
    parser.add_argument("--rounds", type=int, default=DEFAULT_REFERENCE_ROUNDS,
                        help="random messages to cross-check against the reference")
    parser.add_argument("--seed", type=int, default=None,
                        help="seed for the random messages")
    parser.add_argument("-q", "--quiet", action="store_true",
                        help="only print the summary")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for HashVault."""
    args = build_parser().parse_args(argv)
    if args.rounds < 0:
        print("--rounds must be non-negative", file=sys.stderr)
        return 2

    print("=" * 50)
    print("HashVault SHA-256 self test")
    print("=" * 50)

    logger = EventLogger()
    if not args.quiet:
        logger.add_callback(_print_event)

    report = run_selftest(logger, include_long=args.long,
                          random_rounds=args.rounds, seed=args.seed)

    print("\n" + "=" * 50)
    print(f"Passed: {report.passed}  Failed: {report.failed}")
    if report.failures:
        print("Failures: " + ", ".join(report.failures))
    print(f"Overall: {'All tests passed!' if report.ok else 'Some tests failed!'}")
    return 0 if report.ok else 1


if __name__ == "__main__":
    sys.exit(main())
