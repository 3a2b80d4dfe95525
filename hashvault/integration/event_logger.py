"""
Event Logger Module

Records what the verification routines did: which known-answer vectors
passed or failed, and whether digests agreed with the reference SHA-256
implementation. Events are kept in memory, can be exported as compact JSON
records, and are pushed to registered callbacks as they happen.

Features:
- Self-test start/complete events
- Per-vector pass/fail events
- Reference cross-check match/mismatch events
- JSON record export for audit trails

Author: HashVault Project
"""

import time
import json
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, List, Dict, Any, Callable


# ============================================================================
# Constants
# ============================================================================

EVENT_VERSION = "1.0"
DEFAULT_SOURCE = "hashvault"


# ============================================================================
# Event Types
# ============================================================================

class EventType(Enum):
    """Types of verification events that can be logged."""

    # Self-test lifecycle
    SELFTEST_START = "selftest_start"
    SELFTEST_COMPLETE = "selftest_complete"

    # Known-answer vectors
    VECTOR_PASSED = "vector_passed"
    VECTOR_FAILED = "vector_failed"

    # Reference implementation cross-check
    REFERENCE_MATCH = "reference_match"
    REFERENCE_MISMATCH = "reference_mismatch"


FAILURE_EVENTS = frozenset({EventType.VECTOR_FAILED, EventType.REFERENCE_MISMATCH})


# ============================================================================
# Event Structure
# ============================================================================

@dataclass
class DigestEvent:
    """A single verification event."""
    event_type: EventType
    label: str
    timestamp: int  # Unix timestamp
    details: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_failure(self) -> bool:
        return self.event_type in FAILURE_EVENTS

    def to_record(self) -> str:
        """Convert event to a compact JSON record."""
        return json.dumps({
            'version': EVENT_VERSION,
            'type': self.event_type.value,
            'label': self.label,
            'time': self.timestamp,
            'iso_time': datetime.fromtimestamp(self.timestamp).isoformat(),
            'details': self.details,
        }, separators=(',', ':'))

    @classmethod
    def from_record(cls, record: str) -> 'DigestEvent':
        """Parse event from a JSON record."""
        data = json.loads(record)
        return cls(
            event_type=EventType(data['type']),
            label=data['label'],
            timestamp=data['time'],
            details=data.get('details', {}),
        )


# ============================================================================
# Event Logger
# ============================================================================

class EventLogger:
    """
    In-memory log of verification events.

    Callbacks are invoked synchronously for every event; an exception raised
    by a callback propagates to the code that logged the event.
    """

    def __init__(self, source: str = DEFAULT_SOURCE):
        self._source = source
        self._events: List[DigestEvent] = []
        self._callbacks: List[Callable[[DigestEvent], None]] = []

    @property
    def source(self) -> str:
        return self._source

    @property
    def events(self) -> List[DigestEvent]:
        """All events logged so far, oldest first."""
        return list(self._events)

    def __len__(self) -> int:
        return len(self._events)

    def log(self, event_type: EventType, label: str, **details: Any) -> DigestEvent:
        """
        Record an event.

        Args:
            event_type: Kind of event
            label: Short name of what was checked (vector name, input size...)
            **details: Extra JSON-serializable fields

        Returns:
            The recorded event
        """
        details.setdefault('source', self._source)
        event = DigestEvent(
            event_type=event_type,
            label=label,
            timestamp=int(time.time()),
            details=details,
        )
        self._events.append(event)

        for callback in list(self._callbacks):
            callback(event)

        return event

    def add_callback(self, callback: Callable[[DigestEvent], None]) -> None:
        """Add a callback to be notified of new events."""
        self._callbacks.append(callback)

    def remove_callback(self, callback: Callable[[DigestEvent], None]) -> None:
        """Remove a callback."""
        if callback in self._callbacks:
            self._callbacks.remove(callback)

    def filter(self, event_type: EventType) -> List[DigestEvent]:
        """Events of one type."""
        return [e for e in self._events if e.event_type == event_type]

    def failures(self) -> List[DigestEvent]:
        """Events reporting a failed vector or a reference mismatch."""
        return [e for e in self._events if e.is_failure]

    def export_records(self, event_type: Optional[EventType] = None) -> List[str]:
        """JSON records of the logged events, optionally of one type only."""
        events = self._events if event_type is None else self.filter(event_type)
        return [e.to_record() for e in events]


def create_event_logger(source: str = DEFAULT_SOURCE) -> EventLogger:
    """Create a new event logger."""
    return EventLogger(source=source)
