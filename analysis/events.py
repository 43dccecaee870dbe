"""
Event Model for the Banker's Algorithm Simulator.

Records the decision for every command applied during a session.
"""

from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional

from algorithms.avoidance import Decision, DenialReason, Outcome


class EventType(Enum):
    """Types of events in a session."""
    GRANTED = "granted"
    DENIED = "denied"
    RELEASED = "released"
    REJECTED = "rejected"
    ERROR = "error"


_DECISION_EVENTS = {
    Decision.GRANTED: EventType.GRANTED,
    Decision.DENIED: EventType.DENIED,
    Decision.RELEASED: EventType.RELEASED,
    Decision.REJECTED: EventType.REJECTED,
}


@dataclass
class SessionEvent:
    """
    Represents a single event in a session.

    Attributes:
        seq: Command number within the session (1-based)
        event_type: Type of event
        customer: Customer index involved (-1 if not known)
        vector: Units requested or released (if applicable)
        reason: Denial reason (if applicable)
        message: Human-readable description
    """
    seq: int
    event_type: EventType
    customer: int = -1
    vector: Optional[List[int]] = None
    reason: Optional[DenialReason] = None
    message: str = ""

    @classmethod
    def from_outcome(cls, seq: int, outcome: Outcome) -> "SessionEvent":
        """Build an event from a request/release outcome."""
        return cls(
            seq=seq,
            event_type=_DECISION_EVENTS[outcome.decision],
            customer=outcome.customer,
            vector=list(outcome.vector),
            reason=outcome.reason,
            message=outcome.message
        )

    def __str__(self) -> str:
        """Format event for logging."""
        base = f"#{self.seq}: C{self.customer}"

        if self.event_type == EventType.GRANTED:
            return f"{base} requests {self.vector} - GRANTED"
        elif self.event_type == EventType.DENIED:
            return f"{base} requests {self.vector} - DENIED ({self.reason.value})"
        elif self.event_type == EventType.RELEASED:
            return f"{base} releases {self.vector}"
        elif self.event_type == EventType.REJECTED:
            return f"{base} releases {self.vector} - REJECTED ({self.reason.value})"
        else:
            return f"#{self.seq}: ERROR ({self.message})"


@dataclass
class EventLog:
    """Collection of session events."""
    events: list = None

    def __post_init__(self):
        if self.events is None:
            self.events = []

    def add(self, event: SessionEvent) -> None:
        """Add an event to the log."""
        self.events.append(event)

    def get_events_by_type(self, event_type: EventType) -> list:
        """Get all events of a specific type."""
        return [e for e in self.events if e.event_type == event_type]

    def get_events_by_customer(self, customer: int) -> list:
        """Get all events for a specific customer."""
        return [e for e in self.events if e.customer == customer]

    def summary(self) -> Dict[str, int]:
        """
        Count events per type and per denial reason.

        Returns:
            Mapping such as {'granted': 3, 'denied': 2, 'denied:unsafe state': 1, ...}
        """
        counts = Counter(e.event_type.value for e in self.events)
        result = {event_type.value: counts.get(event_type.value, 0) for event_type in EventType}
        for event in self.events:
            if event.reason is not None:
                key = f"{event.event_type.value}:{event.reason.value}"
                result[key] = result.get(key, 0) + 1
        return result

    def display(self) -> str:
        """Format all events for display."""
        return "\n".join(str(event) for event in self.events)
