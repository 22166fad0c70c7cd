"""
Temporal Graph Edge History

One history per unordered pair of participants that has ever been linked.
It is an append-only log of activations and deactivations, in date order.
Ties are allowed: a link can be established and torn down on the same day.

Whether the link is active on a given date is never stored. It is read
off the log every time, so there is only one source of truth even when a
link is torn down and re-established many times.

Phase machine: INACTIVE -> ACTIVE -> INACTIVE -> ...
Every append is checked against the current phase.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Iterator, Optional

from temporal_graph.core.checks import as_day, require
from temporal_graph.core.outcome import TransitionError, TransitionResult


class LinkPhase(Enum):
    """Current state of a link, after its most recent transition."""
    INACTIVE = "inactive"
    ACTIVE = "active"


@dataclass(frozen=True)
class Transition:
    """A single entry in a link's log."""
    timestamp: date
    activates: bool


class EdgeHistory:
    """Append-only activation log for one pair of participants."""

    def __init__(self, first_id: str, second_id: str):
        require(first_id, "First participant")
        require(second_id, "Second participant")
        if first_id == second_id:
            raise ValueError("A link needs two distinct participants")
        self.pair: frozenset[str] = frozenset((first_id, second_id))
        self._transitions: list[Transition] = []
        self._phase = LinkPhase.INACTIVE

    # --------------------------------------------------------
    # Log access
    # --------------------------------------------------------

    @property
    def phase(self) -> LinkPhase:
        return self._phase

    @property
    def transitions(self) -> tuple[Transition, ...]:
        return tuple(self._transitions)

    @property
    def timestamps(self) -> list[date]:
        return [t.timestamp for t in self._transitions]

    @property
    def first_transition(self) -> Optional[date]:
        if not self._transitions:
            return None
        return self._transitions[0].timestamp

    @property
    def last_transition(self) -> Optional[date]:
        if not self._transitions:
            return None
        return self._transitions[-1].timestamp

    def __len__(self) -> int:
        return len(self._transitions)

    def __iter__(self) -> Iterator[Transition]:
        return iter(self._transitions)

    def other(self, participant_id: str) -> str:
        """The participant at the other end of this link."""
        if participant_id not in self.pair:
            raise KeyError(participant_id)
        (other_id,) = self.pair - {participant_id}
        return other_id

    def transitions_from(self, start: date) -> list[Transition]:
        """All transitions at or after start, ties included."""
        start = as_day(start)
        return [t for t in self._transitions if t.timestamp >= start]

    # --------------------------------------------------------
    # Mutation
    # --------------------------------------------------------

    def record_transition(self, timestamp: date, want_activation: bool) -> TransitionResult:
        """Append an activation or deactivation.

        Rejections leave the log untouched.
        """
        timestamp = as_day(timestamp, "Timestamp")
        require(want_activation, "Transition kind")

        if not self._transitions and not want_activation:
            return TransitionResult(accepted=False, error=TransitionError.NEVER_ACTIVATED,
                                    error_detail="Link was never activated")

        last = self.last_transition
        if last is not None and timestamp < last:
            return TransitionResult(accepted=False, error=TransitionError.OUT_OF_ORDER,
                                    error_detail=f"{timestamp} precedes last transition {last}")

        expected = self._phase is LinkPhase.INACTIVE
        if want_activation != expected:
            return TransitionResult(accepted=False, error=TransitionError.WRONG_PHASE,
                                    error_detail=f"Link is already {self._phase.value}")

        self._transitions.append(Transition(timestamp=timestamp, activates=want_activation))
        self._phase = LinkPhase.ACTIVE if want_activation else LinkPhase.INACTIVE
        return TransitionResult(accepted=True)

    def activate(self, timestamp: date) -> TransitionResult:
        return self.record_transition(timestamp, True)

    def deactivate(self, timestamp: date) -> TransitionResult:
        return self.record_transition(timestamp, False)

    # --------------------------------------------------------
    # Point-in-time queries
    # --------------------------------------------------------

    def _locate(self, when: date) -> Optional[int]:
        """Index i of the first pair with t[i] <= when < t[i+1], if any."""
        for i in range(len(self._transitions) - 1):
            if self._transitions[i].timestamp <= when < self._transitions[i + 1].timestamp:
                return i
        return None

    def is_active_at(self, when: date) -> bool:
        when = as_day(when)
        if not self._transitions:
            return False
        index = self._locate(when)
        if index is not None:
            return self._transitions[index].activates
        if when < self._transitions[0].timestamp:
            return False
        # at or after the last transition
        return self._phase is LinkPhase.ACTIVE

    def next_transition_after(self, when: date) -> Optional[date]:
        """The next transition strictly after when, or None."""
        when = as_day(when)
        if not self._transitions:
            return None
        if when < self._transitions[0].timestamp:
            return self._transitions[0].timestamp
        index = self._locate(when)
        if index is None:
            return None
        return self._transitions[index + 1].timestamp

    def previous_transition_before(self, when: date) -> Optional[date]:
        """The closest transition strictly before when, or None."""
        when = as_day(when)
        if not self._transitions or when < self._transitions[0].timestamp:
            return None
        index = self._locate(when)
        if index is None:
            index = len(self._transitions) - 1
        for transition in reversed(self._transitions[:index + 1]):
            if transition.timestamp != when:
                return transition.timestamp
        return None

    def __repr__(self) -> str:
        a, b = sorted(self.pair)
        return f"EdgeHistory({a!r}, {b!r}, transitions={len(self._transitions)}, phase={self._phase.value})"
