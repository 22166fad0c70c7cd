"""
Temporal Graph Outcomes

Every lifecycle call and every query reports how it went. Expected
failures (asking for an active link to be activated again, a date that
runs backwards, a stranger's id) are returned as codes, never raised.

TransitionError: what a single link's event log rejected
NetworkError: what the network reports to its callers
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


# ============================================================
# Error Codes
# ============================================================

class TransitionError(Enum):
    """Rejection codes for appending to one link's event log."""
    OUT_OF_ORDER = "OUT_OF_ORDER"           # timestamp precedes the last recorded one
    WRONG_PHASE = "WRONG_PHASE"             # activate while active / deactivate while inactive
    NEVER_ACTIVATED = "NEVER_ACTIVATED"     # deactivate a link with no history


class NetworkError(Enum):
    """Rejection codes reported by the social network."""
    INVALID_PARTICIPANTS = "INVALID_PARTICIPANTS"   # missing, duplicate, or non-member ids
    INVALID_DATE = "INVALID_DATE"                   # transition earlier than the link's last event
    INVALID_DISTANCE = "INVALID_DISTANCE"           # negative hop bound
    ALREADY_ACTIVE = "ALREADY_ACTIVE"
    ALREADY_INACTIVE = "ALREADY_INACTIVE"
    NEVER_ACTIVATED = "NEVER_ACTIVATED"


# How a link-level rejection surfaces for each lifecycle request.
ESTABLISH_ERRORS: dict[TransitionError, NetworkError] = {
    TransitionError.OUT_OF_ORDER: NetworkError.INVALID_DATE,
    TransitionError.WRONG_PHASE: NetworkError.ALREADY_ACTIVE,
    TransitionError.NEVER_ACTIVATED: NetworkError.NEVER_ACTIVATED,
}

TEAR_DOWN_ERRORS: dict[TransitionError, NetworkError] = {
    TransitionError.OUT_OF_ORDER: NetworkError.INVALID_DATE,
    TransitionError.WRONG_PHASE: NetworkError.ALREADY_INACTIVE,
    TransitionError.NEVER_ACTIVATED: NetworkError.NEVER_ACTIVATED,
}


# ============================================================
# Results
# ============================================================

@dataclass
class TransitionResult:
    """Result of appending one transition to a link."""
    accepted: bool
    error: Optional[TransitionError] = None
    error_detail: str = ""

    def __bool__(self) -> bool:
        return self.accepted


@dataclass
class NetworkResult:
    """Result of a lifecycle operation on the network."""
    accepted: bool
    error: Optional[NetworkError] = None
    error_detail: str = ""

    def __bool__(self) -> bool:
        return self.accepted

    @staticmethod
    def ok() -> 'NetworkResult':
        return NetworkResult(accepted=True)

    @staticmethod
    def reject(error: NetworkError, detail: str = "") -> 'NetworkResult':
        return NetworkResult(accepted=False, error=error, error_detail=detail)
