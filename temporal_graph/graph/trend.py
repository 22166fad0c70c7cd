"""
Temporal Graph Neighborhood Trend

Finds every date on which the size of a participant's neighborhood
changes, without sampling every day on the timeline.

Phase 1 (discover_change_dates): walk outward from the root. Each step
carries a window [start, end) of dates during which the path that led
here is usable. Every link transition inside the window is a candidate
change date. While a link is active, its far end is explored with the
window narrowed to that active stretch.

Phase 2 (evaluate_trend): run the neighborhood search on each candidate,
in date order, and keep only the dates where the size actually moved.

Each branch tracks the participants on its own path (visited). A child
gets a copy of its parent's set plus the parent, so one participant can
be reached again through another path or another window, but a branch
never walks back into itself. The walk uses an explicit stack.
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING, Iterable, Optional

from temporal_graph.core.checks import require
from temporal_graph.core.outcome import NetworkError
from temporal_graph.graph.edge_history import EdgeHistory
from temporal_graph.graph.traversal import neighborhood

if TYPE_CHECKING:
    from temporal_graph.graph.network import SocialNetwork

logger = logging.getLogger("temporal_graph.trend")

Window = tuple[date, date]


@dataclass(frozen=True)
class Frame:
    """One pending step of the walk: explore participant_id during [start, end)."""
    participant_id: str
    visited: frozenset[str]
    start: date
    end: date


@dataclass
class TrendResult:
    """Result of a trend query. trend maps date -> neighborhood size, in date order."""
    accepted: bool
    trend: Optional[dict[date, int]] = None
    error: Optional[NetworkError] = None
    error_detail: str = ""
    candidates_checked: int = 0

    def __bool__(self) -> bool:
        return self.accepted

    def size_on(self, when: date) -> Optional[int]:
        """Size in effect on `when`, read off the trend. None before the first entry."""
        size = None
        for changed_on, changed_to in (self.trend or {}).items():
            if changed_on > when:
                break
            size = changed_to
        return size


# ============================================================
# Phase 1: candidate discovery
# ============================================================

def probe_link(history: EdgeHistory, start: date, end: date,
               candidates: set[date]) -> list[Window]:
    """Collect candidate dates on one link and the windows its far end is usable in."""
    windows: list[Window] = []
    ahead = history.transitions_from(start)

    if not ahead:
        # Activated before the window and never torn down.
        last = history.last_transition
        if last is not None and history.is_active_at(last):
            windows.append((last, end))
        return windows

    head = ahead[0]
    if not head.activates:
        # Active on entry: the link opened before the window did.
        opened = history.previous_transition_before(head.timestamp)
        if opened is not None and opened < start and history.is_active_at(opened):
            windows.append((start, min(head.timestamp, end)))

    for transition in ahead:
        if transition.timestamp >= end:
            break
        candidates.add(transition.timestamp)
        if history.is_active_at(transition.timestamp):
            closes = history.next_transition_after(transition.timestamp)
            windows.append((transition.timestamp, end if closes is None else min(closes, end)))

    return windows


def discover_change_dates(network: 'SocialNetwork', root_id: str,
                          start: Optional[date] = None,
                          end: Optional[date] = None) -> set[date]:
    """Every date on which root_id's neighborhood might change size."""
    start = network.settings.epoch if start is None else start
    end = network.settings.horizon if end is None else end

    candidates: set[date] = set()
    stack = [Frame(root_id, frozenset(), start, end)]
    seen: set[Frame] = set()

    while stack:
        frame = stack.pop()
        if frame in seen:
            continue
        seen.add(frame)

        branch = frame.visited | {frame.participant_id}
        for neighbor_id, history in network.links_of(frame.participant_id).items():
            if neighbor_id in frame.visited:
                continue
            for opens, closes in probe_link(history, frame.start, frame.end, candidates):
                if opens < closes:
                    stack.append(Frame(neighbor_id, branch, opens, closes))

    logger.debug(f"trend {root_id}: explored {len(seen)} frames, {len(candidates)} candidate dates")
    return candidates


# ============================================================
# Phase 2: evaluation
# ============================================================

def evaluate_trend(network: 'SocialNetwork', root_id: str,
                   candidates: Iterable[date]) -> dict[date, int]:
    """Keep the candidates on which the neighborhood size really changed."""
    trend: dict[date, int] = {}
    current_size = None
    for candidate in sorted(set(candidates)):
        size = len(neighborhood(network, root_id, candidate).friends)
        if size != current_size:
            trend[candidate] = size
            current_size = size
    return trend


def neighborhood_trend(network: 'SocialNetwork', root_id: str) -> TrendResult:
    """Dates on which the size of root_id's neighborhood changes, and the new sizes."""
    require(root_id, "ID")
    if not network.is_member(root_id):
        return TrendResult(accepted=False, error=NetworkError.INVALID_PARTICIPANTS,
                           error_detail=f"{root_id} is not a member")

    candidates = discover_change_dates(network, root_id)
    trend = evaluate_trend(network, root_id, candidates)
    logger.info(f"trend {root_id}: {len(trend)} changes from {len(candidates)} candidates")
    return TrendResult(accepted=True, trend=trend, candidates_checked=len(candidates))
