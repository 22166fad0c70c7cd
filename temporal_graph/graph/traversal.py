"""
Temporal Graph Neighborhood Search

Breadth-first search over one snapshot of the network: a link can be
crossed only if it is active on the query date. The date is fixed for
the whole search, so every level sees the same snapshot.

The root is always in its own neighborhood at distance 0. A participant
is recorded the first time it is reached, which is its shortest hop count.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import TYPE_CHECKING, Optional

from temporal_graph.core.checks import as_day, as_distance, require
from temporal_graph.core.outcome import NetworkError
from temporal_graph.core.participant import Participant

if TYPE_CHECKING:
    from temporal_graph.graph.network import SocialNetwork


@dataclass(frozen=True)
class Friend:
    """A participant and how many links away it is.

    Equality and hash come from the participant alone: the same person
    can only be one distance away, so distance is left out on purpose.
    """
    participant: Participant
    distance: int = field(compare=False)

    def __post_init__(self):
        require(self.participant, "Participant")
        if self.distance < 0:
            raise ValueError("Friend distance cannot be negative")

    @property
    def id(self) -> str:
        return self.participant.id

    def __str__(self) -> str:
        return f"{self.participant.id} is {self.distance} links away"


@dataclass
class NeighborhoodResult:
    """Result of a neighborhood query."""
    accepted: bool
    friends: frozenset[Friend] = frozenset()
    error: Optional[NetworkError] = None
    error_detail: str = ""

    def __bool__(self) -> bool:
        return self.accepted

    def __len__(self) -> int:
        return len(self.friends)

    @property
    def ids(self) -> set[str]:
        return {f.id for f in self.friends}

    def distance_of(self, participant_id: str) -> Optional[int]:
        for friend in self.friends:
            if friend.id == participant_id:
                return friend.distance
        return None

    def as_dict(self) -> dict[str, int]:
        return {f.id: f.distance for f in self.friends}


def neighborhood(network: 'SocialNetwork', root_id: str, when: date,
                 max_distance: Optional[int] = None) -> NeighborhoodResult:
    """Participants within max_distance links of root_id on `when`.

    max_distance=None searches without a bound.
    """
    require(root_id, "ID")
    when = as_day(when)
    if max_distance is not None:
        as_distance(max_distance)

    if not network.is_member(root_id):
        return NeighborhoodResult(accepted=False, error=NetworkError.INVALID_PARTICIPANTS,
                                  error_detail=f"{root_id} is not a member")
    if max_distance is not None and max_distance < 0:
        return NeighborhoodResult(accepted=False, error=NetworkError.INVALID_DISTANCE,
                                  error_detail="Distance must be 0 or more")

    reached: dict[str, Friend] = {root_id: Friend(network.get_participant(root_id), 0)}
    frontier = [root_id]
    depth = 1

    while frontier and (max_distance is None or depth <= max_distance):
        next_level = []
        for current_id in frontier:
            for neighbor_id, history in network.links_of(current_id).items():
                if neighbor_id in reached:
                    continue
                if not history.is_active_at(when):
                    continue
                reached[neighbor_id] = Friend(network.get_participant(neighbor_id), depth)
                next_level.append(neighbor_id)
        frontier = next_level
        depth += 1

    return NeighborhoodResult(accepted=True, friends=frozenset(reached.values()))
