"""
Temporal Graph Social Network

An in-memory network of participants joined by links that come and go.
Each unordered pair that has ever been linked shares one EdgeHistory,
filed under both participants:

    links[a][b] is links[b][a]

Lifecycle calls (establish, tear_down) either append one transition or
report why not. Nothing is ever half-applied. Queries read the same maps
and never write.
"""

import logging
from datetime import date
from types import MappingProxyType
from typing import Mapping, Optional

from temporal_graph.config import NetworkSettings
from temporal_graph.core.checks import as_day, require
from temporal_graph.core.outcome import (
    NetworkError, NetworkResult, ESTABLISH_ERRORS, TEAR_DOWN_ERRORS,
)
from temporal_graph.core.participant import Participant
from temporal_graph.graph.edge_history import EdgeHistory
from temporal_graph.graph import traversal, trend

logger = logging.getLogger("temporal_graph.network")


class SocialNetwork:
    """Participants, their links, and the temporal queries over them."""

    def __init__(self, settings: Optional[NetworkSettings] = None):
        self.settings = settings or NetworkSettings()
        self._participants: dict[str, Participant] = {}
        self._links: dict[str, dict[str, EdgeHistory]] = {}
        self._link_count = 0

    # --------------------------------------------------------
    # Participants
    # --------------------------------------------------------

    def add_participant(self, participant: Participant) -> NetworkResult:
        """Add a participant. Rejected if it has no id or the id is taken."""
        require(participant, "Participant")
        if not participant.is_valid:
            return NetworkResult.reject(NetworkError.INVALID_PARTICIPANTS,
                                        "Participant has no id")
        if participant.id in self._participants:
            return NetworkResult.reject(NetworkError.INVALID_PARTICIPANTS,
                                        f"{participant.id} is already a member")
        self._participants[participant.id] = participant
        self._links[participant.id] = {}
        return NetworkResult.ok()

    def is_member(self, participant_id: str) -> bool:
        return participant_id in self._participants

    def get_participant(self, participant_id: str) -> Optional[Participant]:
        return self._participants.get(participant_id)

    @property
    def participants(self) -> list[Participant]:
        return list(self._participants.values())

    @property
    def participant_count(self) -> int:
        return len(self._participants)

    # --------------------------------------------------------
    # Links
    # --------------------------------------------------------

    @property
    def link_count(self) -> int:
        """Pairs that have ever been linked."""
        return self._link_count

    def get_link(self, first_id: str, second_id: str) -> Optional[EdgeHistory]:
        return self._links.get(first_id, {}).get(second_id)

    def links_of(self, participant_id: str) -> Mapping[str, EdgeHistory]:
        """Read-only view of neighbor id -> shared history."""
        return MappingProxyType(self._links.get(participant_id, {}))

    def _check_pair(self, first_id: str, second_id: str) -> Optional[NetworkResult]:
        if first_id == second_id:
            return NetworkResult.reject(NetworkError.INVALID_PARTICIPANTS,
                                        "A link needs two distinct participants")
        missing = [pid for pid in (first_id, second_id) if pid not in self._participants]
        if missing:
            return NetworkResult.reject(NetworkError.INVALID_PARTICIPANTS,
                                        f"Not members: {', '.join(missing)}")
        return None

    def _attach(self, history: EdgeHistory) -> None:
        a, b = tuple(history.pair)
        self._links[a][b] = history
        self._links[b][a] = history
        self._link_count += 1

    def establish(self, first_id: str, second_id: str, when: date) -> NetworkResult:
        """Activate the link between two members on the given date."""
        require(first_id, "First ID")
        require(second_id, "Second ID")
        when = as_day(when)

        rejected = self._check_pair(first_id, second_id)
        if rejected is not None:
            logger.debug(f"establish {first_id}-{second_id} rejected: {rejected.error_detail}")
            return rejected

        history = self.get_link(first_id, second_id)
        if history is None:
            history = EdgeHistory(first_id, second_id)
            history.activate(when)
            self._attach(history)
            return NetworkResult.ok()

        result = history.activate(when)
        if not result.accepted:
            logger.debug(f"establish {first_id}-{second_id} on {when} rejected: {result.error_detail}")
            return NetworkResult.reject(ESTABLISH_ERRORS[result.error], result.error_detail)
        return NetworkResult.ok()

    def tear_down(self, first_id: str, second_id: str, when: date) -> NetworkResult:
        """Deactivate the link between two members on the given date."""
        require(first_id, "First ID")
        require(second_id, "Second ID")
        when = as_day(when)

        rejected = self._check_pair(first_id, second_id)
        if rejected is not None:
            logger.debug(f"tear_down {first_id}-{second_id} rejected: {rejected.error_detail}")
            return rejected

        history = self.get_link(first_id, second_id)
        if history is None:
            return NetworkResult.reject(NetworkError.ALREADY_INACTIVE,
                                        "No link to tear down")

        result = history.deactivate(when)
        if not result.accepted:
            logger.debug(f"tear_down {first_id}-{second_id} on {when} rejected: {result.error_detail}")
            return NetworkResult.reject(TEAR_DOWN_ERRORS[result.error], result.error_detail)
        return NetworkResult.ok()

    def is_active(self, first_id: str, second_id: str, when: date) -> bool:
        """Was the link between two members active on the given date?"""
        require(first_id, "First ID")
        require(second_id, "Second ID")
        when = as_day(when)
        if not (self.is_member(first_id) and self.is_member(second_id)):
            return False
        history = self.get_link(first_id, second_id)
        if history is None:
            return False
        return history.is_active_at(when)

    # --------------------------------------------------------
    # Temporal queries
    # --------------------------------------------------------

    def neighborhood(self, root_id: str, when: date,
                     max_distance: Optional[int] = None) -> 'traversal.NeighborhoodResult':
        """Everyone reachable from root_id over links active on `when`."""
        return traversal.neighborhood(self, root_id, when, max_distance)

    def neighborhood_trend(self, root_id: str) -> 'trend.TrendResult':
        """Dates on which the size of root_id's neighborhood changes."""
        return trend.neighborhood_trend(self, root_id)
