"""
Temporal Graph Participants

A participant is anyone who can hold links in the network. Identity is
the id and nothing else: two records with the same id are the same
participant no matter what else they carry.

A participant starts invalid (no id). The id can be assigned exactly once,
and descriptive fields can only be filled in after that.
"""

from typing import Annotated, Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from temporal_graph.core.checks import require


NonEmptyStr = Annotated[str, Field(min_length=1)]

DESCRIPTIVE_FIELDS = frozenset({
    "first_name", "middle_name", "last_name", "email", "phone_number",
})


class UninitializedParticipantError(Exception):
    """A participant was used before its id was assigned."""


class Participant(BaseModel):
    """One member of a social network."""
    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    id: Optional[NonEmptyStr] = None
    first_name: Optional[NonEmptyStr] = None
    middle_name: Optional[NonEmptyStr] = None
    last_name: Optional[NonEmptyStr] = None
    email: Optional[NonEmptyStr] = None
    phone_number: Optional[NonEmptyStr] = None

    @property
    def is_valid(self) -> bool:
        return self.id is not None

    def assign_id(self, participant_id: str) -> bool:
        """Set the id. Only once, and never to the empty string."""
        require(participant_id, "ID")
        if self.is_valid or participant_id == "":
            return False
        self.id = participant_id
        return True

    def update(self, **fields: Any) -> 'Participant':
        """Fill in descriptive fields. All-or-nothing."""
        if not self.is_valid:
            raise UninitializedParticipantError(
                "Participant must be initialized before its fields are set")
        unknown = set(fields) - DESCRIPTIVE_FIELDS
        if unknown:
            raise TypeError(f"Unknown participant fields: {sorted(unknown)}")
        for name, value in fields.items():
            require(value, name)
        # validate the whole record before touching this one
        Participant.model_validate({**self.model_dump(), **fields})
        for name, value in fields.items():
            setattr(self, name, value)
        return self

    @property
    def display_name(self) -> str:
        names = [n for n in (self.first_name, self.middle_name, self.last_name) if n]
        return " ".join(names) if names else (self.id or "")

    def __str__(self) -> str:
        if not self.is_valid:
            return "Invalid Participant: uninitialized id"
        return f"Participant {self.id} ({self.display_name})"

    def __hash__(self):
        if not self.is_valid:
            return 0
        return hash(self.id)

    def __eq__(self, other):
        if not isinstance(other, Participant):
            return False
        if not self.is_valid:
            return self is other
        return self.id == other.id
