from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING
from uuid import UUID

from scheddo.models.base import as_utc

if TYPE_CHECKING:
    from scheddo.votes.repository.orm_models import Vote


class AlreadyVotedError(Exception):
    """Raised when a user votes twice for the same suggestion."""

    def __init__(self, user_id: UUID, suggestion_id: UUID) -> None:
        self.user_id = user_id
        self.suggestion_id = suggestion_id
        super().__init__("has already voted for this suggestion")


@dataclass(frozen=True)
class VoteDTO:
    id: UUID
    user_id: UUID
    suggestion_id: UUID
    created_at: datetime

    @classmethod
    def from_vote(cls, vote: "Vote") -> "VoteDTO":
        return cls(
            id=vote.uuid,
            user_id=vote.user_id,
            suggestion_id=vote.suggestion_id,
            created_at=as_utc(vote.created_at),
        )
