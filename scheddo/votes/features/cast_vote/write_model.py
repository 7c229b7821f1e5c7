import logging
from abc import ABC, abstractmethod
from functools import partial
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from scheddo.config.database import async_session_manager
from scheddo.events.activity import VOTE
from scheddo.events.jobs import EventActivityJob
from scheddo.events.repository.orm_models import Event, Suggestion
from scheddo.identities.repository.orm_models import User
from scheddo.jobs import JobQueue
from scheddo.validation import Errors
from scheddo.votes.dtos import AlreadyVotedError, VoteDTO
from scheddo.votes.repository.orm_models import Vote
from scheddo.votes.repository.read_models import SqlVoteReadModel

logger = logging.getLogger(__name__)


class CastVoteWriteModel(ABC):
    @abstractmethod
    async def cast_vote(self, user_id: UUID, suggestion_id: UUID) -> VoteDTO:
        """Record a user's vote for a suggestion.

        Raises:
            ValidationError: If the user or the suggestion does not exist.
            AlreadyVotedError: If the user already voted for the suggestion.
        """
        raise NotImplementedError


class SqlCastVoteWriteModel(CastVoteWriteModel):
    async_session_manager = staticmethod(partial(async_session_manager))

    def __init__(self, job_queue: JobQueue, session_overwrite: AsyncSession | None = None) -> None:
        self.job_queue = job_queue
        self.session_overwrite = session_overwrite

    async def cast_vote(self, user_id: UUID, suggestion_id: UUID) -> VoteDTO:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            errors = Errors()
            if await session.get(User, user_id) is None:
                errors.add("user", "can't be blank")
            event_uuid = (
                await session.execute(
                    select(Event.public_uuid)
                    .join(Suggestion, Suggestion.event_id == Event.uuid)
                    .where(Suggestion.uuid == suggestion_id)
                )
            ).scalar_one_or_none()
            if event_uuid is None:
                errors.add("suggestion", "can't be blank")
            errors.raise_if_any()

            if await SqlVoteReadModel(session_overwrite=session).voted_for(user_id, suggestion_id):
                raise AlreadyVotedError(user_id, suggestion_id)

            vote = Vote(user_id=user_id, suggestion_id=suggestion_id)
            session.add(vote)
            try:
                await session.flush()
            except IntegrityError as e:
                raise AlreadyVotedError(user_id, suggestion_id) from e
            created = VoteDTO.from_vote(vote)

        logger.info(f"User {user_id} voted for suggestion {suggestion_id} of event {event_uuid}")
        self.job_queue.enqueue(EventActivityJob(user_id, VOTE, event_uuid))
        return created
