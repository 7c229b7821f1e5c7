import abc
from functools import partial
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from scheddo.config.database import async_session_manager
from scheddo.votes.dtos import VoteDTO
from scheddo.votes.repository.orm_models import Vote


class VoteReadModel(abc.ABC):
    @abc.abstractmethod
    async def vote_for_suggestion(self, user_id: UUID, suggestion_id: UUID) -> VoteDTO | None:
        """The user's vote for a suggestion, if they cast one."""
        raise NotImplementedError

    async def voted_for(self, user_id: UUID, suggestion_id: UUID) -> bool:
        return await self.vote_for_suggestion(user_id, suggestion_id) is not None


class SqlVoteReadModel(VoteReadModel):
    async_session_manager = staticmethod(partial(async_session_manager, auto_commit=False))

    def __init__(self, session_overwrite: AsyncSession | None = None) -> None:
        self.session_overwrite = session_overwrite

    async def vote_for_suggestion(self, user_id: UUID, suggestion_id: UUID) -> VoteDTO | None:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            result = await session.execute(
                select(Vote).where(Vote.user_id == user_id, Vote.suggestion_id == suggestion_id)
            )
            vote = result.scalar_one_or_none()
            return VoteDTO.from_vote(vote) if vote else None
