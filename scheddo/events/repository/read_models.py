import abc
from functools import partial
from uuid import UUID

from sqlalchemy import and_, select
from sqlalchemy.ext.asyncio import AsyncSession

from scheddo.config.database import async_session_manager
from scheddo.events.dtos import EventDTO
from scheddo.events.repository.orm_models import Event, Suggestion
from scheddo.identities.dtos import InviteeDTO, InviteeType
from scheddo.identities.repository.orm_models import Guest, User
from scheddo.invitations.repository.orm_models import Invitation
from scheddo.votes.dtos import VoteDTO
from scheddo.votes.repository.orm_models import Vote


class EventReadModel(abc.ABC):
    @abc.abstractmethod
    async def get_event(self, event_uuid: str) -> EventDTO | None:
        raise NotImplementedError

    @abc.abstractmethod
    async def invitees(self, event_uuid: str) -> list[InviteeDTO]:
        """
        Users and guests invited to the event, most recently created first.
        Groups are left out.
        """
        raise NotImplementedError

    async def invitees_for_json(self, event_uuid: str) -> list[dict]:
        return [invitee.as_json() for invitee in await self.invitees(event_uuid)]

    @abc.abstractmethod
    async def user_owns_event(self, event_uuid: str, user_id: UUID) -> bool:
        raise NotImplementedError

    async def user_is_invited(self, event_uuid: str, user_id: UUID) -> bool:
        return any(
            invitee.is_user and invitee.id == user_id for invitee in await self.invitees(event_uuid)
        )

    @abc.abstractmethod
    async def user_votes(self, event_uuid: str, user_id: UUID) -> list[VoteDTO]:
        raise NotImplementedError

    async def user_has_voted(self, event_uuid: str, user_id: UUID) -> bool:
        return bool(await self.user_votes(event_uuid, user_id))


class SqlEventReadModel(EventReadModel):
    """SQL implementation of event read model."""

    async_session_manager = staticmethod(partial(async_session_manager, auto_commit=False))

    def __init__(self, session_overwrite: AsyncSession | None = None) -> None:
        self.session_overwrite = session_overwrite

    async def get_event(self, event_uuid: str) -> EventDTO | None:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            event = await self._get_event(session, event_uuid)
            return EventDTO.from_event(event) if event else None

    async def invitees(self, event_uuid: str) -> list[InviteeDTO]:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            users_stmt = (
                select(User)
                .join(
                    Invitation,
                    and_(
                        Invitation.invitee_type == InviteeType.USER,
                        Invitation.invitee_id == User.uuid,
                    ),
                )
                .join(Event, Event.uuid == Invitation.event_id)
                .where(Event.public_uuid == event_uuid)
                .order_by(Invitation.created_at)
            )
            guests_stmt = (
                select(Guest)
                .join(
                    Invitation,
                    and_(
                        Invitation.invitee_type == InviteeType.GUEST,
                        Invitation.invitee_id == Guest.uuid,
                    ),
                )
                .join(Event, Event.uuid == Invitation.event_id)
                .where(Event.public_uuid == event_uuid)
                .order_by(Invitation.created_at)
            )
            users = (await session.execute(users_stmt)).scalars().all()
            guests = (await session.execute(guests_stmt)).scalars().all()

            invitees = [InviteeDTO.from_user(u) for u in users] + [InviteeDTO.from_guest(g) for g in guests]
            # sorted() is stable, so ties keep users before guests in invitation order
            return sorted(invitees, key=lambda invitee: invitee.created_at, reverse=True)

    async def user_owns_event(self, event_uuid: str, user_id: UUID) -> bool:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            result = await session.execute(
                select(Event.owner_id).where(Event.public_uuid == event_uuid)
            )
            owner_id = result.scalar_one_or_none()
            return owner_id is not None and owner_id == user_id

    async def user_votes(self, event_uuid: str, user_id: UUID) -> list[VoteDTO]:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            stmt = (
                select(Vote)
                .join(Suggestion, Suggestion.uuid == Vote.suggestion_id)
                .join(Event, Event.uuid == Suggestion.event_id)
                .where(Event.public_uuid == event_uuid, Vote.user_id == user_id)
                .order_by(Vote.created_at)
            )
            votes = (await session.execute(stmt)).scalars().all()
            return [VoteDTO.from_vote(vote) for vote in votes]

    @staticmethod
    async def _get_event(session: AsyncSession, event_uuid: str) -> Event | None:
        result = await session.execute(select(Event).where(Event.public_uuid == event_uuid))
        return result.unique().scalar_one_or_none()


def get_event_read_model() -> EventReadModel:
    return SqlEventReadModel()
