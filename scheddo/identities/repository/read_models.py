import abc
from functools import partial
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from scheddo.config.database import async_session_manager
from scheddo.identities.dtos import InviteeDTO, InviteeType, UserDTO
from scheddo.identities.repository.orm_models import Group, Guest, User

INVITEE_MODELS = {
    InviteeType.USER: User,
    InviteeType.GUEST: Guest,
    InviteeType.GROUP: Group,
}


async def load_invitee(session: AsyncSession, invitee_type: InviteeType, invitee_id: UUID) -> InviteeDTO | None:
    """Fetch the current state of an invitee of any variant."""
    record = await session.get(INVITEE_MODELS[invitee_type], invitee_id, populate_existing=True)
    if record is None:
        return None
    if invitee_type == InviteeType.USER:
        return InviteeDTO.from_user(record)
    if invitee_type == InviteeType.GUEST:
        return InviteeDTO.from_guest(record)
    return InviteeDTO.from_group(record)


class IdentityReadModel(abc.ABC):
    @abc.abstractmethod
    async def get_user(self, user_id: UUID) -> UserDTO | None:
        raise NotImplementedError

    @abc.abstractmethod
    async def get_invitee(self, invitee_type: InviteeType, invitee_id: UUID) -> InviteeDTO | None:
        raise NotImplementedError


class SqlIdentityReadModel(IdentityReadModel):
    async_session_manager = staticmethod(partial(async_session_manager, auto_commit=False))

    def __init__(self, session_overwrite: AsyncSession | None = None) -> None:
        self.session_overwrite = session_overwrite

    async def get_user(self, user_id: UUID) -> UserDTO | None:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            user = await session.get(User, user_id, populate_existing=True)
            return UserDTO.from_user(user) if user else None

    async def get_invitee(self, invitee_type: InviteeType, invitee_id: UUID) -> InviteeDTO | None:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            return await load_invitee(session, invitee_type, invitee_id)
