"""Identity store write model.

Finds or creates the canonical User, Guest or Group for a natural key
(Yammer user id, email address, Yammer group id). Returns DTOs, never ORM
models.
"""

import logging
from abc import ABC, abstractmethod
from functools import partial

from email_validator import EmailNotValidError, validate_email
from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from scheddo.config.database import async_session_manager
from scheddo.identities.dtos import InviteeDTO, UserDTO
from scheddo.identities.repository.orm_models import Group, Guest, User
from scheddo.validation import ValidationError
from scheddo.yammer.client import YammerClient
from scheddo.yammer.dtos import YammerUserProfile

logger = logging.getLogger(__name__)


def insert_ignoring_conflicts(session: AsyncSession, model, index_elements: list[str], **values):
    """INSERT that leaves an existing row with the same unique key untouched."""
    dialect = session.get_bind().dialect.name
    insert = postgresql.insert if dialect == "postgresql" else sqlite.insert
    return insert(model).values(**values).on_conflict_do_nothing(index_elements=index_elements)


class IdentityWriteModel(ABC):
    """Abstract base class for identity store operations."""

    @abstractmethod
    async def find_or_create_user_with_auth(
        self,
        access_token: str,
        yammer_staging: bool,
        yammer_user_id: int,
        refresh_token: bool = True,
    ) -> UserDTO:
        """Find a user by Yammer id, or fetch the profile and create it.

        ``access_token`` is used for the Yammer lookup. It is stored on an
        existing user only with ``refresh_token``, which callers acting for
        somebody else must turn off.

        Raises:
            YammerError: If the profile has to be fetched and Yammer fails.
        """
        raise NotImplementedError

    @abstractmethod
    async def find_or_create_group(self, yammer_group_id: int, name: str | None) -> InviteeDTO:
        raise NotImplementedError

    @abstractmethod
    async def find_user_by_email(self, email: str) -> InviteeDTO | None:
        raise NotImplementedError

    @abstractmethod
    async def find_guest_by_email(self, email: str) -> InviteeDTO | None:
        raise NotImplementedError

    @abstractmethod
    async def create_guest_without_name_validation(self, email: str) -> InviteeDTO:
        """Find or create a guest known only by email address.

        Raises:
            ValidationError: If the email address is invalid.
        """
        raise NotImplementedError


class SqlIdentityWriteModel(IdentityWriteModel):
    """SQL implementation of the identity store."""

    async_session_manager = staticmethod(partial(async_session_manager))

    def __init__(
        self,
        session_overwrite: AsyncSession | None = None,
        yammer_client: YammerClient | None = None,
    ) -> None:
        self.session_overwrite = session_overwrite
        self.yammer_client = yammer_client

    async def find_or_create_user_with_auth(
        self,
        access_token: str,
        yammer_staging: bool,
        yammer_user_id: int,
        refresh_token: bool = True,
    ) -> UserDTO:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            result = await session.execute(select(User).where(User.yammer_user_id == yammer_user_id))
            user = result.scalar_one_or_none()

            if user is not None:
                if refresh_token:
                    user.access_token = access_token
                    await session.flush()
                return UserDTO.from_user(user)

            if self.yammer_client is None:
                raise RuntimeError("A Yammer client is required to create users")

            profile = await self.yammer_client.get_user(access_token, yammer_staging, yammer_user_id)
            user = User(yammer_user_id=yammer_user_id, yammer_staging=yammer_staging)
            user.access_token = access_token
            self._apply_profile(user, profile)
            session.add(user)
            await session.flush()
            logger.info(f"Created user {user.uuid} for Yammer user {yammer_user_id}")
            return UserDTO.from_user(user)

    async def find_or_create_group(self, yammer_group_id: int, name: str | None) -> InviteeDTO:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            group = await self._get_group(session, yammer_group_id)

            if group is None:
                # a concurrent invite may have created the group since the lookup
                await session.execute(
                    insert_ignoring_conflicts(
                        session, Group, ["yammer_group_id"], yammer_group_id=yammer_group_id, name=name
                    )
                )
                group = await self._get_group(session, yammer_group_id)

            return InviteeDTO.from_group(group)

    async def find_user_by_email(self, email: str) -> InviteeDTO | None:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            result = await session.execute(select(User).where(User.email == email))
            user = result.scalar_one_or_none()
            return InviteeDTO.from_user(user) if user else None

    async def find_guest_by_email(self, email: str) -> InviteeDTO | None:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            guest = await self._get_guest(session, email)
            return InviteeDTO.from_guest(guest) if guest else None

    async def create_guest_without_name_validation(self, email: str) -> InviteeDTO:
        email = email.strip()
        try:
            validate_email(email, check_deliverability=False)
        except EmailNotValidError as e:
            raise ValidationError({"email": ["is invalid"]}) from e

        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            await session.execute(
                insert_ignoring_conflicts(session, Guest, ["email"], email=email, name=None)
            )
            return InviteeDTO.from_guest(await self._get_guest(session, email))

    async def _get_group(self, session: AsyncSession, yammer_group_id: int) -> Group | None:
        result = await session.execute(select(Group).where(Group.yammer_group_id == yammer_group_id))
        return result.scalar_one_or_none()

    async def _get_guest(self, session: AsyncSession, email: str) -> Guest | None:
        result = await session.execute(select(Guest).where(Guest.email == email))
        return result.scalar_one_or_none()

    @staticmethod
    def _apply_profile(user: User, profile: YammerUserProfile) -> None:
        user.name = profile.full_name
        user.nickname = profile.nickname
        user.email = profile.email
        user.image = profile.mugshot_url
        user.yammer_profile_url = profile.web_url
        user.yammer_network_id = profile.network_id
        user.extra = profile.model_dump(mode="json", by_alias=True)
