"""Write model for creating invitations.

Creating an invitation runs the invitation checks in a fixed order, saves the
invitation, and only after the transaction is committed sends the single
notification (unless suppressed). Notification failures never undo the
invitation.
"""

import logging
from abc import ABC, abstractmethod
from functools import partial

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from scheddo.config.database import async_session_manager
from scheddo.events.repository.orm_models import Event
from scheddo.identities.dtos import InviteeDTO, InviteeType, UserDTO
from scheddo.identities.repository.write_models import SqlIdentityWriteModel
from scheddo.invitations.dtos import (
    DuplicateInviteError,
    InvitationDTO,
    InviteeDescriptor,
    NotificationChannel,
    NotificationContext,
    NotificationDeliveryFailure,
    NotificationKind,
    SelfInviteError,
)
from scheddo.invitations.notifier import InvitationNotifier
from scheddo.invitations.repository.orm_models import Invitation
from scheddo.invitations.resolver import InvitationResolver
from scheddo.models.base import as_utc
from scheddo.validation import ValidationError
from scheddo.yammer.client import YammerClient

logger = logging.getLogger(__name__)


class CreateInvitationWriteModel(ABC):
    """Abstract base class for creating invitations."""

    @abstractmethod
    async def create_invitation(
        self,
        event_uuid: str,
        descriptor: InviteeDescriptor | None = None,
        invitee: InviteeDTO | None = None,
        skip_notification: bool = False,
    ) -> InvitationDTO:
        """Invite an invitee, given either as a descriptor or already resolved.

        Raises:
            ValidationError: If the event or the invitee is missing.
            SelfInviteError: If the invitee is the event owner.
            DuplicateInviteError: If the invitee is already invited.
            InviteeLookupFailure: If Yammer failed while resolving the descriptor.
        """
        raise NotImplementedError

    async def invite_without_notification(self, event_uuid: str, invitee: InviteeDTO) -> InvitationDTO:
        return await self.create_invitation(event_uuid, invitee=invitee, skip_notification=True)


class SqlCreateInvitationWriteModel(CreateInvitationWriteModel):
    """SQL implementation of invitation creation."""

    async_session_manager = staticmethod(partial(async_session_manager))

    def __init__(
        self,
        session_overwrite: AsyncSession | None = None,
        yammer_client: YammerClient | None = None,
        notifier: InvitationNotifier | None = None,
    ) -> None:
        self.session_overwrite = session_overwrite
        self.yammer_client = yammer_client
        self.notifier = notifier

    async def create_invitation(
        self,
        event_uuid: str,
        descriptor: InviteeDescriptor | None = None,
        invitee: InviteeDTO | None = None,
        skip_notification: bool = False,
    ) -> InvitationDTO:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            # 1. event present
            event = await self._get_event(session, event_uuid)
            if event is None:
                raise ValidationError({"event": ["can't be blank"]})
            organizer = UserDTO.from_user(event.owner)

            # 2. something to identify the invitee by
            if invitee is None and descriptor is None:
                raise ValidationError({"invitee_type": ["can't be blank"]})

            # 3. invitee resolved
            if invitee is None:
                resolver = InvitationResolver(
                    SqlIdentityWriteModel(session_overwrite=session, yammer_client=self.yammer_client)
                )
                invitee = await resolver.resolve(descriptor, creator=organizer)
            if invitee is None:
                raise ValidationError({"invitee_id": ["is invalid"]})

            # 4. not the owner
            if invitee.type == InviteeType.USER and invitee.id == event.owner_id:
                raise SelfInviteError()

            # 5. not invited yet
            if await self._already_invited(session, event, invitee):
                raise DuplicateInviteError()

            invitation = Invitation(
                event_id=event.uuid,
                invitee_type=invitee.type,
                invitee_id=invitee.id,
            )
            session.add(invitation)
            try:
                await session.flush()
            except IntegrityError as e:
                # lost a race against a concurrent invite of the same invitee
                raise DuplicateInviteError() from e

            logger.info(f"Invited {invitee.type.value} {invitee.id} to event {event.public_uuid}")
            context = NotificationContext(
                invitation_id=invitation.uuid,
                event_uuid=event.public_uuid,
                event_name=event.name,
                organizer=organizer,
                invitee=invitee,
            )
            created_at = as_utc(invitation.created_at)

        channel = None
        if not skip_notification:
            channel = await self._notify(context)

        return InvitationDTO(
            id=context.invitation_id,
            event_uuid=context.event_uuid,
            invitee=invitee,
            created_at=created_at,
            notified=channel is not None,
            channel=channel,
        )

    async def _notify(self, context: NotificationContext) -> NotificationChannel | None:
        if self.notifier is None:
            logger.warning(f"No notifier configured, invitation {context.invitation_id} not announced")
            return None
        try:
            return await self.notifier.notify(context, NotificationKind.INVITATION)
        except NotificationDeliveryFailure as e:
            logger.warning(f"Invitation {context.invitation_id} saved but not delivered: {e}")
            return None
        except Exception:
            logger.exception(f"Invitation {context.invitation_id} saved, notifying it failed unexpectedly")
            return None

    @staticmethod
    async def _get_event(session: AsyncSession, event_uuid: str) -> Event | None:
        result = await session.execute(select(Event).where(Event.public_uuid == event_uuid))
        return result.unique().scalar_one_or_none()

    @staticmethod
    async def _already_invited(session: AsyncSession, event: Event, invitee: InviteeDTO) -> bool:
        result = await session.execute(
            select(Invitation.uuid).where(
                Invitation.event_id == event.uuid,
                Invitation.invitee_type == invitee.type,
                Invitation.invitee_id == invitee.id,
            )
        )
        return result.first() is not None
