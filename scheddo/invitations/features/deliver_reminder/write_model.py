"""Re-sends the notification for an existing invitation.

The organizer and invitee are read again right before sending, so a change of
network since the invitation was created picks the channel that fits now.
"""

import logging
from abc import ABC, abstractmethod
from functools import partial
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from scheddo.config.database import async_session_manager
from scheddo.events.repository.orm_models import Event
from scheddo.identities.dtos import UserDTO
from scheddo.identities.repository.orm_models import User
from scheddo.identities.repository.read_models import load_invitee
from scheddo.invitations.dtos import (
    NotificationContext,
    NotificationDeliveryFailure,
    NotificationKind,
    ReminderResult,
)
from scheddo.invitations.notifier import InvitationNotifier
from scheddo.invitations.repository.orm_models import Invitation

logger = logging.getLogger(__name__)


class DeliverReminderWriteModel(ABC):
    @abstractmethod
    async def deliver_reminder(self, invitation_id: UUID) -> ReminderResult:
        """Remind the invitee of one invitation. Failures end up in the result."""
        raise NotImplementedError


class SqlDeliverReminderWriteModel(DeliverReminderWriteModel):
    async_session_manager = staticmethod(partial(async_session_manager, auto_commit=False))

    def __init__(
        self,
        notifier: InvitationNotifier,
        session_overwrite: AsyncSession | None = None,
    ) -> None:
        self.notifier = notifier
        self.session_overwrite = session_overwrite

    async def deliver_reminder(self, invitation_id: UUID) -> ReminderResult:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            invitation = await session.get(Invitation, invitation_id)
            if invitation is None:
                return ReminderResult(
                    invitation_id=invitation_id,
                    invitee=None,
                    delivered=False,
                    error="Invitation not found",
                )

            event = (
                await session.execute(select(Event).where(Event.uuid == invitation.event_id))
            ).unique().scalar_one()
            owner = await session.get(User, event.owner_id, populate_existing=True)
            invitee = await load_invitee(session, invitation.invitee_type, invitation.invitee_id)

            if invitee is None:
                logger.warning(f"Invitee of invitation {invitation_id} no longer exists")
                return ReminderResult(
                    invitation_id=invitation_id,
                    invitee=None,
                    delivered=False,
                    error="Invitee not found",
                )

            context = NotificationContext(
                invitation_id=invitation.uuid,
                event_uuid=event.public_uuid,
                event_name=event.name,
                organizer=UserDTO.from_user(owner),
                invitee=invitee,
            )

        try:
            channel = await self.notifier.notify(context, NotificationKind.REMINDER)
        except NotificationDeliveryFailure as e:
            logger.warning(f"Reminder for invitation {invitation_id} not delivered: {e}")
            return ReminderResult(
                invitation_id=invitation_id,
                invitee=invitee,
                delivered=False,
                error=str(e),
            )
        except Exception as e:
            logger.exception(f"Reminder for invitation {invitation_id} failed unexpectedly")
            return ReminderResult(
                invitation_id=invitation_id,
                invitee=invitee,
                delivered=False,
                error=str(e),
            )

        return ReminderResult(
            invitation_id=invitation_id,
            invitee=invitee,
            delivered=True,
            channel=channel,
        )
