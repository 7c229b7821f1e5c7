import logging
from abc import ABC, abstractmethod
from functools import partial
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from scheddo.config.database import async_session_manager
from scheddo.events.dtos import EventNotFoundError
from scheddo.events.repository.orm_models import Event
from scheddo.identities.dtos import InviteeType
from scheddo.invitations.dtos import ReminderResult
from scheddo.invitations.features.deliver_reminder.write_model import DeliverReminderWriteModel
from scheddo.invitations.repository.orm_models import Invitation

logger = logging.getLogger(__name__)


class DeliverRemindersWriteModel(ABC):
    @abstractmethod
    async def deliver_reminders(self, event_uuid: str, excluding_user_id: UUID | None) -> list[ReminderResult]:
        """
        Remind every invitee of the event except the given user.

        Raises:
            EventNotFoundError: If there is no such event.
        """
        raise NotImplementedError


class SqlDeliverRemindersWriteModel(DeliverRemindersWriteModel):
    async_session_manager = staticmethod(partial(async_session_manager, auto_commit=False))

    def __init__(
        self,
        reminder_write_model: DeliverReminderWriteModel,
        session_overwrite: AsyncSession | None = None,
    ) -> None:
        self.reminder_write_model = reminder_write_model
        self.session_overwrite = session_overwrite

    async def deliver_reminders(self, event_uuid: str, excluding_user_id: UUID | None) -> list[ReminderResult]:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            event_id = (
                await session.execute(select(Event.uuid).where(Event.public_uuid == event_uuid))
            ).scalar_one_or_none()
            if event_id is None:
                raise EventNotFoundError(event_uuid)

            result = await session.execute(
                select(Invitation.uuid, Invitation.invitee_type, Invitation.invitee_id)
                .where(Invitation.event_id == event_id)
                .order_by(Invitation.created_at)
            )
            invitation_ids = [
                invitation_id
                for invitation_id, invitee_type, invitee_id in result.all()
                if not (invitee_type == InviteeType.USER and invitee_id == excluding_user_id)
            ]

        results = []
        for invitation_id in invitation_ids:
            results.append(await self.reminder_write_model.deliver_reminder(invitation_id))

        delivered = sum(1 for r in results if r.delivered)
        logger.info(f"Delivered {delivered} of {len(results)} reminders for event {event_uuid}")
        return results
