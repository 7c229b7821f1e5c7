from uuid import UUID

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from scheddo.events.features.deliver_reminders.write_model import (
    DeliverRemindersWriteModel,
    SqlDeliverRemindersWriteModel,
)
from scheddo.invitations.dtos import NotificationChannel
from scheddo.invitations.features.deliver_reminder.write_model import SqlDeliverReminderWriteModel
from scheddo.invitations.notifier import get_invitation_notifier
from scheddo.urls import EVENT_REMINDERS_URL

router = APIRouter()


class DeliverRemindersRequest(BaseModel):
    excluding_user_id: UUID | None = None


class ReminderResponse(BaseModel):
    invitation_id: UUID
    name: str | None = None
    email: str | None = None
    delivered: bool
    channel: NotificationChannel | None = None
    error: str | None = None


def get_deliver_reminders_write_model() -> DeliverRemindersWriteModel:
    """Dependency to get deliver reminders write model instance."""
    return SqlDeliverRemindersWriteModel(
        reminder_write_model=SqlDeliverReminderWriteModel(notifier=get_invitation_notifier()),
    )


@router.post(EVENT_REMINDERS_URL, response_model=list[ReminderResponse])
async def deliver_reminders(
    event_uuid: str,
    request: DeliverRemindersRequest,
    write_model: DeliverRemindersWriteModel = Depends(get_deliver_reminders_write_model),
) -> list[ReminderResponse]:
    """
    Remind everybody invited to the event, except the given user (normally
    the organizer asking for the reminders).
    """
    results = await write_model.deliver_reminders(event_uuid, request.excluding_user_id)
    return [
        ReminderResponse(
            invitation_id=r.invitation_id,
            name=r.invitee.name if r.invitee else None,
            email=r.invitee.email if r.invitee else None,
            delivered=r.delivered,
            channel=r.channel,
            error=r.error,
        )
        for r in results
    ]
