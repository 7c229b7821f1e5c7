"""Tests for the deliver reminders endpoint."""

from datetime import UTC, datetime
from uuid import UUID, uuid4

import pytest

from scheddo.events.dtos import EventNotFoundError
from scheddo.events.features.deliver_reminders.router import get_deliver_reminders_write_model
from scheddo.events.features.deliver_reminders.write_model import DeliverRemindersWriteModel
from scheddo.identities.dtos import InviteeDTO, InviteeType
from scheddo.invitations.dtos import NotificationChannel, ReminderResult
from scheddo.urls import EVENT_REMINDERS_URL


class InMemoryDeliverRemindersWriteModel(DeliverRemindersWriteModel):
    def __init__(self, memory: dict):
        self._memory = memory

    async def deliver_reminders(self, event_uuid: str, excluding_user_id: UUID | None) -> list[ReminderResult]:
        if event_uuid != "abcd1234":
            raise EventNotFoundError(event_uuid)
        self._memory["excluding_user_id"] = excluding_user_id
        guest = InviteeDTO(
            type=InviteeType.GUEST, id=uuid4(), name=None, email="a@x.com", created_at=datetime.now(UTC)
        )
        return [
            ReminderResult(invitation_id=uuid4(), invitee=guest, delivered=True, channel=NotificationChannel.EMAIL),
            ReminderResult(invitation_id=uuid4(), invitee=None, delivered=False, error="Invitee not found"),
        ]


@pytest.mark.asyncio
async def test_deliver_reminders(client_factory):
    memory = {}
    organizer_id = uuid4()
    overrides = {get_deliver_reminders_write_model: lambda: InMemoryDeliverRemindersWriteModel(memory)}

    async with client_factory(overrides) as client:
        response = await client.post(
            EVENT_REMINDERS_URL.format(event_uuid="abcd1234"),
            json={"excluding_user_id": str(organizer_id)},
        )

    assert response.status_code == 200
    data = response.json()
    assert data[0]["email"] == "a@x.com"
    assert data[0]["channel"] == "email"
    assert data[1]["delivered"] is False
    assert memory["excluding_user_id"] == organizer_id


@pytest.mark.asyncio
async def test_deliver_reminders_unknown_event(client_factory):
    overrides = {get_deliver_reminders_write_model: lambda: InMemoryDeliverRemindersWriteModel({})}

    async with client_factory(overrides) as client:
        response = await client.post(EVENT_REMINDERS_URL.format(event_uuid="ffffffff"), json={})

    assert response.status_code == 404
