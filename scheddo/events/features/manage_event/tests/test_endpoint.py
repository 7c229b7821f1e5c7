"""Tests for the update and delete event endpoints."""

from datetime import UTC, datetime
from uuid import UUID, uuid4

import pytest

from scheddo.events.dtos import EventDTO, NotEventOwnerError, SuggestionDiff
from scheddo.events.features.manage_event.router import get_manage_event_write_model
from scheddo.events.features.manage_event.write_model import ManageEventWriteModel
from scheddo.urls import EVENT_URL

OWNER_ID = uuid4()


class InMemoryManageEventWriteModel(ManageEventWriteModel):
    def __init__(self, memory: dict):
        self._memory = memory

    async def update_event(
        self,
        event_uuid: str,
        editor_id: UUID,
        name: str | None = None,
        suggestions: SuggestionDiff | None = None,
    ) -> EventDTO:
        if editor_id != OWNER_ID:
            raise NotEventOwnerError(event_uuid)
        self._memory["update"] = {"name": name, "suggestions": suggestions}
        return EventDTO(
            uuid=event_uuid,
            name=name,
            owner_id=OWNER_ID,
            owner_name="Ralph Robot",
            created_at=datetime.now(UTC),
        )

    async def delete_event(self, event_uuid: str, editor_id: UUID) -> None:
        if editor_id != OWNER_ID:
            raise NotEventOwnerError(event_uuid)
        self._memory["deleted"] = event_uuid


@pytest.mark.asyncio
async def test_update_event(client_factory):
    memory = {}
    removed = uuid4()
    overrides = {get_manage_event_write_model: lambda: InMemoryManageEventWriteModel(memory)}

    async with client_factory(overrides) as client:
        response = await client.patch(
            EVENT_URL.format(event_uuid="abcd1234"),
            json={
                "editor_id": str(OWNER_ID),
                "name": "Team Dinner",
                "suggestions": {"added": [{"primary": "Wed 7pm"}], "removed": [str(removed)]},
            },
        )

    assert response.status_code == 200
    assert response.json()["name"] == "Team Dinner"
    diff = memory["update"]["suggestions"]
    assert diff.added[0].primary == "Wed 7pm"
    assert diff.removed == [removed]


@pytest.mark.asyncio
async def test_update_by_someone_else_is_forbidden(client_factory):
    overrides = {get_manage_event_write_model: lambda: InMemoryManageEventWriteModel({})}

    async with client_factory(overrides) as client:
        response = await client.patch(
            EVENT_URL.format(event_uuid="abcd1234"), json={"editor_id": str(uuid4()), "name": "Mine"}
        )

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_delete_event(client_factory):
    memory = {}
    overrides = {get_manage_event_write_model: lambda: InMemoryManageEventWriteModel(memory)}

    async with client_factory(overrides) as client:
        response = await client.delete(
            EVENT_URL.format(event_uuid="abcd1234"), params={"editor_id": str(OWNER_ID)}
        )

    assert response.status_code == 204
    assert memory["deleted"] == "abcd1234"
