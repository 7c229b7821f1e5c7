"""Tests for SqlEventCreateWriteModel against the test database."""

import re
from uuid import uuid4

import pytest
from sqlalchemy import func, select

from scheddo.events.dtos import SuggestionInput
from scheddo.events.features.create_event.write_model import (
    NO_SUGGESTIONS_MESSAGE,
    SqlEventCreateWriteModel,
    build_suggestions,
)
from scheddo.events.jobs import EventCreatedJob
from scheddo.events.repository.orm_models import Event, Suggestion
from scheddo.events.repository.read_models import SqlEventReadModel
from scheddo.identities.dtos import InviteeType
from scheddo.invitations.dtos import InviteeDescriptor
from scheddo.invitations.repository.orm_models import Invitation
from scheddo.validation import ValidationError
from scheddo.yammer.dtos import YammerError

TEAM_LUNCH_SUGGESTIONS = [SuggestionInput("Mon 12pm"), SuggestionInput("Tue 1pm")]


@pytest.fixture
def write_model(db_session, job_queue, yammer_client, notifier) -> SqlEventCreateWriteModel:
    return SqlEventCreateWriteModel(
        job_queue=job_queue,
        session_overwrite=db_session,
        yammer_client=yammer_client,
        notifier=notifier,
    )


async def count_events(db_session, name: str) -> int:
    result = await db_session.execute(
        select(func.count()).select_from(Event).where(Event.name == name)
    )
    return result.scalar_one()


async def test_team_lunch_scenario(write_model, db_session, make_user, job_queue, email_service):
    owner = await make_user(name="Organizer O")

    event = await write_model.create_event(
        owner_id=owner.uuid,
        name="Team Lunch",
        suggestions=TEAM_LUNCH_SUGGESTIONS,
        invitees=[InviteeDescriptor(name_or_email="a@x.com")],
    )

    assert re.fullmatch(r"[0-9a-f]{8}", event.uuid)
    assert [s.primary for s in event.suggestions] == ["Mon 12pm", "Tue 1pm"]
    assert event.invitation_errors == []

    invitations = (
        await db_session.execute(
            select(Invitation.invitee_type)
            .join(Event, Event.uuid == Invitation.event_id)
            .where(Event.public_uuid == event.uuid)
        )
    ).scalars().all()
    assert sorted(invitations) == [InviteeType.GUEST, InviteeType.USER]

    email_service.send_invitation.assert_awaited_once()
    kwargs = email_service.send_invitation.await_args.kwargs
    assert kwargs["to_address"] == "a@x.com"
    assert kwargs["event_name"] == "Team Lunch"

    assert len(job_queue.jobs) == 1
    job = job_queue.jobs[0]
    assert isinstance(job, EventCreatedJob)
    assert job.event_uuid == event.uuid
    assert job.actor_id == owner.uuid

    invitees = await SqlEventReadModel(session_overwrite=db_session).invitees_for_json(event.uuid)
    assert {"name": None, "email": "a@x.com"} in invitees


async def test_owner_is_invited_without_notification(write_model, make_user, email_service, yammer_client):
    owner = await make_user()

    await write_model.create_event(owner_id=owner.uuid, name="Quiet", suggestions=TEAM_LUNCH_SUGGESTIONS)

    email_service.send_invitation.assert_not_called()
    yammer_client.send_private_message.assert_not_called()


async def test_name_too_long(write_model, db_session, make_user, job_queue):
    owner = await make_user()
    name = "x" * 71

    with pytest.raises(ValidationError) as exc_info:
        await write_model.create_event(owner_id=owner.uuid, name=name, suggestions=TEAM_LUNCH_SUGGESTIONS)

    assert exc_info.value.errors == {"name": ["is too long (maximum is 70 characters)"]}
    assert await count_events(db_session, name) == 0
    assert job_queue.jobs == []


async def test_trailing_spaces_count_towards_name_length(write_model, make_user):
    owner = await make_user()

    with pytest.raises(ValidationError) as exc_info:
        await write_model.create_event(
            owner_id=owner.uuid, name="x" * 70 + "  ", suggestions=TEAM_LUNCH_SUGGESTIONS
        )

    assert exc_info.value.errors == {"name": ["is too long (maximum is 70 characters)"]}


async def test_name_of_70_characters_is_fine(write_model, make_user):
    owner = await make_user()

    event = await write_model.create_event(
        owner_id=owner.uuid, name="x" * 70, suggestions=TEAM_LUNCH_SUGGESTIONS
    )

    assert len(event.name) == 70


async def test_blank_name(write_model, make_user):
    owner = await make_user()

    with pytest.raises(ValidationError) as exc_info:
        await write_model.create_event(owner_id=owner.uuid, name="  ", suggestions=TEAM_LUNCH_SUGGESTIONS)

    assert exc_info.value.errors["name"] == ["This field is required"]


@pytest.mark.parametrize(
    "suggestions",
    [
        [SuggestionInput(), SuggestionInput("  ", "")],
        [],
    ],
)
async def test_all_suggestions_blank(write_model, db_session, make_user, suggestions):
    owner = await make_user()

    with pytest.raises(ValidationError) as exc_info:
        await write_model.create_event(owner_id=owner.uuid, name="Blank Lunch", suggestions=suggestions)

    assert exc_info.value.errors == {"suggestions": [NO_SUGGESTIONS_MESSAGE]}
    assert await count_events(db_session, "Blank Lunch") == 0


async def test_blank_slots_are_dropped(write_model, db_session, make_user):
    owner = await make_user()

    event = await write_model.create_event(
        owner_id=owner.uuid,
        name="One Slot",
        suggestions=[SuggestionInput(), SuggestionInput(" Wed 9am ", "coffee")],
    )

    assert [(s.primary, s.secondary, s.position) for s in event.suggestions] == [("Wed 9am", "coffee", 0)]
    count = (
        await db_session.execute(
            select(func.count()).select_from(Suggestion).join(Event).where(Event.public_uuid == event.uuid)
        )
    ).scalar_one()
    assert count == 1


async def test_missing_owner(write_model, db_session):
    with pytest.raises(ValidationError) as exc_info:
        await write_model.create_event(owner_id=uuid4(), name="Orphan", suggestions=TEAM_LUNCH_SUGGESTIONS)

    assert exc_info.value.errors == {"owner": ["can't be blank"]}
    assert await count_events(db_session, "Orphan") == 0


async def test_failed_invitations_are_collected(write_model, make_user, yammer_client):
    owner = await make_user(email="owner@example.com")
    yammer_client.get_user.side_effect = YammerError("unreachable")

    event = await write_model.create_event(
        owner_id=owner.uuid,
        name="Partial",
        suggestions=TEAM_LUNCH_SUGGESTIONS,
        invitees=[
            InviteeDescriptor(name_or_email="owner@example.com"),
            InviteeDescriptor(yammer_user_id=424242),
            InviteeDescriptor(name_or_email="ok@example.com"),
            InviteeDescriptor(name_or_email="ok@example.com"),
        ],
    )

    assert event.invitation_errors[0] == "You can not invite yourself"
    assert "424242" in event.invitation_errors[1]
    assert event.invitation_errors[2] == "invitee_id has already been invited"
    assert len(event.invitation_errors) == 3


def test_build_suggestions_pads_to_two_slots():
    assert build_suggestions() == [SuggestionInput(), SuggestionInput()]
    assert build_suggestions([SuggestionInput("Mon")]) == [SuggestionInput("Mon"), SuggestionInput()]
    three = [SuggestionInput("a"), SuggestionInput("b"), SuggestionInput("c")]
    assert build_suggestions(three) == three
