"""Tests for SqlCreateInvitationWriteModel against the test database."""

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from scheddo.identities.dtos import InviteeDTO, InviteeType
from scheddo.invitations.dtos import (
    DuplicateInviteError,
    InviteeDescriptor,
    InviteeLookupFailure,
    NotificationChannel,
    SelfInviteError,
)
from scheddo.invitations.features.create_invitation.write_model import (
    SqlCreateInvitationWriteModel,
)
from scheddo.invitations.repository.orm_models import Invitation
from scheddo.validation import ValidationError
from scheddo.yammer.dtos import YammerError


@pytest.fixture
def write_model(db_session, yammer_client, notifier) -> SqlCreateInvitationWriteModel:
    return SqlCreateInvitationWriteModel(
        session_overwrite=db_session, yammer_client=yammer_client, notifier=notifier
    )


async def count_invitations(db_session, event) -> int:
    result = await db_session.execute(
        select(func.count()).select_from(Invitation).where(Invitation.event_id == event.uuid)
    )
    return result.scalar_one()


async def test_inviting_new_email_creates_guest_and_sends_one_email(
    write_model, db_session, make_user, make_event, email_service, yammer_client
):
    event = await make_event(await make_user())

    invitation = await write_model.create_invitation(
        event.public_uuid, descriptor=InviteeDescriptor(name_or_email="a@x.com")
    )

    assert invitation.invitee.type == InviteeType.GUEST
    assert invitation.invitee.email == "a@x.com"
    assert invitation.notified is True
    assert invitation.channel == NotificationChannel.EMAIL
    email_service.send_invitation.assert_awaited_once()
    assert email_service.send_invitation.await_args.kwargs["event_name"] == "Team Lunch"
    yammer_client.send_private_message.assert_not_called()
    assert await count_invitations(db_session, event) == 2


async def test_inviting_in_network_user_sends_private_message(
    write_model, make_user, make_event, email_service, yammer_client
):
    owner = await make_user(yammer_network_id=5)
    colleague = await make_user(name="Joe", yammer_network_id=5)
    event = await make_event(owner)

    invitation = await write_model.create_invitation(
        event.public_uuid, descriptor=InviteeDescriptor(yammer_user_id=colleague.yammer_user_id)
    )

    assert invitation.invitee.id == colleague.uuid
    assert invitation.channel == NotificationChannel.PRIVATE_MESSAGE
    yammer_client.send_private_message.assert_awaited_once()
    email_service.send_invitation.assert_not_called()


async def test_invited_user_keeps_own_access_token(write_model, make_user, make_event):
    owner = await make_user(access_token="owner-token", yammer_network_id=5)
    colleague = await make_user(access_token="invitee-own-token", yammer_network_id=5)
    event = await make_event(owner)

    invitation = await write_model.create_invitation(
        event.public_uuid, descriptor=InviteeDescriptor(yammer_user_id=colleague.yammer_user_id)
    )

    assert invitation.invitee.id == colleague.uuid
    assert colleague.access_token == "invitee-own-token"
    assert owner.access_token == "owner-token"


async def test_inviting_twice_resolves_same_invitee_and_fails(
    write_model, db_session, make_user, make_event, email_service
):
    event = await make_event(await make_user())
    descriptor = InviteeDescriptor(name_or_email="a@x.com")

    first = await write_model.create_invitation(event.public_uuid, descriptor=descriptor)
    with pytest.raises(DuplicateInviteError) as exc_info:
        await write_model.create_invitation(event.public_uuid, descriptor=descriptor)

    assert exc_info.value.errors == {"invitee_id": ["has already been invited"]}
    assert email_service.send_invitation.await_count == 1
    assert await count_invitations(db_session, event) == 2
    assert first.invitee.type == InviteeType.GUEST


@pytest.mark.parametrize("form", ["yammer_user_id", "email"])
async def test_owner_can_not_invite_themselves(write_model, db_session, make_user, make_event, form):
    owner = await make_user(email="owner@example.com")
    event = await make_event(owner)
    descriptor = (
        InviteeDescriptor(yammer_user_id=owner.yammer_user_id)
        if form == "yammer_user_id"
        else InviteeDescriptor(name_or_email="owner@example.com")
    )

    with pytest.raises(SelfInviteError) as exc_info:
        await write_model.create_invitation(event.public_uuid, descriptor=descriptor)

    assert str(exc_info.value) == "You can not invite yourself"
    assert await count_invitations(db_session, event) == 1


async def test_yammer_lookup_failure_persists_nothing(
    write_model, db_session, make_user, make_event, yammer_client, email_service
):
    event = await make_event(await make_user())
    yammer_client.get_user.side_effect = YammerError("unreachable")

    with pytest.raises(InviteeLookupFailure):
        await write_model.create_invitation(
            event.public_uuid,
            descriptor=InviteeDescriptor(yammer_user_id=987654, name_or_email="x@example.com"),
        )

    assert await count_invitations(db_session, event) == 1
    email_service.send_invitation.assert_not_called()


async def test_notification_failure_keeps_invitation(
    write_model, db_session, make_user, make_event, email_service
):
    event = await make_event(await make_user())
    email_service.send_invitation.side_effect = OSError("smtp down")

    invitation = await write_model.create_invitation(
        event.public_uuid, descriptor=InviteeDescriptor(name_or_email="a@x.com")
    )

    assert invitation.notified is False
    assert invitation.channel is None
    assert await count_invitations(db_session, event) == 2


async def test_unexpected_notification_error_keeps_invitation(
    write_model, db_session, make_user, make_event, email_service
):
    event = await make_event(await make_user())
    email_service.send_invitation.side_effect = OperationalError(
        "INSERT INTO email_logs", {}, Exception("database is locked")
    )

    invitation = await write_model.create_invitation(
        event.public_uuid, descriptor=InviteeDescriptor(name_or_email="a@x.com")
    )

    assert invitation.notified is False
    assert invitation.invitee.email == "a@x.com"
    assert await count_invitations(db_session, event) == 2


async def test_group_invitation_is_saved_without_notification(
    write_model, db_session, make_user, make_event, email_service
):
    event = await make_event(await make_user())

    invitation = await write_model.create_invitation(
        event.public_uuid, descriptor=InviteeDescriptor(yammer_group_id=77, name_or_email="Design")
    )

    assert invitation.invitee.type == InviteeType.GROUP
    assert invitation.notified is False
    email_service.send_invitation.assert_not_called()
    assert await count_invitations(db_session, event) == 2


async def test_suppressed_invitation_sends_nothing(
    write_model, make_user, make_event, make_guest, email_service
):
    event = await make_event(await make_user())
    guest = InviteeDTO.from_guest(await make_guest(email="quiet@example.com"))

    invitation = await write_model.invite_without_notification(event.public_uuid, guest)

    assert invitation.notified is False
    email_service.send_invitation.assert_not_called()


async def test_unknown_event_is_invalid(write_model):
    with pytest.raises(ValidationError) as exc_info:
        await write_model.create_invitation(
            "00000000", descriptor=InviteeDescriptor(name_or_email="a@x.com")
        )

    assert "event" in exc_info.value.errors


async def test_missing_invitee_is_invalid(write_model, make_user, make_event):
    event = await make_event(await make_user())

    with pytest.raises(ValidationError) as exc_info:
        await write_model.create_invitation(event.public_uuid)
    assert "invitee_type" in exc_info.value.errors

    with pytest.raises(ValidationError) as exc_info:
        await write_model.create_invitation(
            event.public_uuid, descriptor=InviteeDescriptor(name_or_email="  ")
        )
    assert exc_info.value.errors == {"invitee_id": ["is invalid"]}


async def test_unique_constraint_backs_up_the_duplicate_check(
    db_session, make_user, make_event, make_guest, yammer_client, notifier
):
    class RacingWriteModel(SqlCreateInvitationWriteModel):
        @staticmethod
        async def _already_invited(session, event, invitee) -> bool:
            return False

    event = await make_event(await make_user())
    guest = InviteeDTO.from_guest(await make_guest(email="racer@example.com"))
    write_model = RacingWriteModel(
        session_overwrite=db_session, yammer_client=yammer_client, notifier=notifier
    )
    await write_model.invite_without_notification(event.public_uuid, guest)

    with pytest.raises(DuplicateInviteError):
        await write_model.invite_without_notification(event.public_uuid, guest)
