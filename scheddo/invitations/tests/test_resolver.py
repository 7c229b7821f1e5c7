"""Tests for InvitationResolver, with the identity store mocked."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock
from uuid import uuid4

import httpx
import pytest

from scheddo.identities.dtos import InviteeDTO, InviteeType, UserDTO
from scheddo.identities.repository.write_models import IdentityWriteModel
from scheddo.invitations.dtos import InviteeDescriptor, InviteeLookupFailure
from scheddo.invitations.resolver import InvitationResolver
from scheddo.yammer.dtos import YammerError

NOW = datetime(2026, 1, 1, tzinfo=UTC)

CREATOR = UserDTO(
    id=uuid4(),
    name="Ralph Robot",
    email="ralph@example.com",
    yammer_user_id=1,
    yammer_network_id=1,
    yammer_staging=True,
    access_token="creator-token",
)


def make_invitee(invitee_type: InviteeType, email: str | None = "a@x.com") -> InviteeDTO:
    return InviteeDTO(type=invitee_type, id=uuid4(), name=None, email=email, created_at=NOW)


@pytest.fixture
def identities() -> AsyncMock:
    return AsyncMock(spec=IdentityWriteModel)


async def test_yammer_user_id_uses_creator_credentials(identities):
    identities.find_or_create_user_with_auth.return_value = UserDTO(
        id=uuid4(),
        name="Joe",
        email="joe@example.com",
        yammer_user_id=42,
        yammer_network_id=1,
        yammer_staging=True,
        access_token="creator-token",
        created_at=NOW,
    )

    invitee = await InvitationResolver(identities).resolve(
        InviteeDescriptor(yammer_user_id=42, yammer_group_id=7, name_or_email="joe@example.com"),
        creator=CREATOR,
    )

    identities.find_or_create_user_with_auth.assert_awaited_once_with(
        access_token="creator-token", yammer_staging=True, yammer_user_id=42, refresh_token=False
    )
    identities.find_or_create_group.assert_not_called()
    identities.find_user_by_email.assert_not_called()
    assert invitee.type == InviteeType.USER
    assert invitee.yammer_user_id == 42


async def test_yammer_group_id_wins_over_email(identities):
    group = make_invitee(InviteeType.GROUP, email=None)
    identities.find_or_create_group.return_value = group

    invitee = await InvitationResolver(identities).resolve(
        InviteeDescriptor(yammer_group_id=7, name_or_email="Engineering"), creator=CREATOR
    )

    assert invitee == group
    identities.find_or_create_group.assert_awaited_once_with(yammer_group_id=7, name="Engineering")
    identities.find_user_by_email.assert_not_called()


async def test_email_prefers_existing_user(identities):
    user = make_invitee(InviteeType.USER)
    identities.find_user_by_email.return_value = user

    invitee = await InvitationResolver(identities).resolve(
        InviteeDescriptor(name_or_email=" a@x.com "), creator=CREATOR
    )

    assert invitee == user
    identities.find_user_by_email.assert_awaited_once_with("a@x.com")
    identities.find_guest_by_email.assert_not_called()
    identities.create_guest_without_name_validation.assert_not_called()


async def test_email_falls_back_to_existing_guest(identities):
    guest = make_invitee(InviteeType.GUEST)
    identities.find_user_by_email.return_value = None
    identities.find_guest_by_email.return_value = guest

    invitee = await InvitationResolver(identities).resolve(
        InviteeDescriptor(name_or_email="a@x.com"), creator=CREATOR
    )

    assert invitee == guest
    identities.create_guest_without_name_validation.assert_not_called()


async def test_unknown_email_creates_guest(identities):
    guest = make_invitee(InviteeType.GUEST)
    identities.find_user_by_email.return_value = None
    identities.find_guest_by_email.return_value = None
    identities.create_guest_without_name_validation.return_value = guest

    invitee = await InvitationResolver(identities).resolve(
        InviteeDescriptor(name_or_email="a@x.com"), creator=CREATOR
    )

    assert invitee == guest
    identities.create_guest_without_name_validation.assert_awaited_once_with("a@x.com")


async def test_blank_descriptor_resolves_to_nothing(identities):
    assert await InvitationResolver(identities).resolve(InviteeDescriptor(), creator=CREATOR) is None
    assert (
        await InvitationResolver(identities).resolve(
            InviteeDescriptor(name_or_email="   "), creator=CREATOR
        )
        is None
    )
    identities.create_guest_without_name_validation.assert_not_called()


@pytest.mark.parametrize(
    "error",
    [YammerError("server error", status_code=500), httpx.ConnectError("connection refused")],
)
async def test_yammer_failures_become_lookup_failures(identities, error):
    identities.find_or_create_user_with_auth.side_effect = error

    with pytest.raises(InviteeLookupFailure):
        await InvitationResolver(identities).resolve(
            InviteeDescriptor(yammer_user_id=42, name_or_email="joe@example.com"), creator=CREATOR
        )

    identities.create_guest_without_name_validation.assert_not_called()
