"""Picks the notification channel for an invitee and dispatches through it.

Yammer users in the organizer's network get a private message on Yammer.
Everyone else gets an email.
"""

import logging
from typing import Protocol

import httpx

from scheddo.config.settings import settings
from scheddo.email_service import get_email_service
from scheddo.email_service.base import EmailServiceBase
from scheddo.identities.dtos import InviteeDTO, UserDTO
from scheddo.invitations.dtos import (
    NotificationChannel,
    NotificationContext,
    NotificationDeliveryFailure,
    NotificationKind,
)
from scheddo.yammer.client import YammerClient, get_yammer_client
from scheddo.yammer.dtos import YammerError

logger = logging.getLogger(__name__)

PRIVATE_MESSAGES = {
    NotificationKind.INVITATION: '{organizer_name} invited you to vote on "{event_name}": {event_url}',
    NotificationKind.REMINDER: 'Reminder: {organizer_name} is waiting for your vote on "{event_name}": {event_url}',
}


class NotifierConfig(Protocol):
    def event_url(self, event_uuid: str) -> str: ...


def choose_channel(organizer: UserDTO, invitee: InviteeDTO) -> NotificationChannel:
    if invitee.is_user and organizer.in_network(invitee):
        return NotificationChannel.PRIVATE_MESSAGE
    return NotificationChannel.EMAIL


class InvitationNotifier:
    def __init__(
        self,
        yammer_client: YammerClient,
        email_service: EmailServiceBase,
        config: NotifierConfig = settings,
    ) -> None:
        self.yammer_client = yammer_client
        self.email_service = email_service
        self._config = config

    async def notify(
        self,
        context: NotificationContext,
        kind: NotificationKind = NotificationKind.INVITATION,
    ) -> NotificationChannel:
        """Send exactly one notification about an invitation.

        The channel is decided from the organizer and invitee in ``context``,
        which callers load right before dispatching.

        Raises:
            NotificationDeliveryFailure: If the notification could not be sent.
        """
        channel = choose_channel(context.organizer, context.invitee)
        event_url = self._config.event_url(context.event_uuid)

        try:
            if channel == NotificationChannel.PRIVATE_MESSAGE:
                await self._send_private_message(context, kind, event_url)
            else:
                await self._send_email(context, kind, event_url)
        except (YammerError, httpx.HTTPError, OSError) as e:
            raise NotificationDeliveryFailure(
                f"Could not send {kind.value} for invitation {context.invitation_id} by {channel.value}: {e}"
            ) from e

        logger.info(f"Sent {kind.value} for invitation {context.invitation_id} by {channel.value}")
        return channel

    async def _send_private_message(
        self, context: NotificationContext, kind: NotificationKind, event_url: str
    ) -> None:
        organizer = context.organizer
        body = PRIVATE_MESSAGES[kind].format(
            organizer_name=organizer.name,
            event_name=context.event_name,
            event_url=event_url,
        )
        await self.yammer_client.send_private_message(
            organizer.access_token,
            organizer.yammer_staging,
            context.invitee.yammer_user_id,
            body,
        )

    async def _send_email(
        self, context: NotificationContext, kind: NotificationKind, event_url: str
    ) -> None:
        invitee = context.invitee
        if not invitee.email:
            logger.warning(
                f"Cannot email {invitee.type.value} {invitee.id} about event {context.event_uuid}: no address"
            )
            raise NotificationDeliveryFailure(f"{invitee.type.value} {invitee.id} has no email address")

        send = (
            self.email_service.send_invitation
            if kind == NotificationKind.INVITATION
            else self.email_service.send_reminder
        )
        await send(
            to_address=invitee.email,
            invitee_name=invitee.name or invitee.email,
            organizer_name=context.organizer.name,
            event_name=context.event_name,
            event_url=event_url,
            invitation_id=context.invitation_id,
        )


def get_invitation_notifier() -> InvitationNotifier:
    return InvitationNotifier(yammer_client=get_yammer_client(), email_service=get_email_service())
