from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from uuid import UUID

from scheddo.identities.dtos import InviteeDTO, UserDTO
from scheddo.validation import ValidationError

SELF_INVITE_MESSAGE = "You can not invite yourself"
DUPLICATE_INVITE_MESSAGE = "has already been invited"


class InvitationError(ValidationError):
    """An invitation broke one of the invitation rules and was not saved."""


class SelfInviteError(InvitationError):
    def __init__(self) -> None:
        super().__init__({"base": [SELF_INVITE_MESSAGE]})


class DuplicateInviteError(InvitationError):
    def __init__(self) -> None:
        super().__init__({"invitee_id": [DUPLICATE_INVITE_MESSAGE]})


class InviteeLookupFailure(Exception):
    """Yammer could not be asked about the invitee; nothing was saved."""


class NotificationDeliveryFailure(Exception):
    """A notification could not be handed to Yammer or the mail service."""


class NotificationKind(str, Enum):
    INVITATION = "invitation"
    REMINDER = "reminder"


class NotificationChannel(str, Enum):
    PRIVATE_MESSAGE = "private_message"
    EMAIL = "email"


@dataclass(frozen=True)
class InviteeDescriptor:
    """What the organizer typed or picked to identify an invitee."""

    yammer_user_id: int | None = None
    yammer_group_id: int | None = None
    name_or_email: str | None = None


@dataclass(frozen=True)
class NotificationContext:
    invitation_id: UUID
    event_uuid: str
    event_name: str
    organizer: UserDTO
    invitee: InviteeDTO


@dataclass(frozen=True)
class InvitationDTO:
    id: UUID
    event_uuid: str
    invitee: InviteeDTO
    created_at: datetime
    notified: bool = False
    channel: NotificationChannel | None = None


@dataclass(frozen=True)
class ReminderResult:
    invitation_id: UUID
    invitee: InviteeDTO | None
    delivered: bool
    channel: NotificationChannel | None = None
    error: str | None = None
