"""Request and response bodies for the create invitation feature."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from scheddo.identities.dtos import InviteeDTO, InviteeType
from scheddo.invitations.dtos import InvitationDTO, InviteeDescriptor, NotificationChannel


class InviteeRequest(BaseModel):
    """One of the three ways to point at an invitee."""

    yammer_user_id: int | None = None
    yammer_group_id: int | None = None
    name_or_email: str | None = None

    def to_descriptor(self) -> InviteeDescriptor:
        return InviteeDescriptor(
            yammer_user_id=self.yammer_user_id,
            yammer_group_id=self.yammer_group_id,
            name_or_email=self.name_or_email,
        )


class InviteeResponse(BaseModel):
    type: InviteeType
    id: UUID
    name: str | None = None
    email: str | None = None

    @classmethod
    def from_dto(cls, invitee: InviteeDTO) -> "InviteeResponse":
        return cls(type=invitee.type, id=invitee.id, name=invitee.name, email=invitee.email)


class InvitationResponse(BaseModel):
    id: UUID
    event_uuid: str
    invitee: InviteeResponse
    created_at: datetime
    notified: bool
    channel: NotificationChannel | None = None

    @classmethod
    def from_dto(cls, invitation: InvitationDTO) -> "InvitationResponse":
        return cls(
            id=invitation.id,
            event_uuid=invitation.event_uuid,
            invitee=InviteeResponse.from_dto(invitation.invitee),
            created_at=invitation.created_at,
            notified=invitation.notified,
            channel=invitation.channel,
        )
