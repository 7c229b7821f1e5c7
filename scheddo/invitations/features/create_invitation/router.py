from fastapi import APIRouter, Depends, status

from scheddo.invitations.features.create_invitation.dtos import InvitationResponse, InviteeRequest
from scheddo.invitations.features.create_invitation.write_model import (
    CreateInvitationWriteModel,
    SqlCreateInvitationWriteModel,
)
from scheddo.invitations.notifier import get_invitation_notifier
from scheddo.urls import EVENT_INVITATIONS_URL
from scheddo.yammer.client import get_yammer_client

router = APIRouter()


def get_create_invitation_write_model() -> CreateInvitationWriteModel:
    """Dependency to get create invitation write model instance."""
    return SqlCreateInvitationWriteModel(
        yammer_client=get_yammer_client(),
        notifier=get_invitation_notifier(),
    )


@router.post(
    EVENT_INVITATIONS_URL,
    response_model=InvitationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_invitation(
    event_uuid: str,
    request: InviteeRequest,
    write_model: CreateInvitationWriteModel = Depends(get_create_invitation_write_model),
) -> InvitationResponse:
    """
    Invite a Yammer user, a Yammer group or an email address to an event.

    The invitee is notified once, by Yammer private message when they share
    the organizer's network and by email otherwise.
    """
    invitation = await write_model.create_invitation(event_uuid, descriptor=request.to_descriptor())
    return InvitationResponse.from_dto(invitation)
