from uuid import UUID

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from scheddo.events.dtos import EventNotFoundError
from scheddo.events.features.create_event.dtos import EventResponse
from scheddo.events.repository.read_models import EventReadModel, get_event_read_model
from scheddo.urls import EVENT_INVITEES_URL, EVENT_URL, EVENT_VIEWER_URL

router = APIRouter()


class InviteeJSON(BaseModel):
    name: str | None = None
    email: str | None = None


class ViewerResponse(BaseModel):
    is_owner: bool
    is_invited: bool
    has_voted: bool
    voted_suggestion_ids: list[UUID]


@router.get(EVENT_URL, response_model=EventResponse)
async def get_event(
    event_uuid: str,
    read_model: EventReadModel = Depends(get_event_read_model),
) -> EventResponse:
    event = await read_model.get_event(event_uuid)
    if event is None:
        raise EventNotFoundError(event_uuid)
    return EventResponse.from_dto(event)


@router.get(EVENT_INVITEES_URL, response_model=list[InviteeJSON])
async def get_event_invitees(
    event_uuid: str,
    read_model: EventReadModel = Depends(get_event_read_model),
) -> list[InviteeJSON]:
    """
    Users and guests invited to the event, most recently created first.
    """
    if await read_model.get_event(event_uuid) is None:
        raise EventNotFoundError(event_uuid)
    return [InviteeJSON(**invitee) for invitee in await read_model.invitees_for_json(event_uuid)]


@router.get(EVENT_VIEWER_URL, response_model=ViewerResponse)
async def get_event_viewer(
    event_uuid: str,
    user_id: UUID,
    read_model: EventReadModel = Depends(get_event_read_model),
) -> ViewerResponse:
    """
    How the given user relates to the event, for rendering the voting page.
    """
    if await read_model.get_event(event_uuid) is None:
        raise EventNotFoundError(event_uuid)
    votes = await read_model.user_votes(event_uuid, user_id)
    return ViewerResponse(
        is_owner=await read_model.user_owns_event(event_uuid, user_id),
        is_invited=await read_model.user_is_invited(event_uuid, user_id),
        has_voted=await read_model.user_has_voted(event_uuid, user_id),
        voted_suggestion_ids=[vote.suggestion_id for vote in votes],
    )
