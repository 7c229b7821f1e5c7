from fastapi import APIRouter, Depends, status

from scheddo.events.features.create_event.dtos import CreateEventRequest, EventResponse
from scheddo.events.features.create_event.write_model import (
    EventCreateWriteModel,
    SqlEventCreateWriteModel,
)
from scheddo.invitations.notifier import get_invitation_notifier
from scheddo.jobs import get_job_queue
from scheddo.urls import EVENTS_URL
from scheddo.yammer.client import get_yammer_client

router = APIRouter()


def get_event_create_write_model() -> EventCreateWriteModel:
    """Dependency to get event create write model instance."""
    return SqlEventCreateWriteModel(
        job_queue=get_job_queue(),
        yammer_client=get_yammer_client(),
        notifier=get_invitation_notifier(),
    )


@router.post(EVENTS_URL, response_model=EventResponse, status_code=status.HTTP_201_CREATED)
async def create_event(
    request: CreateEventRequest,
    write_model: EventCreateWriteModel = Depends(get_event_create_write_model),
) -> EventResponse:
    """
    Create an event with its suggestions and invite people to it.

    Invitations that fail are listed in ``invitation_errors``; the event is
    created regardless.
    """
    event = await write_model.create_event(
        owner_id=request.owner_id,
        name=request.name,
        suggestions=[s.to_input() for s in request.suggestions],
        invitees=[i.to_descriptor() for i in request.invitees],
    )
    return EventResponse.from_dto(event)
