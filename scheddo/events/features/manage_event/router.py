from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel

from scheddo.events.dtos import SuggestionDiff
from scheddo.events.features.create_event.dtos import EventResponse, SuggestionRequest
from scheddo.events.features.manage_event.write_model import (
    ManageEventWriteModel,
    SqlManageEventWriteModel,
)
from scheddo.jobs import get_job_queue
from scheddo.urls import EVENT_URL

router = APIRouter()


class SuggestionDiffRequest(BaseModel):
    added: list[SuggestionRequest] = []
    kept: list[UUID] = []
    removed: list[UUID] = []


class UpdateEventRequest(BaseModel):
    editor_id: UUID
    name: str | None = None
    suggestions: SuggestionDiffRequest | None = None


def get_manage_event_write_model() -> ManageEventWriteModel:
    """Dependency to get manage event write model instance."""
    return SqlManageEventWriteModel(job_queue=get_job_queue())


@router.patch(EVENT_URL, response_model=EventResponse)
async def update_event(
    event_uuid: str,
    request: UpdateEventRequest,
    write_model: ManageEventWriteModel = Depends(get_manage_event_write_model),
) -> EventResponse:
    diff = None
    if request.suggestions is not None:
        diff = SuggestionDiff(
            added=[s.to_input() for s in request.suggestions.added],
            kept=request.suggestions.kept,
            removed=request.suggestions.removed,
        )
    event = await write_model.update_event(
        event_uuid,
        editor_id=request.editor_id,
        name=request.name,
        suggestions=diff,
    )
    return EventResponse.from_dto(event)


@router.delete(EVENT_URL, status_code=status.HTTP_204_NO_CONTENT)
async def delete_event(
    event_uuid: str,
    editor_id: UUID,
    write_model: ManageEventWriteModel = Depends(get_manage_event_write_model),
) -> Response:
    await write_model.delete_event(event_uuid, editor_id=editor_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
