"""Request and response bodies for the create event feature."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from scheddo.events.dtos import EventDTO, SuggestionInput
from scheddo.invitations.features.create_invitation.dtos import InviteeRequest


class SuggestionRequest(BaseModel):
    primary: str | None = None
    secondary: str | None = None

    def to_input(self) -> SuggestionInput:
        return SuggestionInput(primary=self.primary, secondary=self.secondary)


class CreateEventRequest(BaseModel):
    owner_id: UUID
    name: str | None = None
    suggestions: list[SuggestionRequest] = []
    invitees: list[InviteeRequest] = []


class SuggestionResponse(BaseModel):
    id: UUID
    primary: str
    secondary: str | None = None


class EventResponse(BaseModel):
    uuid: str
    name: str
    owner_name: str
    created_at: datetime
    suggestions: list[SuggestionResponse]
    invitation_errors: list[str] = []

    @classmethod
    def from_dto(cls, event: EventDTO) -> "EventResponse":
        return cls(
            uuid=event.uuid,
            name=event.name,
            owner_name=event.owner_name,
            created_at=event.created_at,
            suggestions=[
                SuggestionResponse(id=s.id, primary=s.primary, secondary=s.secondary)
                for s in event.suggestions
            ],
            invitation_errors=event.invitation_errors,
        )
