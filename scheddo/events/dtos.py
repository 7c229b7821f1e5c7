from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING
from uuid import UUID

from scheddo.models.base import as_utc

if TYPE_CHECKING:
    from scheddo.events.repository.orm_models import Event, Suggestion


class EventNotFoundError(Exception):
    def __init__(self, event_uuid: str) -> None:
        self.event_uuid = event_uuid
        super().__init__(f"Event '{event_uuid}' does not exist")


class NotEventOwnerError(Exception):
    def __init__(self, event_uuid: str) -> None:
        self.event_uuid = event_uuid
        super().__init__(f"Only the owner can change event '{event_uuid}'")


@dataclass(frozen=True)
class SuggestionInput:
    """A proposal as entered by the organizer; either part may be blank."""

    primary: str | None = None
    secondary: str | None = None

    @property
    def is_blank(self) -> bool:
        return not (self.primary or "").strip() and not (self.secondary or "").strip()


@dataclass(frozen=True)
class SuggestionDTO:
    id: UUID
    primary: str
    secondary: str | None
    position: int

    @classmethod
    def from_suggestion(cls, suggestion: "Suggestion") -> "SuggestionDTO":
        return cls(
            id=suggestion.uuid,
            primary=suggestion.primary,
            secondary=suggestion.secondary,
            position=suggestion.position,
        )


@dataclass(frozen=True)
class SuggestionDiff:
    """Changes to an event's suggestions, applied together."""

    added: list[SuggestionInput] = field(default_factory=list)
    kept: list[UUID] = field(default_factory=list)
    removed: list[UUID] = field(default_factory=list)


@dataclass(frozen=True)
class EventDTO:
    """An event as seen outside the application, identified by its 8-hex uuid."""

    uuid: str
    name: str
    owner_id: UUID
    owner_name: str
    created_at: datetime
    suggestions: list[SuggestionDTO] = field(default_factory=list)
    invitation_errors: list[str] = field(default_factory=list)

    @classmethod
    def from_event(cls, event: "Event", invitation_errors: list[str] | None = None) -> "EventDTO":
        return cls(
            uuid=event.public_uuid,
            name=event.name,
            owner_id=event.owner_id,
            owner_name=event.owner.name,
            created_at=as_utc(event.created_at),
            suggestions=[SuggestionDTO.from_suggestion(s) for s in event.suggestions],
            invitation_errors=list(invitation_errors or []),
        )
