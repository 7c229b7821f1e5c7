"""Write model for creating events.

Creating an event is an ordered pipeline: generate the uuid, prepare the
suggestions, validate, save the event with its suggestions and the owner's
own invitation, enqueue the created job, then invite everybody else.
"""

import logging
import secrets
from abc import ABC, abstractmethod
from collections.abc import Sequence
from functools import partial
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from scheddo.config.database import async_session_manager
from scheddo.config.settings import settings
from scheddo.events.dtos import EventDTO, SuggestionInput
from scheddo.events.jobs import EventCreatedJob
from scheddo.events.repository.orm_models import NAME_MAX_LENGTH, Event, Suggestion
from scheddo.identities.dtos import InviteeDTO
from scheddo.identities.repository.orm_models import User
from scheddo.invitations.dtos import InviteeDescriptor, InviteeLookupFailure
from scheddo.invitations.features.create_invitation.write_model import (
    CreateInvitationWriteModel,
    SqlCreateInvitationWriteModel,
)
from scheddo.invitations.notifier import InvitationNotifier
from scheddo.jobs import JobQueue
from scheddo.validation import Errors, ValidationError
from scheddo.yammer.client import YammerClient

logger = logging.getLogger(__name__)

NAME_REQUIRED_MESSAGE = "This field is required"
NO_SUGGESTIONS_MESSAGE = "An event must have at least one suggestion"


def generate_event_uuid() -> str:
    return secrets.token_hex(4)


def build_suggestions(existing: Sequence[SuggestionInput] = ()) -> list[SuggestionInput]:
    """Pad the proposals to the default number of slots shown to organizers."""
    suggestions = list(existing)
    while len(suggestions) < settings.default_suggestion_slots:
        suggestions.append(SuggestionInput())
    return suggestions


def live_suggestions(suggestions: Sequence[SuggestionInput]) -> list[SuggestionInput]:
    """Drop slots the organizer left entirely blank."""
    return [
        SuggestionInput(
            primary=(s.primary or "").strip(),
            secondary=(s.secondary or "").strip() or None,
        )
        for s in suggestions
        if not s.is_blank
    ]


def validate_event(
    name: str | None,
    owner: User | None,
    public_uuid: str | None,
    suggestions: Sequence[SuggestionInput],
) -> None:
    errors = Errors()
    if not name or not name.strip():
        errors.add("name", NAME_REQUIRED_MESSAGE)
    elif len(name) > NAME_MAX_LENGTH:
        errors.add("name", f"is too long (maximum is {NAME_MAX_LENGTH} characters)")
    if owner is None:
        errors.add("owner", "can't be blank")
    if not public_uuid:
        errors.add("uuid", "can't be blank")
    if not suggestions:
        errors.add("suggestions", NO_SUGGESTIONS_MESSAGE)
    elif any(not s.primary for s in suggestions):
        errors.add("suggestions", "primary can't be blank")
    errors.raise_if_any()


class EventCreateWriteModel(ABC):
    @abstractmethod
    async def create_event(
        self,
        owner_id: UUID | None,
        name: str | None,
        suggestions: Sequence[SuggestionInput] = (),
        invitees: Sequence[InviteeDescriptor] = (),
    ) -> EventDTO:
        """Create an event, invite its owner silently and invite everybody else.

        Failed invitations of the extra invitees are reported on the returned
        DTO and leave the event in place.

        Raises:
            ValidationError: If the event is invalid. Nothing is saved.
        """
        raise NotImplementedError


class SqlEventCreateWriteModel(EventCreateWriteModel):
    """SQL implementation of event creation."""

    async_session_manager = staticmethod(partial(async_session_manager))

    def __init__(
        self,
        job_queue: JobQueue,
        session_overwrite: AsyncSession | None = None,
        yammer_client: YammerClient | None = None,
        notifier: InvitationNotifier | None = None,
    ) -> None:
        self.job_queue = job_queue
        self.session_overwrite = session_overwrite
        self.yammer_client = yammer_client
        self.notifier = notifier

    def invitation_write_model(self, session: AsyncSession | None) -> CreateInvitationWriteModel:
        return SqlCreateInvitationWriteModel(
            session_overwrite=session,
            yammer_client=self.yammer_client,
            notifier=self.notifier,
        )

    async def create_event(
        self,
        owner_id: UUID | None,
        name: str | None,
        suggestions: Sequence[SuggestionInput] = (),
        invitees: Sequence[InviteeDescriptor] = (),
    ) -> EventDTO:
        public_uuid = generate_event_uuid()
        proposals = live_suggestions(suggestions or build_suggestions())

        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            owner = await session.get(User, owner_id) if owner_id else None
            validate_event(name, owner, public_uuid, proposals)

            event = Event(
                name=name.strip(),
                public_uuid=public_uuid,
                owner=owner,
                suggestions=[
                    Suggestion(primary=s.primary, secondary=s.secondary, position=position)
                    for position, s in enumerate(proposals)
                ],
            )
            session.add(event)
            await session.flush()
            logger.info(f"Created event {public_uuid} for owner {owner.uuid}")

            await self.invitation_write_model(session).invite_without_notification(
                public_uuid, InviteeDTO.from_user(owner)
            )
            created = EventDTO.from_event(event)

        self.job_queue.enqueue(EventCreatedJob(public_uuid, created.owner_id))

        invitation_errors = []
        for descriptor in invitees:
            try:
                await self.invitation_write_model(self.session_overwrite).create_invitation(
                    public_uuid, descriptor=descriptor
                )
            except (ValidationError, InviteeLookupFailure) as e:
                logger.info(f"Could not invite {descriptor} to event {public_uuid}: {e}")
                invitation_errors.append(str(e))

        return EventDTO(
            uuid=created.uuid,
            name=created.name,
            owner_id=created.owner_id,
            owner_name=created.owner_name,
            created_at=created.created_at,
            suggestions=created.suggestions,
            invitation_errors=invitation_errors,
        )
