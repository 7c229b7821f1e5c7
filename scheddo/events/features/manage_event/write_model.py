"""Write model for changing and deleting events.

Only the owner may change an event. Suggestion changes are given as an
explicit diff and applied in one transaction, after which the event must
still satisfy the same rules as on creation.
"""

import logging
from abc import ABC, abstractmethod
from functools import partial
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from scheddo.config.database import async_session_manager
from scheddo.events.activity import UPDATE
from scheddo.events.dtos import (
    EventDTO,
    EventNotFoundError,
    NotEventOwnerError,
    SuggestionDiff,
    SuggestionInput,
)
from scheddo.events.features.create_event.write_model import live_suggestions, validate_event
from scheddo.events.jobs import EventActivityJob
from scheddo.events.repository.orm_models import Event, Suggestion
from scheddo.invitations.repository.orm_models import Invitation
from scheddo.jobs import JobQueue
from scheddo.validation import ValidationError
from scheddo.votes.repository.orm_models import Vote

logger = logging.getLogger(__name__)


class ManageEventWriteModel(ABC):
    @abstractmethod
    async def update_event(
        self,
        event_uuid: str,
        editor_id: UUID,
        name: str | None = None,
        suggestions: SuggestionDiff | None = None,
    ) -> EventDTO:
        """
        Rename an event and/or change its suggestions.

        Raises:
            EventNotFoundError: If there is no such event.
            NotEventOwnerError: If the editor does not own the event.
            ValidationError: If the changed event is invalid. Nothing is saved.
        """
        raise NotImplementedError

    @abstractmethod
    async def delete_event(self, event_uuid: str, editor_id: UUID) -> None:
        """Delete an event with its suggestions, votes and invitations."""
        raise NotImplementedError


class SqlManageEventWriteModel(ManageEventWriteModel):
    async_session_manager = staticmethod(partial(async_session_manager))

    def __init__(self, job_queue: JobQueue, session_overwrite: AsyncSession | None = None) -> None:
        self.job_queue = job_queue
        self.session_overwrite = session_overwrite

    async def update_event(
        self,
        event_uuid: str,
        editor_id: UUID,
        name: str | None = None,
        suggestions: SuggestionDiff | None = None,
    ) -> EventDTO:
        diff = suggestions or SuggestionDiff()

        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            event = await self._get_owned_event(session, event_uuid, editor_id)

            current = {s.uuid: s for s in event.suggestions}
            unknown = [i for i in [*diff.kept, *diff.removed] if i not in current]
            if unknown:
                raise ValidationError({"suggestions": ["do not belong to this event"]})
            if set(diff.kept) & set(diff.removed):
                raise ValidationError({"suggestions": ["can not be both kept and removed"]})

            removed = set(diff.removed)
            remaining = [s for s in event.suggestions if s.uuid not in removed]
            added = live_suggestions(diff.added)

            new_name = event.name if name is None else name
            validate_event(
                new_name,
                event.owner,
                event.public_uuid,
                [*(SuggestionInput(s.primary, s.secondary) for s in remaining), *added],
            )

            event.name = new_name.strip()
            next_position = max((s.position for s in event.suggestions), default=-1) + 1
            if removed:
                await session.execute(delete(Vote).where(Vote.suggestion_id.in_(list(removed))))
            for suggestion in [s for s in event.suggestions if s.uuid in removed]:
                event.suggestions.remove(suggestion)
            for offset, s in enumerate(added):
                event.suggestions.append(
                    Suggestion(primary=s.primary, secondary=s.secondary, position=next_position + offset)
                )
            await session.flush()
            updated = EventDTO.from_event(event)

        logger.info(f"Updated event {event_uuid}")
        self.job_queue.enqueue(EventActivityJob(editor_id, UPDATE, event_uuid))
        return updated

    async def delete_event(self, event_uuid: str, editor_id: UUID) -> None:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            event = await self._get_owned_event(session, event_uuid, editor_id)
            suggestion_ids = select(Suggestion.uuid).where(Suggestion.event_id == event.uuid)

            await session.execute(delete(Vote).where(Vote.suggestion_id.in_(suggestion_ids)))
            await session.execute(delete(Invitation).where(Invitation.event_id == event.uuid))
            # suggestions go with the event through the relationship cascade
            await session.delete(event)
            await session.flush()

        logger.info(f"Deleted event {event_uuid}")

    @staticmethod
    async def _get_owned_event(session: AsyncSession, event_uuid: str, editor_id: UUID) -> Event:
        result = await session.execute(select(Event).where(Event.public_uuid == event_uuid))
        event = result.unique().scalar_one_or_none()
        if event is None:
            raise EventNotFoundError(event_uuid)
        if event.owner_id != editor_id:
            raise NotEventOwnerError(event_uuid)
        return event

