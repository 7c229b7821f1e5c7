"""Activity stories on the organizer's Yammer feed.

Posting a story is best effort: the outcome is logged and returned, it is
never raised to the caller.
"""

import logging
from functools import partial
from typing import Protocol
from uuid import UUID

import httpx
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from scheddo.config.database import async_session_manager
from scheddo.config.settings import settings
from scheddo.events.repository.orm_models import Event
from scheddo.identities.repository.read_models import SqlIdentityReadModel
from scheddo.yammer.client import YammerClient, get_yammer_client
from scheddo.yammer.dtos import YammerActivity, YammerError

logger = logging.getLogger(__name__)

CREATE = "create"
UPDATE = "update"
VOTE = "vote"


class ActivityConfig(Protocol):
    def event_url(self, event_uuid: str) -> str: ...


class ActivityPoster:
    async_session_manager = staticmethod(partial(async_session_manager, auto_commit=False))

    def __init__(
        self,
        yammer_client: YammerClient,
        session_overwrite: AsyncSession | None = None,
        config: ActivityConfig = settings,
    ) -> None:
        self.yammer_client = yammer_client
        self.session_overwrite = session_overwrite
        self._config = config

    async def create_activity(self, actor_id: UUID, action: str, event_uuid: str) -> bool:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            actor = await SqlIdentityReadModel(session_overwrite=session).get_user(actor_id)
            event = (
                await session.execute(select(Event).where(Event.public_uuid == event_uuid))
            ).unique().scalar_one_or_none()
            if actor is None or event is None:
                logger.warning(f"Skipping {action} activity: actor {actor_id} or event {event_uuid} is gone")
                return False

            activity = YammerActivity(
                actor_name=actor.name,
                actor_email=actor.email,
                action=action,
                url=self._config.event_url(event.public_uuid),
                title=event.name,
            )

        try:
            await self.yammer_client.post_activity(actor.access_token, actor.yammer_staging, activity)
        except (YammerError, httpx.HTTPError) as e:
            logger.warning(f"Posting {action} activity for event {event_uuid} failed: {e}")
            return False

        logger.info(f"Posted {action} activity for event {event_uuid}")
        return True


def get_activity_poster() -> ActivityPoster:
    return ActivityPoster(yammer_client=get_yammer_client())
