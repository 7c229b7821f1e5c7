from uuid import UUID

from scheddo.events.activity import CREATE, ActivityPoster, get_activity_poster
from scheddo.jobs import Job


class EventActivityJob(Job):
    """Posts an activity story about an event for one user."""

    def __init__(
        self,
        actor_id: UUID,
        action: str,
        event_uuid: str,
        activity_poster: ActivityPoster | None = None,
    ) -> None:
        self.actor_id = actor_id
        self.action = action
        self.event_uuid = event_uuid
        self.activity_poster = activity_poster or get_activity_poster()

    async def run(self) -> None:
        await self.activity_poster.create_activity(self.actor_id, self.action, self.event_uuid)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.action} event={self.event_uuid} actor={self.actor_id}>"


class EventCreatedJob(EventActivityJob):
    def __init__(
        self,
        event_uuid: str,
        owner_id: UUID,
        activity_poster: ActivityPoster | None = None,
    ) -> None:
        super().__init__(owner_id, CREATE, event_uuid, activity_poster)
