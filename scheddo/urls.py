EVENTS_URL = "/api/v1/events"
EVENT_URL = "/api/v1/events/{event_uuid}"
EVENT_INVITEES_URL = "/api/v1/events/{event_uuid}/invitees"
EVENT_INVITATIONS_URL = "/api/v1/events/{event_uuid}/invitations"
EVENT_REMINDERS_URL = "/api/v1/events/{event_uuid}/reminders"
EVENT_VIEWER_URL = "/api/v1/events/{event_uuid}/viewers/{user_id}"
VOTES_URL = "/api/v1/votes"
