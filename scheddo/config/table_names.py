from enum import Enum


class TableNames(str, Enum):
    USERS = "users"
    GUESTS = "guests"
    GROUPS = "groups"
    EVENTS = "events"
    SUGGESTIONS = "suggestions"
    VOTES = "votes"
    INVITATIONS = "invitations"
    EMAIL_LOGS = "email_logs"
