"""Imports every ORM module so the shared metadata knows all tables."""

from scheddo.email_service.orm_models import EmailLog
from scheddo.events.repository.orm_models import Event, Suggestion
from scheddo.identities.repository.orm_models import Group, Guest, User
from scheddo.invitations.repository.orm_models import Invitation
from scheddo.models.base import BaseModel
from scheddo.votes.repository.orm_models import Vote

metadata = BaseModel.metadata

__all__ = [
    "metadata",
    "User",
    "Guest",
    "Group",
    "Event",
    "Suggestion",
    "Vote",
    "Invitation",
    "EmailLog",
]
