from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING
from uuid import UUID

from scheddo.models.base import as_utc

if TYPE_CHECKING:
    from scheddo.identities.repository.orm_models import Group, Guest, User


class InviteeType(str, Enum):
    USER = "user"
    GUEST = "guest"
    GROUP = "group"


@dataclass(frozen=True)
class InviteeDTO:
    """Any of the three invitee variants, discriminated by ``type``."""

    type: InviteeType
    id: UUID
    name: str | None
    email: str | None
    created_at: datetime
    yammer_user_id: int | None = None
    yammer_network_id: int | None = None
    yammer_group_id: int | None = None

    @property
    def is_user(self) -> bool:
        return self.type == InviteeType.USER

    def as_json(self) -> dict:
        return {"name": self.name, "email": self.email}

    @classmethod
    def from_user(cls, user: "User") -> "InviteeDTO":
        return cls(
            type=InviteeType.USER,
            id=user.uuid,
            name=user.name,
            email=user.email,
            created_at=as_utc(user.created_at),
            yammer_user_id=user.yammer_user_id,
            yammer_network_id=user.yammer_network_id,
        )

    @classmethod
    def from_guest(cls, guest: "Guest") -> "InviteeDTO":
        return cls(
            type=InviteeType.GUEST,
            id=guest.uuid,
            name=guest.name,
            email=guest.email,
            created_at=as_utc(guest.created_at),
        )

    @classmethod
    def from_group(cls, group: "Group") -> "InviteeDTO":
        return cls(
            type=InviteeType.GROUP,
            id=group.uuid,
            name=group.name,
            email=None,
            created_at=as_utc(group.created_at),
            yammer_group_id=group.yammer_group_id,
        )


@dataclass(frozen=True)
class UserDTO:
    """A Yammer user, including the credentials to act on their behalf."""

    id: UUID
    name: str
    email: str | None
    yammer_user_id: int
    yammer_network_id: int | None
    yammer_staging: bool
    access_token: str = field(repr=False)
    nickname: str | None = None
    image: str | None = None
    yammer_profile_url: str | None = None
    created_at: datetime | None = None

    def in_network(self, other: InviteeDTO) -> bool:
        """Whether ``other`` is a Yammer user of the same network."""
        if other.type != InviteeType.USER:
            return False
        if self.yammer_network_id is None:
            return False
        return self.yammer_network_id == other.yammer_network_id

    def as_invitee(self) -> InviteeDTO:
        return InviteeDTO(
            type=InviteeType.USER,
            id=self.id,
            name=self.name,
            email=self.email,
            created_at=self.created_at,
            yammer_user_id=self.yammer_user_id,
            yammer_network_id=self.yammer_network_id,
        )

    @classmethod
    def from_user(cls, user: "User") -> "UserDTO":
        return cls(
            id=user.uuid,
            name=user.name,
            email=user.email,
            yammer_user_id=user.yammer_user_id,
            yammer_network_id=user.yammer_network_id,
            yammer_staging=user.yammer_staging,
            access_token=user.access_token,
            nickname=user.nickname,
            image=user.image_url,
            yammer_profile_url=user.yammer_profile_url,
            created_at=as_utc(user.created_at),
        )
