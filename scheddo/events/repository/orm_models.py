from uuid import UUID

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from scheddo.config.table_names import TableNames
from scheddo.identities.repository.orm_models import User
from scheddo.models.base import Base, TimeStamp

NAME_MAX_LENGTH = 70
PUBLIC_UUID_LENGTH = 8


class Event(Base, TimeStamp):
    __tablename__ = TableNames.EVENTS.value

    name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH), nullable=False)
    # The only identifier ever exposed outside the application
    public_uuid: Mapped[str] = mapped_column(
        String(PUBLIC_UUID_LENGTH), nullable=False, unique=True, index=True
    )
    owner_id: Mapped[UUID] = mapped_column(
        ForeignKey(f"{TableNames.USERS.value}.uuid", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    owner: Mapped[User] = relationship(User, lazy="joined")
    suggestions: Mapped[list["Suggestion"]] = relationship(
        "Suggestion",
        back_populates="event",
        order_by="Suggestion.position",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<Event {self.public_uuid} {self.name!r}>"


class Suggestion(Base, TimeStamp):
    __tablename__ = TableNames.SUGGESTIONS.value

    event_id: Mapped[UUID] = mapped_column(
        ForeignKey(f"{TableNames.EVENTS.value}.uuid", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    primary: Mapped[str] = mapped_column(String(255), nullable=False)
    secondary: Mapped[str | None] = mapped_column(Text, nullable=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    event: Mapped[Event] = relationship(Event, back_populates="suggestions")

    def __repr__(self) -> str:
        return f"<Suggestion {self.primary!r} event={self.event_id}>"
