from uuid import UUID

from sqlalchemy import Enum, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from scheddo.config.table_names import TableNames
from scheddo.identities.dtos import InviteeType
from scheddo.models.base import Base, TimeStamp


class Invitation(Base, TimeStamp):
    __tablename__ = TableNames.INVITATIONS.value
    __table_args__ = (
        UniqueConstraint(
            "invitee_type", "invitee_id", "event_id", name="uq_invitations_invitee_event"
        ),
    )

    event_id: Mapped[UUID] = mapped_column(
        ForeignKey(f"{TableNames.EVENTS.value}.uuid", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    # Polymorphic reference: invitee_id points into the table named by invitee_type
    invitee_type: Mapped[InviteeType] = mapped_column(
        Enum(
            InviteeType,
            name="invitee_type_enum",
            values_callable=lambda x: [e.value for e in x],
        ),
        nullable=False,
    )
    invitee_id: Mapped[UUID] = mapped_column(nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<Invitation {self.invitee_type.value}:{self.invitee_id} event={self.event_id}>"
