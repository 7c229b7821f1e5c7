from uuid import UUID

from sqlalchemy import ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from scheddo.config.table_names import TableNames
from scheddo.models.base import Base, TimeStamp


class Vote(Base, TimeStamp):
    __tablename__ = TableNames.VOTES.value
    __table_args__ = (UniqueConstraint("user_id", "suggestion_id", name="uq_votes_user_suggestion"),)

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey(f"{TableNames.USERS.value}.uuid", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    suggestion_id: Mapped[UUID] = mapped_column(
        ForeignKey(f"{TableNames.SUGGESTIONS.value}.uuid", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<Vote user={self.user_id} suggestion={self.suggestion_id}>"
