from datetime import datetime
from enum import Enum as PyEnum
from uuid import UUID

from sqlalchemy import DateTime, Enum, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from scheddo.config.table_names import TableNames
from scheddo.email_service.templates import EmailType
from scheddo.models.base import Base, TimeStamp


class EmailStatus(str, PyEnum):
    PENDING = "pending"
    SENT = "sent"
    FAILED = "failed"


class EmailLog(Base, TimeStamp):
    __tablename__ = TableNames.EMAIL_LOGS.value

    # Resend email id or SMTP Message-ID, once the provider accepted the email
    provider_message_id: Mapped[str | None] = mapped_column(
        String(255), nullable=True, index=True, unique=True
    )

    to_address: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    from_address: Mapped[str] = mapped_column(String(255), nullable=False)
    subject: Mapped[str] = mapped_column(String(500), nullable=False)
    html_body: Mapped[str | None] = mapped_column(Text, nullable=True)
    text_body: Mapped[str | None] = mapped_column(Text, nullable=True)

    email_type: Mapped[EmailType] = mapped_column(
        Enum(EmailType, name="email_type_enum", values_callable=lambda x: [e.value for e in x]),
        nullable=False,
        index=True,
    )
    invitation_id: Mapped[UUID | None] = mapped_column(
        ForeignKey(f"{TableNames.INVITATIONS.value}.uuid", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    status: Mapped[EmailStatus] = mapped_column(
        Enum(EmailStatus, name="email_status_enum", values_callable=lambda x: [e.value for e in x]),
        default=EmailStatus.PENDING,
        nullable=False,
        index=True,
    )
    error_message: Mapped[str | None] = mapped_column(Text, nullable=True)
    sent_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    def __repr__(self) -> str:
        return f"<EmailLog {self.email_type.value} to={self.to_address} status={self.status.value}>"
