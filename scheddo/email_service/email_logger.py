from abc import ABC, abstractmethod
from datetime import UTC, datetime
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from scheddo.config.database import async_session_manager
from scheddo.email_service.orm_models import EmailLog, EmailStatus

if TYPE_CHECKING:
    from scheddo.email_service.base import OutgoingEmail


class EmailLogger(ABC):
    """Keeps an audit trail of outgoing email."""

    @abstractmethod
    async def log_email_attempt(self, email: "OutgoingEmail", from_address: str) -> UUID:
        """Record an email about to be sent; returns the log entry's id."""
        raise NotImplementedError

    @abstractmethod
    async def log_email_success(self, log_uuid: UUID, provider_message_id: str | None) -> None:
        raise NotImplementedError

    @abstractmethod
    async def log_email_failure(self, log_uuid: UUID, error_message: str) -> None:
        raise NotImplementedError


class SQLEmailLogger(EmailLogger):
    """Writes the ``email_logs`` table, each call in a session of its own."""

    async def log_email_attempt(self, email: "OutgoingEmail", from_address: str) -> UUID:
        async with async_session_manager() as session:
            email_log = EmailLog(
                to_address=email.to_address,
                from_address=from_address,
                subject=email.subject,
                html_body=email.html_body,
                text_body=email.text_body,
                email_type=email.email_type,
                invitation_id=email.invitation_id,
                status=EmailStatus.PENDING,
            )
            session.add(email_log)
            await session.flush()
            return email_log.uuid

    async def log_email_success(self, log_uuid: UUID, provider_message_id: str | None) -> None:
        async with async_session_manager() as session:
            email_log = await session.get(EmailLog, log_uuid)
            if email_log is None:
                return
            email_log.provider_message_id = provider_message_id
            email_log.status = EmailStatus.SENT
            email_log.sent_at = datetime.now(UTC)

    async def log_email_failure(self, log_uuid: UUID, error_message: str) -> None:
        async with async_session_manager() as session:
            email_log = await session.get(EmailLog, log_uuid)
            if email_log is None:
                return
            email_log.status = EmailStatus.FAILED
            email_log.error_message = error_message


class NoOpEmailLogger(EmailLogger):
    async def log_email_attempt(self, email: "OutgoingEmail", from_address: str) -> UUID:
        return uuid4()

    async def log_email_success(self, log_uuid: UUID, provider_message_id: str | None) -> None:
        pass

    async def log_email_failure(self, log_uuid: UUID, error_message: str) -> None:
        pass
