import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from uuid import UUID

from scheddo.email_service.email_logger import EmailLogger, NoOpEmailLogger
from scheddo.email_service.templates import EmailTemplates, EmailType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OutgoingEmail:
    email_type: EmailType
    to_address: str
    subject: str
    html_body: str
    text_body: str
    invitation_id: UUID | None = None


class EmailServiceBase(ABC):
    """Renders sched.do emails and records every delivery attempt.

    Providers only implement ``_deliver``. Delivery errors are logged and
    re-raised so the caller decides what a failed email means.
    """

    from_address: str
    email_logger: EmailLogger = NoOpEmailLogger()

    @abstractmethod
    async def _deliver(self, email: OutgoingEmail) -> str | None:
        """Hand the email to the provider; returns the provider's message id."""
        raise NotImplementedError

    async def send(self, email: OutgoingEmail) -> str | None:
        log_uuid = await self.email_logger.log_email_attempt(email, from_address=self.from_address)
        try:
            provider_message_id = await self._deliver(email)
        except Exception as e:
            logger.error(f"Sending {email.email_type.value} email to {email.to_address} failed: {e}")
            await self.email_logger.log_email_failure(log_uuid, error_message=str(e))
            raise
        await self.email_logger.log_email_success(log_uuid, provider_message_id=provider_message_id)
        return provider_message_id

    async def send_invitation(
        self,
        to_address: str,
        invitee_name: str,
        organizer_name: str,
        event_name: str,
        event_url: str,
        invitation_id: UUID | None = None,
    ) -> None:
        await self.send(
            self._render(
                EmailType.INVITATION,
                to_address,
                invitation_id,
                invitee_name=invitee_name,
                organizer_name=organizer_name,
                event_name=event_name,
                event_url=event_url,
            )
        )

    async def send_reminder(
        self,
        to_address: str,
        invitee_name: str,
        organizer_name: str,
        event_name: str,
        event_url: str,
        invitation_id: UUID | None = None,
    ) -> None:
        await self.send(
            self._render(
                EmailType.REMINDER,
                to_address,
                invitation_id,
                invitee_name=invitee_name,
                organizer_name=organizer_name,
                event_name=event_name,
                event_url=event_url,
            )
        )

    @staticmethod
    def _render(
        email_type: EmailType,
        to_address: str,
        invitation_id: UUID | None,
        **context: str,
    ) -> OutgoingEmail:
        subject, html_body, text_body = EmailTemplates.render(email_type, **context)
        return OutgoingEmail(
            email_type=email_type,
            to_address=to_address,
            subject=subject,
            html_body=html_body,
            text_body=text_body,
            invitation_id=invitation_id,
        )
