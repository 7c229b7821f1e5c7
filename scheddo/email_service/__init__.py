from scheddo.config.settings import settings
from scheddo.email_service.base import EmailServiceBase, OutgoingEmail
from scheddo.email_service.email_logger import SQLEmailLogger
from scheddo.email_service.resend_service import ResendEmailService
from scheddo.email_service.smtp_service import SMTPEmailService
from scheddo.email_service.templates import EmailTemplates, EmailType


def get_email_service() -> EmailServiceBase:
    """Resend when an API key is configured, SMTP otherwise; both keep an email log."""
    if settings.resend_api_key:
        return ResendEmailService(config=settings, email_logger=SQLEmailLogger())
    return SMTPEmailService(config=settings, email_logger=SQLEmailLogger())


__all__ = [
    "EmailServiceBase",
    "EmailTemplates",
    "EmailType",
    "OutgoingEmail",
    "get_email_service",
]
