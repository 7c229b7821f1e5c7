import asyncio
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import make_msgid
from typing import Protocol

from scheddo.email_service.base import EmailServiceBase, OutgoingEmail
from scheddo.email_service.email_logger import EmailLogger, NoOpEmailLogger


class SMTPEmailConfig(Protocol):
    smtp_host: str
    smtp_port: int
    smtp_user: str
    smtp_password: str
    emails_from: str


class SMTPEmailService(EmailServiceBase):
    """Plain SMTP delivery, used in development against Mailhog."""

    def __init__(self, config: SMTPEmailConfig, email_logger: EmailLogger | None = None):
        self.host = config.smtp_host
        self.port = config.smtp_port
        self.username = config.smtp_user
        self.password = config.smtp_password
        self.from_address = config.emails_from
        self.email_logger = email_logger or NoOpEmailLogger()

    def _create_message(self, email: OutgoingEmail) -> MIMEMultipart:
        msg = MIMEMultipart("alternative")
        msg["Subject"] = email.subject
        msg["From"] = self.from_address
        msg["To"] = email.to_address
        msg["Message-ID"] = make_msgid(domain=self.from_address.rpartition("@")[2] or None)
        msg.attach(MIMEText(email.text_body, "plain"))
        msg.attach(MIMEText(email.html_body, "html"))
        return msg

    def _send(self, msg: MIMEMultipart) -> None:
        with smtplib.SMTP(self.host, self.port) as server:
            if self.username and self.password:
                server.starttls()
                server.login(self.username, self.password)
            server.send_message(msg)

    async def _deliver(self, email: OutgoingEmail) -> str | None:
        msg = self._create_message(email)
        # smtplib blocks
        await asyncio.to_thread(self._send, msg)
        return msg["Message-ID"]
