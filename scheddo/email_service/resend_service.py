from typing import Protocol

import httpx

from scheddo.email_service.base import EmailServiceBase, OutgoingEmail
from scheddo.email_service.email_logger import EmailLogger, NoOpEmailLogger

RESEND_EMAILS_URL = "https://api.resend.com/emails"


class ResendEmailConfig(Protocol):
    resend_api_key: str
    emails_from: str


class ResendEmailService(EmailServiceBase):
    def __init__(
        self,
        config: ResendEmailConfig,
        email_logger: EmailLogger | None = None,
        http_client_class: type[httpx.AsyncClient] = httpx.AsyncClient,
    ):
        self._config = config
        self.from_address = config.emails_from
        self.email_logger = email_logger or NoOpEmailLogger()
        self._http_client_class = http_client_class

    async def _deliver(self, email: OutgoingEmail) -> str | None:
        async with self._http_client_class() as client:
            response = await client.post(
                RESEND_EMAILS_URL,
                headers={
                    "Authorization": f"Bearer {self._config.resend_api_key}",
                    "Content-Type": "application/json",
                },
                json={
                    "from": self.from_address,
                    "to": [email.to_address],
                    "subject": email.subject,
                    "html": email.html_body,
                    "text": email.text_body,
                    "tags": [{"name": "email_type", "value": email.email_type.value}],
                },
            )
            response.raise_for_status()
            return response.json().get("id")
