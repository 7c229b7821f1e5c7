from pydantic import BaseModel, ConfigDict, Field


class YammerError(Exception):
    """Raised when the Yammer API is unreachable or answers with an error."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class YammerEmailAddress(BaseModel):
    address: str
    type: str | None = None


class YammerContact(BaseModel):
    email_addresses: list[YammerEmailAddress] = []


class YammerUserProfile(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: int
    full_name: str
    nickname: str | None = Field(default=None, alias="name")
    network_id: int | None = None
    mugshot_url: str | None = None
    web_url: str | None = None
    contact: YammerContact = Field(default_factory=YammerContact)

    @property
    def email(self) -> str | None:
        if not self.contact.email_addresses:
            return None
        return self.contact.email_addresses[0].address


class YammerActivity(BaseModel):
    """Activity story posted to the organizer's feed."""

    actor_name: str
    actor_email: str | None
    action: str
    url: str
    title: str

    def to_payload(self) -> dict:
        return {
            "activity": {
                "actor": {"name": self.actor_name, "email": self.actor_email},
                "action": self.action,
                "object": {"url": self.url, "title": self.title},
                "private": False,
                "message": "",
            }
        }
