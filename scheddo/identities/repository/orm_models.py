from sqlalchemy import JSON, BigInteger, Boolean, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from scheddo.config.settings import settings
from scheddo.config.table_names import TableNames
from scheddo.identities.encryption import access_token_cipher
from scheddo.models.base import Base, TimeStamp

NO_PHOTO_PATH = "/assets/no_photo.png"


class User(Base, TimeStamp):
    __tablename__ = TableNames.USERS.value

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), unique=True, nullable=True, index=True)
    nickname: Mapped[str | None] = mapped_column(String(255), nullable=True)
    image: Mapped[str | None] = mapped_column(Text, nullable=True)

    yammer_user_id: Mapped[int] = mapped_column(BigInteger, unique=True, nullable=False, index=True)
    yammer_network_id: Mapped[int | None] = mapped_column(BigInteger, nullable=True, index=True)
    yammer_staging: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    yammer_profile_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    encrypted_access_token: Mapped[str] = mapped_column(Text, nullable=False)
    # Raw Yammer profile payload from the last fetch
    extra: Mapped[dict | None] = mapped_column(JSON, nullable=True)

    @property
    def access_token(self) -> str:
        return access_token_cipher.decrypt(self.encrypted_access_token)

    @access_token.setter
    def access_token(self, value: str) -> None:
        self.encrypted_access_token = access_token_cipher.encrypt(value)

    @property
    def image_url(self) -> str:
        return self.image or f"{settings.app_url.rstrip('/')}{NO_PHOTO_PATH}"

    def in_network(self, other: object) -> bool:
        if not isinstance(other, User) or self.yammer_network_id is None:
            return False
        return self.yammer_network_id == other.yammer_network_id

    def __repr__(self) -> str:
        return f"<User {self.name} yammer={self.yammer_user_id}>"


class Guest(Base, TimeStamp):
    __tablename__ = TableNames.GUESTS.value

    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    # Empty when the guest was invited by email address alone
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)

    def __repr__(self) -> str:
        return f"<Guest {self.email}>"


class Group(Base, TimeStamp):
    __tablename__ = TableNames.GROUPS.value

    yammer_group_id: Mapped[int] = mapped_column(BigInteger, unique=True, nullable=False, index=True)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)

    @property
    def email(self) -> None:
        return None

    def __repr__(self) -> str:
        return f"<Group {self.name} yammer={self.yammer_group_id}>"
