from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # App
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    app_url: str = "http://localhost:8000"
    debug: bool = True
    cors_origins: list[str] = ["*"]

    ENVIRONMENT: str = "Production"

    # Database
    DB_DSN: str = "sqlite+aiosqlite:///./scheddo.db"
    LOG_DB: bool = False

    # Yammer
    yammer_base_url: str = "https://www.yammer.com/"
    yammer_staging_url: str = "https://www.staging.yammer.com/"
    yammer_timeout_seconds: float = 10.0
    access_token_encryption_key: str = "change-me-access-token-encryption-key"

    # Event rules
    default_suggestion_slots: int = 2

    # Email (SMTP)
    smtp_host: str = "localhost"
    smtp_port: int = 1025
    smtp_user: str = ""
    smtp_password: str = ""
    emails_from: str = "no-reply@sched.do"

    # Email (Resend) - if set, use Resend API instead of SMTP
    resend_api_key: str = ""

    SENTRY_DSN: str = ""
    SENTRY_TRACES_SAMPLE_RATE: float = 0.0
    SENTRY_PROFILES_SAMPLE_RATE: float = 0.0

    RUN_MIGRATIONS_ON_STARTUP: bool = False

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

    def event_url(self, event_uuid: str) -> str:
        return f"{self.app_url.rstrip('/')}/events/{event_uuid}"


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
