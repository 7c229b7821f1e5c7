import logging
from abc import ABC, abstractmethod
from typing import Protocol

import httpx

from scheddo.config.settings import settings
from scheddo.yammer.dtos import YammerActivity, YammerError, YammerUserProfile

logger = logging.getLogger(__name__)

API_PATH = "api/v1"


class YammerConfig(Protocol):
    yammer_base_url: str
    yammer_staging_url: str
    yammer_timeout_seconds: float


class YammerClient(ABC):
    """Operations sched.do needs from the Yammer API.

    Every call is made on behalf of a user, with that user's access token.
    """

    @abstractmethod
    async def get_user(
        self, access_token: str, staging: bool, yammer_user_id: int
    ) -> YammerUserProfile:
        raise NotImplementedError

    @abstractmethod
    async def send_private_message(
        self, access_token: str, staging: bool, recipient_yammer_user_id: int, body: str
    ) -> None:
        raise NotImplementedError

    @abstractmethod
    async def post_activity(
        self, access_token: str, staging: bool, activity: YammerActivity
    ) -> None:
        raise NotImplementedError


class HttpYammerClient(YammerClient):
    """Yammer REST client using httpx."""

    def __init__(
        self,
        http_client_class: type[httpx.AsyncClient] = httpx.AsyncClient,
        config: YammerConfig = settings,
    ):
        self._http_client_class = http_client_class
        self._config = config

    def endpoint(self, staging: bool) -> str:
        base = self._config.yammer_staging_url if staging else self._config.yammer_base_url
        return f"{base.rstrip('/')}/{API_PATH}"

    async def _request(
        self,
        method: str,
        access_token: str,
        staging: bool,
        path: str,
        json: dict | None = None,
    ) -> httpx.Response:
        url = f"{self.endpoint(staging)}/{path}"
        try:
            async with self._http_client_class(timeout=self._config.yammer_timeout_seconds) as client:
                response = await client.request(
                    method,
                    url,
                    headers={"Authorization": f"Bearer {access_token}"},
                    json=json,
                )
                response.raise_for_status()
                return response
        except httpx.HTTPStatusError as e:
            logger.warning(f"Yammer {method} {path} failed with {e.response.status_code}")
            raise YammerError(str(e), status_code=e.response.status_code) from e
        except httpx.HTTPError as e:
            logger.warning(f"Yammer {method} {path} unreachable: {e}")
            raise YammerError(str(e)) from e

    async def get_user(
        self, access_token: str, staging: bool, yammer_user_id: int
    ) -> YammerUserProfile:
        response = await self._request("GET", access_token, staging, f"users/{yammer_user_id}.json")
        return YammerUserProfile.model_validate(response.json())

    async def send_private_message(
        self, access_token: str, staging: bool, recipient_yammer_user_id: int, body: str
    ) -> None:
        await self._request(
            "POST",
            access_token,
            staging,
            "messages.json",
            json={"body": body, "direct_to_id": recipient_yammer_user_id},
        )

    async def post_activity(
        self, access_token: str, staging: bool, activity: YammerActivity
    ) -> None:
        await self._request("POST", access_token, staging, "activity.json", json=activity.to_payload())


def get_yammer_client() -> YammerClient:
    return HttpYammerClient()
