import logging

import httpx
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from tezrelay.config import Settings
from tezrelay.exceptions import DeliveryError, ExternalServiceError

logger = logging.getLogger(__name__)


class WebhookClient:
    """Async HTTP client posting JSON events to the event subscriber webhook."""

    def __init__(
        self,
        url: str,
        timeout: float | None = None,
        max_attempts: int = 1,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._url = url
        self._max_attempts = max(1, max_attempts)
        if http_client is None:
            # Without an explicit timeout httpx keeps its own default
            http_client = httpx.AsyncClient(timeout=timeout) if timeout is not None else httpx.AsyncClient()
        self._client = http_client

    @property
    def url(self) -> str:
        return self._url

    async def post_event(self, payload: dict) -> None:
        """POST one event. The response body is not inspected."""
        async for attempt in AsyncRetrying(
            retry=retry_if_exception_type(ExternalServiceError),
            stop=stop_after_attempt(self._max_attempts),
            wait=wait_exponential(multiplier=1, min=1, max=10),
            reraise=True,
        ):
            with attempt:
                try:
                    resp = await self._client.post(self._url, json=payload)
                except httpx.HTTPError as e:
                    raise ExternalServiceError(f"Webhook request failed: {e!r}") from e

        try:
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise DeliveryError("http", f"webhook answered {e.response.status_code}") from e

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "WebhookClient":
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()


def build_webhook_client(settings: Settings) -> WebhookClient | None:
    if not settings.event_subscriber_url:
        logger.info("event subscriber url not set")
        return None
    return WebhookClient(
        url=settings.event_subscriber_url,
        timeout=settings.http_timeout,
        max_attempts=settings.delivery_max_attempts,
    )
