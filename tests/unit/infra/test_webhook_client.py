"""Tests for WebhookClient, driven through httpx.MockTransport."""

import json

import httpx
import pytest

from tezrelay.config import Settings
from tezrelay.exceptions import DeliveryError, ExternalServiceError
from tezrelay.infra.http.webhook_client import WebhookClient, build_webhook_client

URL = "https://subscriber.example.com/events"


def _client(handler, **kwargs) -> WebhookClient:
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return WebhookClient(URL, http_client=http_client, **kwargs)


class TestPostEvent:
    async def test_posts_json(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, text="not json, never read")

        async with _client(handler) as client:
            await client.post_event({"tokenID": "5", "isTest": False})

        assert len(seen) == 1
        assert seen[0].method == "POST"
        assert str(seen[0].url) == URL
        assert json.loads(seen[0].content) == {"tokenID": "5", "isTest": False}

    async def test_error_status_is_delivery_error(self):
        async with _client(lambda request: httpx.Response(500)) as client:
            with pytest.raises(DeliveryError, match="500"):
                await client.post_event({})

    async def test_network_error_is_external_service_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with _client(handler) as client:
            with pytest.raises(ExternalServiceError):
                await client.post_event({})

    async def test_network_error_retried_when_enabled(self):
        calls = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal calls
            calls += 1
            if calls == 1:
                raise httpx.ConnectError("connection refused", request=request)
            return httpx.Response(204)

        async with _client(handler, max_attempts=2) as client:
            await client.post_event({})
        assert calls == 2

    async def test_error_status_not_retried(self):
        calls = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal calls
            calls += 1
            return httpx.Response(400)

        async with _client(handler, max_attempts=3) as client:
            with pytest.raises(DeliveryError):
                await client.post_event({})
        assert calls == 1


class TestBuildWebhookClient:
    def test_not_configured(self):
        assert build_webhook_client(Settings(_env_file=None, event_subscriber_url="")) is None

    async def test_configured(self):
        client = build_webhook_client(Settings(_env_file=None, event_subscriber_url=URL))
        assert client is not None
        assert client.url == URL
        await client.close()
