"""Transports: one concrete delivery mechanism each.

Every transport is independent: `send` either returns or raises, and the
dispatcher contains whatever it raises. All of them write the same event line
to stdout; gRPC writes it before the remote call, the webhook after a
successful POST.
"""

import sys
from abc import ABC, abstractmethod
from typing import TextIO

from tezrelay.domain.enums import TransportTag
from tezrelay.exceptions import MisconfigurationError
from tezrelay.infra.grpc.event_processor_client import EventProcessorClient
from tezrelay.infra.http.webhook_client import WebhookClient
from tezrelay.relay.envelope import format_event_line, webhook_payload
from tezrelay.relay.types import EventEnvelope


class Transport(ABC):
    """Minimal interface all transports implement."""

    TAG: TransportTag

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    @property
    def name(self) -> str:
        return self.TAG.name.lower()

    @abstractmethod
    async def send(self, envelope: EventEnvelope) -> None:
        """Deliver one envelope. Raises on failure."""

    async def aclose(self) -> None:
        """Release the underlying client, if any."""

    def _write_line(self, envelope: EventEnvelope) -> None:
        stream = self._stream or sys.stdout
        stream.write(format_event_line(envelope, self.TAG) + "\n")
        stream.flush()


class StdoutTransport(Transport):
    TAG = TransportTag.STDOUT

    async def send(self, envelope: EventEnvelope) -> None:
        self._write_line(envelope)


class GrpcTransport(Transport):
    TAG = TransportTag.GRPC

    def __init__(self, client: EventProcessorClient | None, stream: TextIO | None = None) -> None:
        super().__init__(stream)
        self._client = client

    async def send(self, envelope: EventEnvelope) -> None:
        if self._client is None:
            raise MisconfigurationError("grpc client is not initialized")
        self._write_line(envelope)
        await self._client.push_event(envelope)

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.close()


class WebhookTransport(Transport):
    TAG = TransportTag.API

    def __init__(
        self,
        client: WebhookClient | None,
        is_testnet: bool = False,
        stream: TextIO | None = None,
    ) -> None:
        super().__init__(stream)
        self._client = client
        self._is_testnet = is_testnet

    @property
    def is_testnet(self) -> bool:
        return self._is_testnet

    async def send(self, envelope: EventEnvelope) -> None:
        if self._client is None:
            raise MisconfigurationError("webhook client is not initialized")
        await self._client.post_event(webhook_payload(envelope, self._is_testnet))
        self._write_line(envelope)

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.close()
