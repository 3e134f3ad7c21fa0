"""Dispatcher: fans envelopes out to the active transports without blocking indexing."""

import asyncio
import logging
from collections.abc import Iterable

from tezrelay.config import DeliveryConfig
from tezrelay.exceptions import MisconfigurationError
from tezrelay.relay.transports import GrpcTransport, StdoutTransport, Transport, WebhookTransport
from tezrelay.relay.types import EventEnvelope

logger = logging.getLogger(__name__)


def select_transports(
    config: DeliveryConfig,
    grpc_transport: GrpcTransport,
    webhook_transport: WebhookTransport,
    stdout_transport: StdoutTransport,
) -> list[Transport]:
    """Decide the active transport set once. gRPC always comes before HTTP."""
    active: list[Transport] = []
    if config.grpc_endpoint:
        active.append(grpc_transport)
    if config.webhook_endpoint:
        active.append(webhook_transport)
    if not active:
        active.append(stdout_transport)
    logger.info("Active transports: %s", ", ".join(t.name for t in active))
    return active


class Dispatcher:
    """Runs each (envelope, transport) delivery as its own background task.

    `dispatch` returns immediately. A failing delivery is logged and dropped;
    it never reaches the caller and never affects the other transports.
    `max_in_flight > 0` bounds concurrently running deliveries (extra ones wait).
    `drain_timeout` caps how long `aclose` waits for in-flight deliveries.
    """

    def __init__(
        self,
        transports: list[Transport],
        max_in_flight: int = 0,
        drain_timeout: float | None = None,
    ) -> None:
        self._transports = list(transports)
        self._tasks: set[asyncio.Task] = set()
        self._slots = asyncio.Semaphore(max_in_flight) if max_in_flight > 0 else None
        self._drain_timeout = drain_timeout

    @property
    def transports(self) -> list[Transport]:
        return list(self._transports)

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def dispatch(self, envelopes: Iterable[EventEnvelope]) -> int:
        """Schedule delivery of every envelope to every active transport. Returns envelope count."""
        count = 0
        for envelope in envelopes:
            count += 1
            for transport in self._transports:
                task = asyncio.create_task(self._deliver_one(transport, envelope))
                self._tasks.add(task)
                task.add_done_callback(self._tasks.discard)
        return count

    async def deliver(self, envelope: EventEnvelope) -> None:
        """Deliver one envelope to all transports and wait for every attempt to finish."""
        await asyncio.gather(*(self._deliver_one(t, envelope) for t in self._transports))

    async def drain(self, timeout: float | None = None) -> None:
        """Wait for all in-flight deliveries.

        With a `timeout`, deliveries still running once it expires are cancelled
        and dropped; drain itself never raises for them.
        """
        loop = asyncio.get_running_loop()
        deadline = None if timeout is None else loop.time() + timeout
        while self._tasks:
            remaining = None if deadline is None else max(0.0, deadline - loop.time())
            _, pending = await asyncio.wait(list(self._tasks), timeout=remaining)
            if pending:
                logger.warning("Cancelling %d deliveries still running after %ss", len(pending), timeout)
                for task in pending:
                    task.cancel()
                await asyncio.gather(*pending, return_exceptions=True)
                return

    async def aclose(self) -> None:
        await self.drain(self._drain_timeout)
        for transport in self._transports:
            await transport.aclose()

    async def _deliver_one(self, transport: Transport, envelope: EventEnvelope) -> bool:
        if self._slots is None:
            return await self._send(transport, envelope)
        async with self._slots:
            return await self._send(transport, envelope)

    async def _send(self, transport: Transport, envelope: EventEnvelope) -> bool:
        try:
            await transport.send(envelope)
            return True
        except MisconfigurationError as e:
            logger.error(
                "%s transport misconfigured, dropping event contract=%s token_id=%s tx_id=%s: %s",
                transport.name, envelope.contract, envelope.token_id, envelope.tx_id, e,
            )
        except Exception:
            logger.exception(
                "fail to push event through %s contract=%s token_id=%s tx_id=%s",
                transport.name, envelope.contract, envelope.token_id, envelope.tx_id,
            )
        return False
