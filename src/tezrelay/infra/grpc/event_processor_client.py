"""Async gRPC client for the EventProcessor service (insecure channel, unary calls)."""

import logging
from datetime import datetime, timezone
from typing import Any

import grpc
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from tezrelay.config import Settings
from tezrelay.exceptions import EventProcessorError, ExternalServiceError
from tezrelay.infra.grpc import event_processor_pb as pb
from tezrelay.relay.types import EventEnvelope

logger = logging.getLogger(__name__)

STATUS_OK = 200


def _utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def build_event_request(envelope: EventEnvelope, message_cls: Any = pb.NftEventInput) -> Any:
    """Envelope -> NftEventInput/EventInput. `eventIndex` is left at its zero default."""
    request = message_cls(**{
        "type": envelope.type,
        "blockchain": envelope.blockchain,
        "contract": envelope.contract,
        "from": envelope.from_address,
        "to": envelope.to_address,
        "tokenID": envelope.token_id,
        "txID": envelope.tx_id,
    })
    request.txTime.FromDatetime(_utc(envelope.tx_time))
    return request


class EventProcessorClient:
    def __init__(
        self,
        target: str,
        push_method: str = "PushNftEvent",
        max_attempts: int = 1,
        timeout: float | None = None,
        channel: grpc.aio.Channel | None = None,
    ) -> None:
        if push_method not in ("PushEvent", "PushNftEvent"):
            raise ValueError(f"Unsupported push method: {push_method}")
        self._target = target
        self._max_attempts = max(1, max_attempts)
        self._timeout = timeout
        self._channel = channel or grpc.aio.insecure_channel(target)
        self._request_type = pb.REQUEST_TYPES[push_method]
        self._push = self._unary(push_method)
        self._push_series = self._unary("PushSeriesEvent")

    @property
    def target(self) -> str:
        return self._target

    def _unary(self, method_name: str):
        return self._channel.unary_unary(
            pb.method_path(method_name),
            request_serializer=pb.REQUEST_TYPES[method_name].SerializeToString,
            response_deserializer=pb.EventOutput.FromString,
        )

    async def _call(self, stub, request: Any) -> Any:
        async for attempt in AsyncRetrying(
            retry=retry_if_exception_type(ExternalServiceError),
            stop=stop_after_attempt(self._max_attempts),
            wait=wait_exponential(multiplier=1, min=1, max=10),
            reraise=True,
        ):
            with attempt:
                try:
                    response = await stub(request, timeout=self._timeout)
                except grpc.aio.AioRpcError as e:
                    raise ExternalServiceError(f"EventProcessor rpc failed: {e.code()}: {e.details()}") from e

        if response.status != STATUS_OK:
            raise EventProcessorError(response.status, response.result)
        return response

    async def push_event(self, envelope: EventEnvelope) -> None:
        """Push one envelope. Raises EventProcessorError on a non-200 answer."""
        await self._call(self._push, build_event_request(envelope, self._request_type))

    async def push_series_event(
        self,
        event_type: str,
        contract: str,
        data: dict[str, Any],
        tx_id: str,
        tx_time: datetime,
    ) -> None:
        request = pb.SeriesEventInput(type=event_type, contract=contract, txID=tx_id)
        request.data.update(data)
        request.txTime.FromDatetime(_utc(tx_time))
        await self._call(self._push_series, request)

    async def close(self) -> None:
        await self._channel.close()


def build_event_processor_client(settings: Settings) -> EventProcessorClient | None:
    """Connect once at startup when the endpoint is configured; None otherwise."""
    if not settings.event_processor_uri:
        logger.info("event processor uri not set")
        return None
    logger.info("Connecting to event processor at %s (%s)", settings.event_processor_uri, settings.grpc_push_method)
    return EventProcessorClient(
        target=settings.event_processor_uri,
        push_method=settings.grpc_push_method,
        max_attempts=settings.delivery_max_attempts,
        timeout=settings.grpc_timeout,
    )
