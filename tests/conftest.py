from datetime import datetime, timezone

import pytest

from tezrelay.domain.enums import TransportTag
from tezrelay.relay.transports import Transport
from tezrelay.relay.types import EventEnvelope, TransactionContext

CONTRACT = "KT1RJ6PbjHpwc3M5rw5s2Nbmefwbuwbdxton"
OP_HASH = "ooWWu1aLjGY5uj4cRUNbSzWkbmcX7PFDm3ofsAhKXqNWVtHvH3E"
BLOCK_TIME = datetime(2023, 5, 1, 12, 30, 45, 123000, tzinfo=timezone.utc)


class RecordingTransport(Transport):
    """In-memory transport that records envelopes and can be told to fail."""

    def __init__(self, tag: TransportTag = TransportTag.STDOUT, fail: Exception | None = None, log: list | None = None) -> None:
        self.TAG = tag
        self.fail = fail
        self.sent: list[EventEnvelope] = []
        self.log = log if log is not None else []
        self.closed = False

    async def send(self, envelope: EventEnvelope) -> None:
        self.log.append((self.name, envelope.token_id))
        if self.fail is not None:
            raise self.fail
        self.sent.append(envelope)

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture()
def context() -> TransactionContext:
    return TransactionContext(
        contract_address=CONTRACT,
        block_timestamp=BLOCK_TIME,
        operation_group_hash=OP_HASH,
        block_level=3_500_000,
    )


@pytest.fixture()
def envelope() -> EventEnvelope:
    return EventEnvelope(
        contract=CONTRACT,
        from_address="tz1A",
        to_address="tz1B",
        token_id="5",
        tx_id=OP_HASH,
        tx_time=BLOCK_TIME,
    )


@pytest.fixture()
def recording_transport() -> type[RecordingTransport]:
    return RecordingTransport
