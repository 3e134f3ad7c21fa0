"""Envelope builder: decoded entrypoint items + transaction context -> EventEnvelope.

All functions are pure. Addresses are passed through unchanged.
"""

from collections.abc import Iterable, Iterator
from datetime import datetime, timezone

from tezrelay.domain.enums import EventTag, EventType, TransportTag
from tezrelay.relay.types import (
    EventEnvelope,
    MintPostcardItem,
    StampPostcardItem,
    TransactionContext,
    TransferItem,
    TransferParameterItem,
    TransferTx,
)

MINT_ORIGIN = ""


def iter_transfer_items(parameter: Iterable[TransferParameterItem]) -> Iterator[TransferItem]:
    """Flatten `[{from_, txs: [...]}]` into one TransferItem per `(from_, txs[i])` pair."""
    for group in parameter:
        for tx in group.txs:
            yield TransferItem(
                from_address=group.from_,
                to_address=tx.to_,
                token_id=tx.token_id,
                amount=tx.amount,
            )


def build_envelope(
    item: TransferItem,
    context: TransactionContext,
    event_type: EventType | str = EventType.TRANSFER,
) -> EventEnvelope:
    return EventEnvelope(
        type=event_type.value if isinstance(event_type, EventType) else event_type,
        contract=context.contract_address,
        from_address=item.from_address,
        to_address=item.to_address,
        token_id=format_token_id(item.token_id),
        tx_id=context.operation_group_hash,
        tx_time=context.block_timestamp,
    )


def build_transfer_envelopes(
    parameter: Iterable[TransferParameterItem],
    context: TransactionContext,
) -> list[EventEnvelope]:
    return [build_envelope(item, context) for item in iter_transfer_items(parameter)]


def mint_to_transfer(mints: Iterable[MintPostcardItem]) -> list[TransferParameterItem]:
    """A mint is relayed as a transfer of one unit from the empty (issuance) address."""
    return [
        TransferParameterItem(
            from_=MINT_ORIGIN,
            txs=[TransferTx(amount=1, to_=mint.owner, token_id=mint.token_id)],
        )
        for mint in mints
    ]


def build_stamp_envelopes(
    stamps: Iterable[StampPostcardItem],
    context: TransactionContext,
) -> list[EventEnvelope]:
    """Stamping updates a token in place: the postman is both `from` and `to`."""
    return [
        build_envelope(
            TransferItem(from_address=stamp.postman, to_address=stamp.postman, token_id=stamp.token_id),
            context,
            EventType.TOKEN_UPDATED,
        )
        for stamp in stamps
    ]


def format_token_id(token_id: int) -> str:
    # int -> str is exact for arbitrary precision; never route through float
    return str(int(token_id))


def format_timestamp(value: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision, e.g. `2023-05-01T12:00:00.000Z`."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def event_tag(envelope: EventEnvelope) -> EventTag:
    if envelope.type == EventType.TOKEN_UPDATED.value:
        return EventTag.TOKEN_STAMP
    return EventTag.TOKEN_TRANSFER


def format_event_line(envelope: EventEnvelope, transport: TransportTag) -> str:
    """Human-readable relay line shared by every transport."""
    return (
        f"{event_tag(envelope).value} {transport.value} ( {envelope.contract} ) "
        f"id: {envelope.token_id} from: {envelope.from_address} to: {envelope.to_address} "
        f"txid: {envelope.tx_id} txTime: {format_timestamp(envelope.tx_time)}"
    )


def webhook_payload(envelope: EventEnvelope, is_testnet: bool) -> dict:
    """JSON body posted to the event subscriber webhook."""
    return {
        "timestamp": format_timestamp(envelope.tx_time),
        "contract": envelope.contract,
        "tokenID": envelope.token_id,
        "from": envelope.from_address,
        "to": envelope.to_address,
        "isTest": is_testnet,
    }
