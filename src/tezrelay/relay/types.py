"""Core data types for the event relay."""

from datetime import datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from tezrelay.domain.enums import EventType

TEZOS = "tezos"


class TransferTx(BaseModel):
    """One `txs` entry of an FA2 `transfer` parameter."""

    amount: int = Field(ge=0)
    to_: str = Field(validation_alias=AliasChoices("to_", "to"))
    token_id: int = Field(ge=0)


class TransferParameterItem(BaseModel):
    """One `{from_, txs}` group of an FA2 `transfer` parameter."""

    from_: str = Field(validation_alias=AliasChoices("from_", "from"))
    txs: list[TransferTx] = []


class TransferGroup(BaseModel):
    """A `{from_, txs}` group whose legs are not validated yet."""

    from_: str = Field(validation_alias=AliasChoices("from_", "from"))
    txs: list[Any] = []


class MintPostcardItem(BaseModel):
    owner: str
    token_id: int = Field(ge=0)


class StampPostcardItem(BaseModel):
    postman: str
    token_id: int = Field(ge=0)


class TransferItem(BaseModel):
    """A single token movement leg. `from_address == ""` marks a mint (no prior owner)."""

    model_config = ConfigDict(frozen=True)

    from_address: str
    to_address: str
    token_id: int
    amount: int = 1  # carried along, never reported


class TransactionContext(BaseModel):
    """Read-only transaction data handed over by the indexing framework."""

    model_config = ConfigDict(frozen=True)

    contract_address: str
    block_timestamp: datetime
    operation_group_hash: str
    block_level: int | None = None


class EventEnvelope(BaseModel):
    """Normalized outbound event record. Immutable once built."""

    model_config = ConfigDict(frozen=True)

    type: str = EventType.TRANSFER.value
    blockchain: str = TEZOS
    contract: str
    from_address: str
    to_address: str
    token_id: str  # decimal string, never float-formatted
    tx_id: str
    tx_time: datetime
    event_index: int | None = None  # part of the wire schema, never populated
