from typing import Any

from pydantic import BaseModel, Field

from tezrelay.relay.types import TransactionContext


class EntrypointCallRequest(BaseModel):
    parameter: Any
    context: TransactionContext


class EntrypointCallResponse(BaseModel):
    contract: str
    entrypoint: str
    envelopes: int


class BlockRequest(BaseModel):
    level: int = Field(ge=0)


class BlockResponse(BaseModel):
    level: int
    checkpointed: bool
