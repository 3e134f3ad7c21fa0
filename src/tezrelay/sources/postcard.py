"""Postcard contract: mints are relayed as transfers, stamps as `token_updated` events."""

from typing import Any

from tezrelay.relay.envelope import build_stamp_envelopes, build_transfer_envelopes, mint_to_transfer
from tezrelay.relay.types import EventEnvelope, MintPostcardItem, StampPostcardItem, TransactionContext
from tezrelay.sources.base import TransferSource


class PostcardSource(TransferSource):
    CONTRACT_NAME = "postcard"
    ENTRYPOINT_HANDLERS = {
        "transfer": "_handle_transfer",
        "mint_postcard": "_handle_mint_postcard",
        "stamp_postcard": "_handle_stamp_postcard",
    }

    def _handle_mint_postcard(self, parameter: Any, context: TransactionContext) -> list[EventEnvelope]:
        mints = self._decode(MintPostcardItem, parameter, context)
        return build_transfer_envelopes(mint_to_transfer(mints), context)

    def _handle_stamp_postcard(self, parameter: Any, context: TransactionContext) -> list[EventEnvelope]:
        stamps = self._decode(StampPostcardItem, parameter, context)
        return build_stamp_envelopes(stamps, context)
