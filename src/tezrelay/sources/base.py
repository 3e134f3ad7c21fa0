"""Contract source interfaces."""

import logging
from abc import ABC
from collections.abc import Callable
from typing import Any, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from tezrelay.relay.envelope import build_transfer_envelopes
from tezrelay.relay.types import (
    EventEnvelope,
    TransactionContext,
    TransferGroup,
    TransferParameterItem,
    TransferTx,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

EntrypointHandler = Callable[[Any, TransactionContext], list[EventEnvelope]]

_ITEM_LIST = TypeAdapter(list[Any])


class ContractSource(ABC):
    """Declarative entrypoint->handler mapping for one contract.

    Subclasses define:
        CONTRACT_NAME: name the indexing framework filters the contract by
        ENTRYPOINT_HANDLERS: dict mapping entrypoint names to handler method names

    Handler method signature:
        def _handle_xxx(self, parameter, context) -> list[EventEnvelope]

    `parameter` is the decoded entrypoint parameter as the framework hands it
    over, of whatever shape the entrypoint declares. Entrypoints that are not
    listed carry no relay logic and are ignored.
    """

    CONTRACT_NAME: str = "unknown"
    ENTRYPOINT_HANDLERS: dict[str, str] = {}

    def handlers(self) -> dict[str, EntrypointHandler]:
        return {entrypoint: getattr(self, method) for entrypoint, method in self.ENTRYPOINT_HANDLERS.items()}

    def _decode(self, model: type[ModelT], parameter: Any, context: TransactionContext) -> list[ModelT]:
        """Validate a list parameter item by item so one malformed item does not drop its siblings."""
        try:
            raw_items = _ITEM_LIST.validate_python(parameter)
        except ValidationError:
            logger.warning(
                "Skipping %s parameter on %s contract=%s tx_id=%s: expected a list, got %s",
                model.__name__, self.CONTRACT_NAME, context.contract_address,
                context.operation_group_hash, type(parameter).__name__,
            )
            return []

        decoded: list[ModelT] = []
        for raw in raw_items:
            try:
                decoded.append(model.model_validate(raw))
            except ValidationError as e:
                logger.warning(
                    "Skipping malformed %s item on %s contract=%s tx_id=%s: %s",
                    model.__name__, self.CONTRACT_NAME, context.contract_address,
                    context.operation_group_hash, e.errors(include_url=False),
                )
        return decoded


class TransferSource(ContractSource):
    """FA2 contract whose `transfer` entrypoint is relayed as-is."""

    ENTRYPOINT_HANDLERS = {"transfer": "_handle_transfer"}

    def _handle_transfer(self, parameter: Any, context: TransactionContext) -> list[EventEnvelope]:
        # each (from_, txs[i]) leg stands on its own
        groups = [
            TransferParameterItem(from_=group.from_, txs=self._decode(TransferTx, group.txs, context))
            for group in self._decode(TransferGroup, parameter, context)
        ]
        return build_transfer_envelopes(groups, context)
