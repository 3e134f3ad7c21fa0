"""RelayIndexer: the callbacks the external indexing framework drives."""

import logging
from typing import Any

from tezrelay.checkpoint.reporter import BlockCheckpointReporter
from tezrelay.exceptions import UnknownContractError
from tezrelay.relay.dispatcher import Dispatcher
from tezrelay.relay.types import TransactionContext
from tezrelay.sources.registry import SourceRegistry

logger = logging.getLogger(__name__)


class RelayIndexer:
    """Turns entrypoint calls into envelopes and hands them to the dispatcher.

    Handlers return as soon as delivery is scheduled. Nothing raised while
    building or delivering events escapes to the framework; only an
    unregistered contract name is reported back, as UnknownContractError.
    """

    def __init__(
        self,
        registry: SourceRegistry,
        dispatcher: Dispatcher,
        checkpoint: BlockCheckpointReporter | None = None,
    ) -> None:
        self._registry = registry
        self._dispatcher = dispatcher
        self._checkpoint = checkpoint

    @property
    def dispatcher(self) -> Dispatcher:
        return self._dispatcher

    async def index_entrypoint(
        self,
        contract: str,
        entrypoint: str,
        parameter: Any,
        context: TransactionContext,
    ) -> int:
        """Relay one entrypoint call. Returns the number of envelopes scheduled."""
        if not self._registry.has_contract(contract):
            raise UnknownContractError(f"Unknown contract: {contract}")

        handler = self._registry.get(contract, entrypoint)
        if handler is None:
            logger.debug("No relay logic for %s.%s", contract, entrypoint)
            return 0

        try:
            envelopes = handler(parameter, context)
        except Exception:
            logger.exception(
                "Failed to build events for %s.%s contract=%s tx_id=%s",
                contract, entrypoint, context.contract_address, context.operation_group_hash,
            )
            return 0

        return self._dispatcher.dispatch(envelopes)

    async def index_block(self, level: int) -> bool:
        """Block callback. Returns True when a checkpoint was written."""
        if self._checkpoint is None:
            return False
        return await self._checkpoint.index_block(level)

    async def aclose(self) -> None:
        await self._dispatcher.aclose()
