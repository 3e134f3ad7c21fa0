"""Block checkpoint reporter: persists the last indexed block level every Nth block."""

import asyncio
import logging

from botocore.exceptions import BotoCoreError

from tezrelay.config import Settings
from tezrelay.infra.aws.ssm import ParameterStore

logger = logging.getLogger(__name__)


class BlockCheckpointReporter:
    def __init__(self, store: ParameterStore, key_name: str, interval: int = 5) -> None:
        if interval < 1:
            raise ValueError(f"Checkpoint interval must be >= 1, got {interval}")
        self._store = store
        self._key_name = key_name
        self._interval = interval

    async def index_block(self, level: int) -> bool:
        """Write `level` when it falls on the interval. Returns True if the write succeeded.

        Write failures are logged and swallowed; they never stop indexing.
        """
        if level % self._interval != 0:
            return False
        logger.info("update last block %d", level)
        try:
            await asyncio.to_thread(self._store.put, self._key_name, str(level))
        except Exception:
            logger.exception("Failed to write checkpoint %s=%d", self._key_name, level)
            return False
        return True


def build_checkpoint_reporter(settings: Settings) -> BlockCheckpointReporter | None:
    if not settings.last_stop_block_key_name:
        logger.info("last stop block key name not set, checkpointing disabled")
        return None
    try:
        store = ParameterStore(region=settings.aws_region)
    except BotoCoreError:
        logger.exception("Failed to create parameter store client, checkpointing disabled")
        return None
    return BlockCheckpointReporter(store, settings.last_stop_block_key_name, settings.checkpoint_interval)
