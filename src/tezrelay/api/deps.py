from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from tezrelay.container import Container
from tezrelay.indexer import RelayIndexer


@inject
async def get_indexer(
    indexer: RelayIndexer = Depends(Provide[Container.indexer]),
) -> RelayIndexer:
    return indexer
