from typing import Annotated

from fastapi import APIRouter, Depends

from tezrelay.api.deps import get_indexer
from tezrelay.api.schemas.indexing import BlockRequest, BlockResponse
from tezrelay.indexer import RelayIndexer

router = APIRouter(prefix="/api/blocks", tags=["blocks"])

IndexerDep = Annotated[RelayIndexer, Depends(get_indexer)]


@router.post("", response_model=BlockResponse)
async def index_block(body: BlockRequest, indexer: IndexerDep) -> BlockResponse:
    checkpointed = await indexer.index_block(body.level)
    return BlockResponse(level=body.level, checkpointed=checkpointed)
