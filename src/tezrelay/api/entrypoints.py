from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from tezrelay.api.deps import get_indexer
from tezrelay.api.schemas.indexing import EntrypointCallRequest, EntrypointCallResponse
from tezrelay.exceptions import UnknownContractError
from tezrelay.indexer import RelayIndexer

router = APIRouter(prefix="/api/entrypoints", tags=["entrypoints"])

IndexerDep = Annotated[RelayIndexer, Depends(get_indexer)]


@router.post("/{contract}/{entrypoint}", response_model=EntrypointCallResponse)
async def index_entrypoint(
    contract: str,
    entrypoint: str,
    body: EntrypointCallRequest,
    indexer: IndexerDep,
) -> EntrypointCallResponse:
    """Relay one decoded entrypoint call. Returns once delivery is scheduled."""
    try:
        count = await indexer.index_entrypoint(contract, entrypoint, body.parameter, body.context)
    except UnknownContractError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return EntrypointCallResponse(contract=contract, entrypoint=entrypoint, envelopes=count)
