import logging
import traceback
from contextlib import asynccontextmanager

from fastapi import FastAPI
from starlette.requests import Request
from starlette.responses import JSONResponse

from tezrelay.api.blocks import router as blocks_router
from tezrelay.api.entrypoints import router as entrypoints_router
from tezrelay.container import Container
from tezrelay.logging_setup import configure_logging

logger = logging.getLogger("tezrelay.api")

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    container = Container()
    configure_logging(container.settings().log_level)
    app.state.container = container
    # Build clients and pick transports inside the running loop
    container.indexer()
    yield
    await container.indexer().aclose()


app = FastAPI(title="tezrelay", version=VERSION, lifespan=lifespan)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    tb = traceback.format_exception(type(exc), exc, exc.__traceback__)
    logger.error("Unhandled error on %s %s:\n%s", request.method, request.url.path, "".join(tb))
    return JSONResponse(status_code=500, content={"detail": str(exc)})


app.include_router(entrypoints_router)
app.include_router(blocks_router)


@app.get("/api/health")
async def health():
    return {"status": "ok", "version": VERSION}
