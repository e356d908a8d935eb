import logging
import os
from contextlib import asynccontextmanager

from elasticsearch import AsyncElasticsearch
from fastapi import Depends, FastAPI

from .routers import health, vectors
from .security import verify_api_key

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the shared AsyncElasticsearch client when ``ES_URL`` is set."""
    es_url = os.environ.get("ES_URL")
    es = None
    if es_url:
        es = AsyncElasticsearch(es_url, api_key=os.environ.get("ES_API_KEY") or None)
        app.state.es = es
    else:
        logger.warning("ES_URL is not set; /vectors/{index}/{doc_id} is unavailable")
    try:
        yield
    finally:
        if es is not None:
            await es.close()


app = FastAPI(
    title="embedvec",
    description="Decode and encode embedding vectors sent as JSON arrays or Base64 binary",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(health.router)
app.include_router(vectors.router)


@app.get("/", dependencies=[Depends(verify_api_key)])
async def root():
    return {"message": "embedvec"}
