"""Vectors router – exposes the embedding vector codec via HTTP.

POST /vectors/decode
    Decode a JSON-array or Base64 vector into a typed vector.

POST /vectors/encode
    Serialize scalars with the write-back contract.

GET /vectors/{index}/{doc_id}
    Fetch a stored vector field from Elasticsearch and decode it.
"""

import logging
import math
import os

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response

from ..lib.elasticsearch import VectorFieldNotFound, fetch_document_vector
from ..lib.vectors import (
    EmbeddingVector,
    FormatError,
    TypedVector,
    UnsupportedFormatError,
    UnsupportedTypeError,
    from_base64,
    from_json,
    from_scalars,
)
from ..models import VectorDecodeRequest, VectorDecodeResponse, VectorEncodeRequest
from ..security import verify_api_key

router = APIRouter(tags=["vectors"], dependencies=[Depends(verify_api_key)])

logger = logging.getLogger(__name__)

DEFAULT_EMBEDDING_FIELD = "DescriptionVector"


def get_embedding_field() -> str:
    return os.environ.get("EMBEDDING_FIELD") or DEFAULT_EMBEDDING_FIELD


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _decode(vector: EmbeddingVector, scalar_type: str) -> TypedVector:
    """Decode *vector*, mapping codec errors to HTTP errors."""
    try:
        return vector.to(scalar_type)
    except UnsupportedTypeError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except FormatError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


def _to_response(typed: TypedVector) -> VectorDecodeResponse:
    """Build the response body; JSON has no NaN or infinity, so reject them."""
    for i, value in enumerate(typed.scalars):
        if not math.isfinite(value):
            raise HTTPException(
                status_code=422,
                detail=f"Element {i} of the decoded vector is not finite ({value!r})",
            )
    return VectorDecodeResponse(
        scalar_type=typed.scalar_type.value,
        dimensions=len(typed),
        scalars=list(typed.scalars),
    )


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.post("/vectors/decode", response_model=VectorDecodeResponse)
async def vectors_decode(payload: VectorDecodeRequest) -> VectorDecodeResponse:
    """Decode a vector given in its declared wire format."""
    if payload.source_format == "json":
        vector = from_json(payload.payload)
    else:
        vector = from_base64(payload.payload)
    return _to_response(_decode(vector, payload.scalar_type))


@router.post("/vectors/encode")
async def vectors_encode(payload: VectorEncodeRequest) -> Response:
    """Write scalars back as a raw JSON value.

    With ``encoding=array`` the body is a numeric array; with
    ``encoding=base64`` it is a JSON string of the little-endian bytes.
    """
    try:
        vector = from_scalars(payload.scalars, payload.scalar_type)
        if payload.encoding == "base64":
            vector = from_base64(vector.to_base64())
        body = vector.write(payload.format)
    except (UnsupportedTypeError, UnsupportedFormatError) as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except FormatError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    return Response(content=body, media_type="application/json")


@router.get("/vectors/{index}/{doc_id}", response_model=VectorDecodeResponse)
async def vectors_fetch(
    request: Request,
    index: str,
    doc_id: str,
    field: str | None = Query(None, description="Vector field; defaults to EMBEDDING_FIELD"),
    scalar_type: str = Query("float32", description="float32, float16, int8 or uint8"),
) -> VectorDecodeResponse:
    """Fetch a document's stored vector from Elasticsearch and decode it."""
    field = field or get_embedding_field()

    # The AsyncElasticsearch client is created in the FastAPI lifespan in
    # `main.py`; tests replace `app.state.es` with a fake.
    es = getattr(request.app.state, "es", None)
    if es is None:
        logger.error("Elasticsearch client is not configured; set ES_URL")
        raise HTTPException(status_code=503, detail="Elasticsearch is not configured")

    try:
        vector = await fetch_document_vector(es, index, doc_id, field)
    except VectorFieldNotFound as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except Exception as exc:
        logger.exception(
            "Elasticsearch document lookup failed",
            extra={"index": index, "doc_id": doc_id},
        )
        raise HTTPException(status_code=502, detail="Elasticsearch request failed") from exc

    return _to_response(_decode(vector, scalar_type))
