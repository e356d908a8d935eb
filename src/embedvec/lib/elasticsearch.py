"""Shared Elasticsearch utilities.

Helpers for pulling stored embedding vectors out of Elasticsearch responses
and handing them to the codec.  A vector field stored as a numeric array is
read as a JSON vector; one stored as a string is read as Base64.
"""

import json
import logging

from elastic_transport import ObjectApiResponse

from .vectors import EmbeddingVector, from_base64, from_json

logger = logging.getLogger(__name__)


class VectorFieldNotFound(LookupError):
    """The requested document or vector field does not exist."""


def unwrap_es_response(resp) -> dict:
    """Unwrap an Elasticsearch response, handling both ObjectApiResponse and dict.

    Raises ``TypeError`` if the response type is unexpected.
    """
    if isinstance(resp, ObjectApiResponse):
        return resp.body
    if isinstance(resp, dict):
        return resp
    logger.error("Unexpected Elasticsearch response type: %s", type(resp))
    raise TypeError(f"Unexpected Elasticsearch response type: {type(resp)}")


def vector_from_source(source: dict, field: str) -> EmbeddingVector:
    """Build an :class:`EmbeddingVector` from a hit's ``_source``.

    *field* may be a dotted path (``embeddings.all_MiniLM_L12_v2``).
    """
    value = source
    for part in field.split("."):
        if not isinstance(value, dict) or part not in value:
            raise VectorFieldNotFound(f"Field {field!r} not found in document")
        value = value[part]

    if isinstance(value, str):
        return from_base64(value)
    if isinstance(value, list):
        # Floats are re-emitted with repr, which round-trips the parsed value.
        return from_json(json.dumps(value, separators=(",", ":")))
    raise VectorFieldNotFound(
        f"Field {field!r} holds {type(value).__name__}, not a vector"
    )


async def fetch_document_vector(es, index: str, doc_id: str, field: str) -> EmbeddingVector:
    """Look a document up by id and return its vector field.

    Raises :class:`VectorFieldNotFound` if the document or field is missing.
    Errors from the client propagate unchanged.
    """
    resp = await es.search(
        index=index,
        query={"ids": {"values": [doc_id]}},
        size=1,
        _source=[field],
    )
    data = unwrap_es_response(resp)

    hits = data.get("hits", {}).get("hits", [])
    if not hits:
        logger.info("Document %s not found in index %s", doc_id, index)
        raise VectorFieldNotFound(f"Document {doc_id!r} not found in index {index!r}")

    return vector_from_source(hits[0].get("_source") or {}, field)
