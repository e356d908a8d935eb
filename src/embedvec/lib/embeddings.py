"""Embedding API response utilities.

Embedding APIs return ``{"data": [{"embedding": ...}, ...]}`` where each
embedding is a numeric array by default, or a Base64 string of little-endian
float32 bytes when requested with ``encoding_format=base64``.
"""

import json

from .vectors import EmbeddingVector, from_base64, from_json


def vector_from_embedding_response(body: dict, index: int = 0) -> EmbeddingVector:
    """Return the embedding at position *index* of an embeddings response.

    Raises ``KeyError`` if the response has no such embedding and
    ``TypeError`` if the embedding is neither a list nor a string.
    """
    data = body.get("data") or []
    if not 0 <= index < len(data):
        raise KeyError(f"Embedding response has no item {index}")

    embedding = (data[index] or {}).get("embedding")
    if isinstance(embedding, str):
        return from_base64(embedding)
    if isinstance(embedding, list):
        return from_json(json.dumps(embedding, separators=(",", ":")))
    raise TypeError(f"Unexpected embedding type: {type(embedding).__name__}")
