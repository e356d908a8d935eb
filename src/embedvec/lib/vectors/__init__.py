"""Embedding vector codec.

Decodes embeddings received as JSON numeric arrays or Base64 little-endian
binary into typed buffers, and writes them back as JSON.

    >>> vec = from_base64("AACAPwAAAEA=").to(ScalarType.FLOAT32)
    >>> vec.scalars
    (1.0, 2.0)
    >>> vec.write("J")
    b'[1.0,2.0]'
"""

from .base import JSON_FORMAT, EmbeddingVector, TypedVector
from .base64_vector import Base64Vector
from .errors import (
    EmbeddingVectorError,
    FormatError,
    UnsupportedFormatError,
    UnsupportedOperationError,
    UnsupportedTypeError,
)
from .factories import from_base64, from_json, from_scalars
from .json_array import JsonArrayVector
from .scalars import ScalarCodec, ScalarType

__all__ = [
    "JSON_FORMAT",
    "Base64Vector",
    "EmbeddingVector",
    "EmbeddingVectorError",
    "FormatError",
    "JsonArrayVector",
    "ScalarCodec",
    "ScalarType",
    "TypedVector",
    "UnsupportedFormatError",
    "UnsupportedOperationError",
    "UnsupportedTypeError",
    "from_base64",
    "from_json",
    "from_scalars",
]
