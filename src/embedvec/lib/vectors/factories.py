"""Named constructors for embedding vectors.

The caller declares the wire format; payloads are never sniffed.
"""

from .base import TypedVector
from .base64_vector import Base64Vector
from .errors import FormatError
from .json_array import JsonArrayVector
from .scalars import ScalarType


def _to_bytes(payload) -> bytes:
    if isinstance(payload, str):
        return payload.encode("utf-8")
    if isinstance(payload, (bytes, bytearray, memoryview)):
        return bytes(payload)
    raise TypeError(f"payload must be str or bytes-like, got {type(payload).__name__}")


def from_json(utf8_json) -> JsonArrayVector:
    """Wrap UTF-8 JSON text of a numeric array (``bytes`` or ``str``)."""
    return JsonArrayVector(_to_bytes(utf8_json))


def from_base64(base64_text) -> Base64Vector:
    """Wrap standard padded Base64 text (``bytes`` or ``str``)."""
    return Base64Vector(_to_bytes(base64_text))


def from_scalars(scalars, scalar_type=ScalarType.FLOAT32) -> TypedVector:
    """Build a :class:`TypedVector` from numbers already in memory.

    Each value is converted to *scalar_type*; floats are rounded to the
    type's precision and integers must be in range.
    """
    scalar_type = ScalarType.parse(scalar_type)
    codec = scalar_type.codec

    values = []
    for i, value in enumerate(scalars):
        try:
            values.append(codec.coerce(value))
        except (TypeError, OverflowError) as exc:
            raise FormatError(
                f"Scalar {i} is not a valid {scalar_type.value}: {exc}",
                scalar_type=scalar_type,
            ) from exc
    return TypedVector(scalar_type, values)
