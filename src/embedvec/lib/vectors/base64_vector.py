"""Vector encoded as Base64 text of raw little-endian scalars.

This is the layout embedding APIs return with ``encoding_format=base64``
and the one search indexes use to store vectors as strings: the Base64
text decodes to ``n * width`` bytes, element ``i`` occupying bytes
``[i * width, (i + 1) * width)``.  Binary decoding is bit-exact; the width
must divide the buffer length or the payload is rejected.
"""

import base64
import binascii
import json
import logging
from dataclasses import dataclass

from .base import JSON_FORMAT, EmbeddingVector, TypedVector, check_write_format
from .errors import FormatError
from .scalars import ScalarType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Base64Vector(EmbeddingVector):
    """Holds the UTF-8 Base64 text exactly as received."""

    payload: bytes

    def decode_bytes(self) -> bytes:
        """Return the raw bytes behind the Base64 text.

        Raises :class:`FormatError` for characters outside the standard
        alphabet or incorrect padding.
        """
        try:
            return base64.b64decode(self.payload, validate=True)
        except binascii.Error as exc:
            raise FormatError(f"Invalid base64 vector: {exc}", wire_format="base64") from exc

    def to(self, scalar_type) -> TypedVector:
        scalar_type = ScalarType.parse(scalar_type)
        raw = self.decode_bytes()

        try:
            scalars = scalar_type.codec.unpack(raw)
        except ValueError as exc:
            raise FormatError(
                f"Cannot read base64 vector as {scalar_type.value}: {exc}",
                wire_format="base64",
                scalar_type=scalar_type,
            ) from exc

        logger.debug(
            "Decoded %d %s scalars from %d base64 bytes",
            len(scalars),
            scalar_type.value,
            len(raw),
        )
        return TypedVector(scalar_type, scalars)

    def write(self, format: str = JSON_FORMAT) -> bytes:
        """Return the original Base64 text as a JSON string value."""
        check_write_format(format)
        try:
            text = self.payload.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise FormatError(f"Base64 payload is not UTF-8 text: {exc}", wire_format="base64") from exc
        return json.dumps(text).encode("utf-8")
