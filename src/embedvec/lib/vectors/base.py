"""Base vector handle and the typed vector container.

An :class:`EmbeddingVector` is either still encoded (``JsonArrayVector``,
``Base64Vector``) or already decoded into a :class:`TypedVector`.  The set
of variants is closed; the base class itself implements nothing and
rejects every operation.

Every variant shares the write-back contract: ``write(format)`` returns the
UTF-8 bytes of one JSON value.  ``"J"`` is the only defined format.
"""

import base64
import logging
from dataclasses import dataclass

from .errors import FormatError, UnsupportedFormatError, UnsupportedOperationError
from .scalars import ScalarType

logger = logging.getLogger(__name__)

JSON_FORMAT = "J"


def check_write_format(format: str) -> None:
    """Raise :class:`UnsupportedFormatError` unless *format* is ``"J"``."""
    if format != JSON_FORMAT:
        raise UnsupportedFormatError(
            f"Unsupported write format {format!r}; only {JSON_FORMAT!r} is defined",
            format=format,
        )


class EmbeddingVector:
    """A vector in some wire encoding, or already typed."""

    def to(self, scalar_type) -> "TypedVector":
        """Decode into a :class:`TypedVector` of *scalar_type*."""
        raise UnsupportedOperationError(
            f"{type(self).__name__} cannot be converted to {scalar_type!r}; "
            "construct it with from_json(), from_base64() or from_scalars()"
        )

    def write(self, format: str = JSON_FORMAT) -> bytes:
        """Return the vector as the UTF-8 bytes of a JSON value."""
        raise UnsupportedOperationError(f"{type(self).__name__} has no write-back")

    def write_to(self, stream, format: str = JSON_FORMAT) -> int:
        """Write the output of :meth:`write` to a binary *stream*."""
        return stream.write(self.write(format))


@dataclass(frozen=True)
class TypedVector(EmbeddingVector):
    """An immutable, decoded vector of a single scalar type.

    ``scalars`` is a tuple whose elements are already in the representation
    of ``scalar_type``.  Use ``from_scalars()`` to build one from arbitrary
    numbers; this constructor does not validate them.
    """

    scalar_type: ScalarType
    scalars: tuple

    def __post_init__(self):
        object.__setattr__(self, "scalar_type", ScalarType.parse(self.scalar_type))
        object.__setattr__(self, "scalars", tuple(self.scalars))

    def __len__(self) -> int:
        return len(self.scalars)

    def __iter__(self):
        return iter(self.scalars)

    def __getitem__(self, index):
        return self.scalars[index]

    def to(self, scalar_type) -> "TypedVector":
        scalar_type = ScalarType.parse(scalar_type)
        if scalar_type is self.scalar_type:
            return self
        raise UnsupportedOperationError(
            f"Cannot convert a {self.scalar_type.value} vector to {scalar_type.value}"
        )

    def write(self, format: str = JSON_FORMAT) -> bytes:
        """Serialize the scalars as a JSON numeric array."""
        check_write_format(format)
        codec = self.scalar_type.codec
        try:
            items = [codec.format(value) for value in self.scalars]
        except ValueError as exc:
            raise FormatError(
                f"Cannot write {self.scalar_type.value} vector as JSON: {exc}",
                wire_format="json",
                scalar_type=self.scalar_type,
            ) from exc
        return ("[" + ",".join(items) + "]").encode("utf-8")

    def to_bytes(self) -> bytes:
        """Pack the scalars as a flat little-endian byte buffer."""
        return self.scalar_type.codec.pack(self.scalars)

    def to_base64(self) -> str:
        """Return the padded Base64 text of :meth:`to_bytes`."""
        encoded = base64.b64encode(self.to_bytes()).decode("ascii")
        logger.debug(
            "Encoded %d %s scalars as %d base64 characters",
            len(self.scalars),
            self.scalar_type.value,
            len(encoded),
        )
        return encoded
