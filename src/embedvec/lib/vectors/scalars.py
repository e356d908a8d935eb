"""Scalar types supported by embedding vectors and their binary/text rules.

Each :class:`ScalarType` carries a :class:`ScalarCodec` describing how one
element is stored on the wire:

==========  =====  =============================================
type        bytes  encoding
==========  =====  =============================================
``float32``  4     IEEE-754 binary32, little-endian (``<f``)
``float16``  2     IEEE-754 binary16, little-endian (``<e``)
``int8``     1     two's complement signed byte (``b``)
``uint8``    1     unsigned byte (``B``)
==========  =====  =============================================

Values are held as plain Python numbers.  A float element is always a
``float`` that is exactly representable in the target width, so packing it
again reproduces the original bits.
"""

import math
import numbers
import struct
from dataclasses import dataclass
from enum import Enum

from .errors import UnsupportedTypeError


@dataclass(frozen=True)
class ScalarCodec:
    """Per-type binary layout and conversion rules."""

    byte_width: int
    struct_code: str
    is_float: bool
    # Significant digits that always round-trip (floats only).
    max_digits: int = 0
    min_value: int | None = None
    max_value: int | None = None

    def coerce(self, value):
        """Convert one number to this type's representation.

        Floats round to the nearest representable value.  Integers must be
        integral and in range.  Raises ``TypeError`` or ``OverflowError``.
        """
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            raise TypeError(f"expected a number, got {type(value).__name__}")

        if self.is_float:
            fmt = "<" + self.struct_code
            return struct.unpack(fmt, struct.pack(fmt, float(value)))[0]

        if not isinstance(value, numbers.Integral):
            raise TypeError(f"expected an integer, got {value!r}")
        value = int(value)
        if not self.min_value <= value <= self.max_value:
            raise OverflowError(
                f"{value} is outside the range [{self.min_value}, {self.max_value}]"
            )
        return value

    def unpack(self, raw: bytes) -> tuple:
        """Reinterpret a little-endian byte buffer as a tuple of scalars."""
        if len(raw) % self.byte_width != 0:
            raise ValueError(
                f"buffer length {len(raw)} is not a multiple of "
                f"the element width {self.byte_width}"
            )
        count = len(raw) // self.byte_width
        return struct.unpack(f"<{count}{self.struct_code}", raw)

    def pack(self, values) -> bytes:
        """Write scalars as a flat little-endian byte buffer."""
        return struct.pack(f"<{len(values)}{self.struct_code}", *values)

    def format(self, value) -> str:
        """Return the canonical JSON number text for one scalar.

        Floats use the shortest decimal that parses back to the same value
        of this width.
        """
        if not self.is_float:
            return str(int(value))

        if not math.isfinite(value):
            raise ValueError(f"{value!r} has no JSON representation")

        for digits in range(1, self.max_digits + 1):
            text = f"{value:.{digits}g}"
            try:
                if self.coerce(float(text)) == value:
                    break
            except OverflowError:
                # rounded past the largest finite value
                continue
        else:
            text = repr(value)

        if "." not in text and "e" not in text:
            text += ".0"
        return text


class ScalarType(str, Enum):
    """Element kinds an embedding vector can be decoded into."""

    FLOAT32 = "float32"
    FLOAT16 = "float16"
    INT8 = "int8"
    UINT8 = "uint8"

    @property
    def codec(self) -> ScalarCodec:
        return _CODECS[self]

    @property
    def byte_width(self) -> int:
        return self.codec.byte_width

    @classmethod
    def parse(cls, value) -> "ScalarType":
        """Resolve a ``ScalarType`` or one of its names.

        Raises :class:`UnsupportedTypeError` for anything else.
        """
        if isinstance(value, ScalarType):
            return value
        if isinstance(value, str):
            found = _ALIASES.get(value.strip().lower())
            if found is not None:
                return found
        raise UnsupportedTypeError(
            f"Unsupported scalar type {value!r}; expected one of "
            f"{', '.join(t.value for t in cls)}",
            scalar_type=value,
        )


_CODECS = {
    ScalarType.FLOAT32: ScalarCodec(byte_width=4, struct_code="f", is_float=True, max_digits=9),
    ScalarType.FLOAT16: ScalarCodec(byte_width=2, struct_code="e", is_float=True, max_digits=5),
    ScalarType.INT8: ScalarCodec(byte_width=1, struct_code="b", is_float=False, min_value=-128, max_value=127),
    ScalarType.UINT8: ScalarCodec(byte_width=1, struct_code="B", is_float=False, min_value=0, max_value=255),
}

_ALIASES = {
    "float32": ScalarType.FLOAT32,
    "float": ScalarType.FLOAT32,
    "single": ScalarType.FLOAT32,
    "float16": ScalarType.FLOAT16,
    "half": ScalarType.FLOAT16,
    "int8": ScalarType.INT8,
    "sbyte": ScalarType.INT8,
    "uint8": ScalarType.UINT8,
    "byte": ScalarType.UINT8,
}
