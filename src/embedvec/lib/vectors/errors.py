"""Error types raised by the embedding vector codec.

Every error carries the low-level diagnostic in its message and chains the
original exception as ``__cause__``.
"""


class EmbeddingVectorError(Exception):
    """Base error for embedding vector decoding and encoding."""


class FormatError(EmbeddingVectorError, ValueError):
    """The payload does not conform to its declared wire format.

    Raised when:
    - JSON text is malformed or is not an array of numbers
    - Base64 text has characters outside the alphabet or bad padding
    - The decoded binary length is not a multiple of the element width
    - A value does not fit the requested scalar type
    """

    def __init__(self, message: str, wire_format: str | None = None, scalar_type=None):
        super().__init__(message)
        self.wire_format = wire_format
        self.scalar_type = scalar_type


class UnsupportedTypeError(EmbeddingVectorError, TypeError):
    """The requested scalar type is not float32, float16, int8 or uint8."""

    def __init__(self, message: str, scalar_type=None):
        super().__init__(message)
        self.scalar_type = scalar_type


class UnsupportedFormatError(EmbeddingVectorError, ValueError):
    """The requested write-back format tag is not recognized."""

    def __init__(self, message: str, format: str | None = None):
        super().__init__(message)
        self.format = format


class UnsupportedOperationError(EmbeddingVectorError, NotImplementedError):
    """The operation has no implementation for this kind of vector."""
