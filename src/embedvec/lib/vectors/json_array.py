"""Vector encoded as UTF-8 JSON text of a numeric array, e.g. ``[0.5,-1.25]``."""

import json
import math
import logging
from dataclasses import dataclass

from .base import JSON_FORMAT, EmbeddingVector, TypedVector, check_write_format
from .errors import FormatError
from .scalars import ScalarType

logger = logging.getLogger(__name__)


def _reject_constant(name: str):
    raise ValueError(f"{name} is not a valid JSON number")


@dataclass(frozen=True)
class JsonArrayVector(EmbeddingVector):
    """Holds the raw JSON payload; decoding is repeatable and non-destructive."""

    payload: bytes

    def to(self, scalar_type) -> TypedVector:
        scalar_type = ScalarType.parse(scalar_type)
        codec = scalar_type.codec

        try:
            values = json.loads(self.payload.decode("utf-8"), parse_constant=_reject_constant)
        except (UnicodeDecodeError, ValueError) as exc:
            raise FormatError(
                f"Invalid JSON array for {scalar_type.value} vector: {exc}",
                wire_format="json",
                scalar_type=scalar_type,
            ) from exc

        if not isinstance(values, list):
            raise FormatError(
                f"Expected a JSON array for {scalar_type.value} vector, "
                f"got {type(values).__name__}",
                wire_format="json",
                scalar_type=scalar_type,
            )

        scalars = []
        for i, value in enumerate(values):
            try:
                if isinstance(value, float) and not math.isfinite(value):
                    # json parses literals beyond double range as inf
                    raise OverflowError(f"{value!r} is out of range")
                scalars.append(codec.coerce(value))
            except (TypeError, OverflowError) as exc:
                raise FormatError(
                    f"Element {i} of JSON array is not a valid {scalar_type.value}: {exc}",
                    wire_format="json",
                    scalar_type=scalar_type,
                ) from exc

        logger.debug("Decoded %d %s scalars from JSON array", len(scalars), scalar_type.value)
        return TypedVector(scalar_type, scalars)

    def write(self, format: str = JSON_FORMAT) -> bytes:
        """Return the original JSON payload unchanged."""
        check_write_format(format)
        return self.payload
