from typing import Literal

from pydantic import BaseModel, Field


class VectorDecodeRequest(BaseModel):
    """An encoded vector together with its declared wire format."""

    source_format: Literal["json", "base64"] = Field(
        ..., description="Wire format of `payload`: a JSON numeric array or Base64 text"
    )
    payload: str = Field(
        ..., description="The encoded vector, e.g. `[0.1,0.2]` or `zczMPc3MTD4=`"
    )
    scalar_type: str = Field("float32", description="float32, float16, int8 or uint8")


class VectorDecodeResponse(BaseModel):
    """A decoded vector."""

    scalar_type: str = Field(..., description="Scalar type the vector was decoded into")
    dimensions: int = Field(..., description="Number of elements")
    scalars: list[int | float] = Field(default_factory=list)


class VectorEncodeRequest(BaseModel):
    """Scalars to serialize with the write-back contract."""

    scalars: list[int | float] = Field(..., description="Vector elements")
    scalar_type: str = Field("float32", description="float32, float16, int8 or uint8")
    encoding: Literal["array", "base64"] = Field(
        "array",
        description=(
            "`array` writes a JSON numeric array; `base64` writes a JSON string "
            "holding the little-endian bytes in Base64"
        ),
    )
    format: str = Field("J", description="Write-back format tag; only `J` is defined")
