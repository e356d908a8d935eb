from fastapi import APIRouter
from pydantic import BaseModel

from ..lib.vectors import ScalarType

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    status: str
    scalar_types: list[str]


@router.get("/health", response_model=HealthResponse, status_code=200)
async def healthcheck() -> HealthResponse:
    """Liveness probe; also lists the scalar types the codec decodes into."""
    return HealthResponse(status="ok", scalar_types=[t.value for t in ScalarType])
