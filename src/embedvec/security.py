import os
import secrets
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import APIKeyHeader

API_KEY_HEADER_NAME = "X-API-Key"

api_key_header = APIKeyHeader(name=API_KEY_HEADER_NAME, auto_error=False)


def get_api_keys() -> list[str]:
    """Accepted keys from ``API_KEY`` (comma-separated to allow rotation)."""
    raw = os.environ.get("API_KEY", "")
    return [key.strip() for key in raw.split(",") if key.strip()]


async def verify_api_key(
    api_key: Annotated[str | None, Depends(api_key_header)],
) -> str:
    expected = get_api_keys()
    if not api_key or not any(secrets.compare_digest(api_key.encode(), key.encode()) for key in expected):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or missing API key",
        )
    return api_key


RequireApiKey = Annotated[str, Depends(verify_api_key)]
