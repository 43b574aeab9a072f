"""Authentication dependencies for FastAPI"""

import secrets

from fastapi import Header, HTTPException, status

from fest_analytics.config import config
from fest_analytics.logging_config import get_logger

logger = get_logger(__name__)


async def require_admin_key(
    x_admin_key: str = Header(..., description="Admin API key for authentication"),
) -> None:
    """
    FastAPI dependency guarding the admin analytics and export routes.

    Raises:
        HTTPException: 401 if the key is missing from config or does not match
    """
    expected_key = config.get("admin_api_key")

    # compare_digest rejects non-ASCII str values
    if not expected_key or not secrets.compare_digest(
        x_admin_key.encode("utf-8"), expected_key.encode("utf-8")
    ):
        logger.warning("Rejected admin request with invalid API key")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid admin API key"
        )
