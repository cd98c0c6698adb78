import logging
import secrets

from fastapi import HTTPException, Security
from fastapi.security import APIKeyHeader

from notifyhub.config import settings

logger = logging.getLogger(__name__)

api_key_header = APIKeyHeader(name="X-API-Key", auto_error=False)


async def require_api_key(api_key: str = Security(api_key_header)) -> None:
    """Check ``X-API-Key`` against the admin key. Fails closed when none is configured."""
    if not settings.admin_api_key:
        logger.error("ADMIN_API_KEY is not set; refusing API request")
        raise HTTPException(status_code=503, detail="API key not configured")

    if not api_key:
        raise HTTPException(status_code=401, detail="Missing API key")

    # Constant-time comparison
    if not secrets.compare_digest(api_key, settings.admin_api_key):
        logger.warning("Failed auth attempt with invalid API key")
        raise HTTPException(status_code=401, detail="Invalid API key")
