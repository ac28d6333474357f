from typing import AsyncIterator, Optional

import httpx
from fastapi import Depends

from app.config import Settings, get_settings
from app.services.upstream_client import UpstreamClient
from app.utils.errors import ServerConfigurationError
from app.utils.logger import logger


def require_api_key(settings: Settings = Depends(get_settings)) -> Settings:
    """Short-circuits with a 500 before any upstream call when API_KEY is unset."""
    if not settings.api_key:
        logger.error("❌ API_KEY environment variable is not configured")
        raise ServerConfigurationError()
    return settings


def get_upstream_transport() -> Optional[httpx.AsyncBaseTransport]:
    """Overridden in tests to swap in an httpx.MockTransport."""
    return None


async def get_upstream_client(
    settings: Settings = Depends(require_api_key),
    transport: Optional[httpx.AsyncBaseTransport] = Depends(get_upstream_transport),
) -> AsyncIterator[UpstreamClient]:
    try:
        client = UpstreamClient.from_settings(settings, transport=transport)
    except httpx.InvalidURL as e:
        logger.error(f"❌ Invalid upstream base URL {settings.upstream_base_url!r}: {e}")
        raise ServerConfigurationError("Upstream API URL is not properly configured")
    async with client:
        yield client
