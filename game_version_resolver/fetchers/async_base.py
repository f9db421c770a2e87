"""Async base fetcher with HTTP client and retry logic."""

from abc import ABC, abstractmethod
from typing import Any, List, Optional
import logging

import httpx
from tenacity import (
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
    AsyncRetrying,
)

from ..config import GameConfig
from ..models import ManifestEntry

logger = logging.getLogger(__name__)


class AsyncBaseFetcher(ABC):
    """Abstract base class for async version manifest fetchers."""

    def __init__(self, game_config: GameConfig, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.config = game_config
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def get_client(self) -> httpx.AsyncClient:
        """Get or create async HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self.config.timeout,
                headers={"User-Agent": self.config.user_agent},
                follow_redirects=True,
                transport=self._transport,
            )
        return self._client

    async def fetch_json(self, url: str) -> Optional[Any]:
        """Fetch and decode a JSON document with retry logic."""
        client = await self.get_client()

        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(3),
            wait=wait_exponential(multiplier=1, min=2, max=10),
            retry=retry_if_exception_type((httpx.ConnectError, httpx.ReadTimeout)),
            reraise=True,
        ):
            with attempt:
                try:
                    logger.debug(f"Fetching: {url}")
                    response = await client.get(url)
                    response.raise_for_status()
                    return response.json()
                except httpx.HTTPStatusError as e:
                    if e.response.status_code == 404:
                        logger.debug(f"Document not found: {url}")
                        return None
                    logger.warning(f"HTTP error fetching {url}: {e}")
                    raise
                except Exception as e:
                    logger.warning(f"Error fetching {url}: {e}")
                    raise

        return None

    @abstractmethod
    async def fetch_manifest_entries(self) -> List[ManifestEntry]:
        """Fetch all manifest entries, newest first."""
        pass

    async def close(self):
        """Clean up HTTP client."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
