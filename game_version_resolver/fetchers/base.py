"""Base fetcher with HTTP client and retry logic."""

from abc import ABC, abstractmethod
from typing import Any, List, Optional
import logging

import httpx
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

from ..config import GameConfig
from ..models import ManifestEntry

logger = logging.getLogger(__name__)


class BaseFetcher(ABC):
    """Abstract base class for version manifest fetchers."""

    def __init__(self, game_config: GameConfig, transport: Optional[httpx.BaseTransport] = None):
        self.config = game_config
        self.client = httpx.Client(
            timeout=game_config.timeout,
            headers={"User-Agent": game_config.user_agent},
            follow_redirects=True,
            transport=transport,
        )

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        retry=retry_if_exception_type((httpx.ConnectError, httpx.ReadTimeout)),
    )
    def fetch_json(self, url: str) -> Optional[Any]:
        """Fetch and decode a JSON document with retry logic."""
        try:
            logger.debug(f"Fetching: {url}")
            response = self.client.get(url)
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

    @abstractmethod
    def fetch_manifest_entries(self) -> List[ManifestEntry]:
        """Fetch all manifest entries, newest first."""
        pass

    def close(self):
        """Clean up HTTP client."""
        self.client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
