"""Async fetcher for the Mojang version manifest."""

from typing import List
import logging

from .async_base import AsyncBaseFetcher
from ..models import ManifestEntry, get_manifest_entries

logger = logging.getLogger(__name__)


class AsyncMojangFetcher(AsyncBaseFetcher):
    """Async variant of `MojangFetcher`."""

    async def fetch_manifest_entries(self) -> List[ManifestEntry]:
        url = self.config.manifest_url
        manifest = await self.fetch_json(url)
        if manifest is None:
            raise ValueError(f"Version manifest not found: {url}")

        entries = get_manifest_entries(manifest)
        logger.info(f"Fetched {len(entries)} {self.config.display_name} versions")
        return entries
