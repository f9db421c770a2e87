"""Fetcher for the Mojang version manifest."""

from typing import List
import logging

from .base import BaseFetcher
from ..models import ManifestEntry, get_manifest_entries

logger = logging.getLogger(__name__)


class MojangFetcher(BaseFetcher):
    """Fetches `version_manifest_v2.json` from piston-meta."""

    def fetch_manifest_entries(self) -> List[ManifestEntry]:
        url = self.config.manifest_url
        manifest = self.fetch_json(url)
        if manifest is None:
            raise ValueError(f"Version manifest not found: {url}")

        entries = get_manifest_entries(manifest)
        logger.info(f"Fetched {len(entries)} {self.config.display_name} versions")
        return entries
