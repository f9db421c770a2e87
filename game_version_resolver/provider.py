"""Resolves game versions from the version manifest and answers range queries."""

from typing import Dict, Iterable, List, Optional, Pattern, Sequence, Union
import logging

from .config import DEFAULT_GAME, get_game_config
from .fetchers.async_mojang import AsyncMojangFetcher
from .fetchers.mojang import MojangFetcher
from .models import ManifestEntry, MinecraftVersion
from .normalizer import normalize_version
from .patterns import build_version_regex
from .range_rewriter import rewrite_version_range
from .version import Version
from .version_filter import GameVersionFilter, filter_versions
from .version_range import VersionRange

logger = logging.getLogger(__name__)

RangeInput = Union[str, Iterable[str], VersionRange]


def build_version_map(entries: Sequence[ManifestEntry]) -> Dict[str, MinecraftVersion]:
    """Normalize every manifest entry in its manifest context.

    Returns an insertion-ordered map of raw id to resolved version.
    """
    versions: Dict[str, MinecraftVersion] = {}
    for i, entry in enumerate(entries):
        normalized = normalize_version(entry.id, entries, i)
        version = Version.parse(normalized)
        if version is None:
            logger.warning(f"Skipping {entry.id}: cannot parse normalized version {normalized!r}")
            continue

        versions[entry.id] = MinecraftVersion(
            id=entry.id,
            version=version,
            mc_type=entry.type,
            url=entry.url,
            release_date=entry.release_date,
        )
    return versions


def _select(
    versions: Dict[str, MinecraftVersion],
    regex: Pattern[str],
    version_range: RangeInput,
    version_filter: int,
) -> List[MinecraftVersion]:
    known = {key: value.version for key, value in versions.items()}
    resolved = rewrite_version_range(version_range, known, regex)
    logger.debug(f"Resolved range {str(resolved)!r} as {resolved.format()!r}")

    matching = [x for x in versions.values() if resolved.includes(x.version)]
    return filter_versions(matching, version_filter)


class MinecraftVersionProvider:
    """Resolves Minecraft versions, fetching the manifest once per instance."""

    def __init__(self, game: str = DEFAULT_GAME, fetcher: Optional[MojangFetcher] = None):
        self.config = get_game_config(game)
        self._fetcher = fetcher
        self._versions: Optional[Dict[str, MinecraftVersion]] = None
        self._version_regex: Optional[Pattern[str]] = None

    @property
    def fetcher(self) -> MojangFetcher:
        if self._fetcher is None:
            self._fetcher = MojangFetcher(self.config)
        return self._fetcher

    def get_all_versions(self) -> Dict[str, MinecraftVersion]:
        """Get all versions keyed by their raw id, newest first."""
        if self._versions is None:
            entries = self.fetcher.fetch_manifest_entries()
            self._versions = build_version_map(entries)
            logger.info(f"Resolved {len(self._versions)} versions")
        return self._versions

    def _get_version_regex(self) -> Pattern[str]:
        if self._version_regex is None:
            self._version_regex = build_version_regex(self.get_all_versions().keys())
        return self._version_regex

    def get_version(self, version_id: str) -> Optional[MinecraftVersion]:
        """Look up a version by id, falling back to the first version `version_id` matches as a range."""
        version = self.get_all_versions().get(version_id)
        if version is not None:
            return version

        matches = self.get_versions(version_id)
        return matches[0] if matches else None

    def get_versions(
        self,
        version_range: RangeInput,
        version_filter: int = GameVersionFilter.NONE,
    ) -> List[MinecraftVersion]:
        """Get all versions within a range, newest first."""
        return _select(self.get_all_versions(), self._get_version_regex(), version_range, version_filter)

    def clear_cache(self):
        self._versions = None
        self._version_regex = None

    def close(self):
        """Clean up HTTP client."""
        if self._fetcher is not None:
            self._fetcher.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


class AsyncMinecraftVersionProvider:
    """Async variant of `MinecraftVersionProvider`."""

    def __init__(self, game: str = DEFAULT_GAME, fetcher: Optional[AsyncMojangFetcher] = None):
        self.config = get_game_config(game)
        self._fetcher = fetcher
        self._versions: Optional[Dict[str, MinecraftVersion]] = None
        self._version_regex: Optional[Pattern[str]] = None

    @property
    def fetcher(self) -> AsyncMojangFetcher:
        if self._fetcher is None:
            self._fetcher = AsyncMojangFetcher(self.config)
        return self._fetcher

    async def get_all_versions(self) -> Dict[str, MinecraftVersion]:
        """Get all versions keyed by their raw id, newest first."""
        if self._versions is None:
            entries = await self.fetcher.fetch_manifest_entries()
            self._versions = build_version_map(entries)
            logger.info(f"Resolved {len(self._versions)} versions")
        return self._versions

    async def _get_version_regex(self) -> Pattern[str]:
        if self._version_regex is None:
            versions = await self.get_all_versions()
            self._version_regex = build_version_regex(versions.keys())
        return self._version_regex

    async def get_version(self, version_id: str) -> Optional[MinecraftVersion]:
        versions = await self.get_all_versions()
        version = versions.get(version_id)
        if version is not None:
            return version

        matches = await self.get_versions(version_id)
        return matches[0] if matches else None

    async def get_versions(
        self,
        version_range: RangeInput,
        version_filter: int = GameVersionFilter.NONE,
    ) -> List[MinecraftVersion]:
        versions = await self.get_all_versions()
        regex = await self._get_version_regex()
        return _select(versions, regex, version_range, version_filter)

    def clear_cache(self):
        self._versions = None
        self._version_regex = None

    async def close(self):
        """Clean up HTTP client."""
        if self._fetcher is not None:
            await self._fetcher.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
