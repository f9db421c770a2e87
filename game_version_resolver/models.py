"""Data models for Minecraft versions and the Mojang version manifest."""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Optional, List, Dict, Any, Union
import re

from .version import Version, VersionType

_NON_WORD = re.compile(r"[\W_]+")
_BETA_SNAPSHOT = re.compile(r"-pre|-rc|-beta|Pre-[Rr]elease|[Rr]elease Candidate")

# Entries without a release date sort last.
_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


class MinecraftVersionType(Enum):
    """Version type as reported by the Mojang manifest."""

    RELEASE = "release"
    SNAPSHOT = "snapshot"
    OLD_BETA = "old_beta"
    OLD_ALPHA = "old_alpha"

    @classmethod
    def parse(cls, value: str) -> Optional["MinecraftVersionType"]:
        """Parse a manifest type, ignoring case and non-word characters."""
        key = _NON_WORD.sub("", value or "").lower()
        for member in cls:
            if _NON_WORD.sub("", member.value) == key or member.name.replace("_", "").lower() == key:
                return member
        return None

    def to_version_type(self, version: Union[str, Version, None] = None) -> VersionType:
        if self is MinecraftVersionType.SNAPSHOT:
            if version is not None and _BETA_SNAPSHOT.search(str(version)):
                return VersionType.BETA
            return VersionType.ALPHA
        if self is MinecraftVersionType.OLD_BETA:
            return VersionType.BETA
        if self is MinecraftVersionType.OLD_ALPHA:
            return VersionType.ALPHA
        return VersionType.RELEASE


def _parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    # Naive timestamps are UTC so they sort alongside aware ones
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass
class ManifestEntry:
    """A single entry of `version_manifest_v2.json`."""

    id: str
    type: MinecraftVersionType
    url: str = ""
    time: str = ""
    release_time: str = ""
    sha1: str = ""
    compliance_level: int = 0
    release_date: Optional[datetime] = None

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "ManifestEntry":
        """Build an entry from its JSON representation.

        Raises:
            ValueError: If the id is missing or the type is unknown.
        """
        version_id = raw.get("id")
        if not isinstance(version_id, str) or not version_id:
            raise ValueError(f"Manifest entry without an id: {raw!r}")

        mc_type = MinecraftVersionType.parse(str(raw.get("type", "")))
        if mc_type is None:
            raise ValueError(f"Unknown version type for {version_id}: {raw.get('type')!r}")

        release_time = raw.get("releaseTime") or ""
        return cls(
            id=version_id,
            type=mc_type,
            url=raw.get("url") or "",
            time=raw.get("time") or "",
            release_time=release_time,
            sha1=raw.get("sha1") or "",
            compliance_level=int(raw.get("complianceLevel") or 0),
            release_date=_parse_timestamp(release_time),
        )


def get_manifest_entries(manifest: Dict[str, Any]) -> List[ManifestEntry]:
    """Extract manifest entries, newest first.

    Raises:
        ValueError: If the payload has no `versions` list.
    """
    versions = manifest.get("versions") if isinstance(manifest, dict) else None
    if not isinstance(versions, list):
        raise ValueError("Invalid version manifest: 'versions' must be a list")

    entries = [ManifestEntry.from_dict(x) for x in versions]
    entries.sort(key=lambda x: x.release_date or _EPOCH, reverse=True)
    return entries


@dataclass(frozen=True)
class MinecraftVersion:
    """A game version resolved to its canonical `Version`."""

    id: str
    version: Version
    mc_type: MinecraftVersionType
    url: str = ""
    release_date: Optional[datetime] = None

    @property
    def type(self) -> VersionType:
        return self.mc_type.to_version_type(str(self.version))

    @property
    def is_alpha(self) -> bool:
        return self.type is VersionType.ALPHA

    @property
    def is_beta(self) -> bool:
        return self.type is VersionType.BETA

    @property
    def is_snapshot(self) -> bool:
        return not self.is_release

    @property
    def is_release(self) -> bool:
        return self.type is VersionType.RELEASE

    @property
    def is_old_alpha(self) -> bool:
        return self.mc_type is MinecraftVersionType.OLD_ALPHA

    @property
    def is_old_beta(self) -> bool:
        return self.mc_type is MinecraftVersionType.OLD_BETA

    def __str__(self) -> str:
        return self.id
