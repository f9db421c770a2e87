"""Anchor non-release manifest entries to the release they belong to."""

import re
from typing import Optional, Sequence, Tuple

from .config import LEGACY_VERSION_MAX
from .models import ManifestEntry, MinecraftVersionType
from .patterns import RELEASE_REGEX, SNAPSHOT_REGEX
from .version_range import VersionRange

_RELEASE_COMPONENTS = re.compile(r"(\d+)\.(\d+)(?:\.(\d+))?")

LEGACY_VERSION_RANGE = VersionRange.parse(f"<={LEGACY_VERSION_MAX}")

# (release, year, first week, last week); None means open-ended.
# Manifest order does not reflect the real grouping of these snapshots.
SNAPSHOT_RELEASES: Tuple[Tuple[str, int, Optional[int], Optional[int]], ...] = (
    ("1.20", 23, 12, None),
    ("1.17", 20, 45, None),
    ("1.17", 21, None, 20),
    ("1.9", 15, 31, None),
    ("1.9", 16, None, 7),
    ("1.8", 14, 2, 34),
    ("1.7.4", 13, 47, 49),
    ("1.7.2", 13, 36, 43),
    ("1.6", 13, 16, 26),
)


def find_release_by_snapshot_date(year: int, week: int) -> Optional[str]:
    """Return the release a `YYwWW` snapshot is known to belong to, if any."""
    for release, snapshot_year, first_week, last_week in SNAPSHOT_RELEASES:
        if year != snapshot_year:
            continue
        if first_week is not None and week < first_week:
            continue
        if last_week is not None and week > last_week:
            continue
        return release
    return None


def find_nearest_release(entries: Sequence[ManifestEntry], index: int) -> Optional[str]:
    """Find the release id a manifest entry should be normalized against.

    `entries` must be sorted newest first. Releases anchor to themselves,
    old alphas and betas to nothing. A snapshot anchors to the release its
    id mentions, then to the snapshot date table, then to the nearest newer
    release, and finally to the patch after the nearest older release.
    """
    if not 0 <= index < len(entries):
        return None

    entry = entries[index]
    if entry.type is MinecraftVersionType.RELEASE:
        return entry.id
    if entry.type is not MinecraftVersionType.SNAPSHOT:
        return None

    match = RELEASE_REGEX.search(entry.id)
    if match:
        return match.group(0)

    snapshot = SNAPSHOT_REGEX.search(entry.id)
    if snapshot:
        release = find_release_by_snapshot_date(int(snapshot.group(1)), int(snapshot.group(2)))
        if release:
            return release

    for i in range(index - 1, -1, -1):
        if entries[i].type is MinecraftVersionType.RELEASE:
            return entries[i].id

    for i in range(index + 1, len(entries)):
        if entries[i].type is not MinecraftVersionType.RELEASE:
            continue

        match = _RELEASE_COMPONENTS.search(entries[i].id)
        if match:
            # Assume the snapshot leads to the next patch of the older release
            patch = int(match.group(3) or 0) + 1
            return f"{match.group(1)}.{match.group(2)}.{patch}"

    return None


def is_legacy_version(anchor: str) -> bool:
    """Check whether an anchor release predates the `beta.N` pre-release scheme."""
    return LEGACY_VERSION_RANGE.includes(anchor)
