"""Rewrite raw Minecraft ids inside range expressions."""

import logging
from typing import Iterable, Mapping, Optional, Pattern, Union

from .normalizer import normalize_version
from .patterns import build_version_regex
from .version import Version
from .version_range import VersionRange

logger = logging.getLogger(__name__)


def rewrite_version_range(
    range_texts: Union[str, Iterable[str], VersionRange],
    known_versions: Mapping[str, Version],
    pattern: Optional[Pattern[str]] = None,
) -> VersionRange:
    """Replace every version id in `range_texts` with its canonical form and parse.

    Ids found in `known_versions` use their resolved version, anything else
    is normalized without manifest context. A range that cannot be parsed
    yields a range matching nothing, whose text keeps the rewritten input.

    Args:
        range_texts: One range, several ranges (OR-ed) or an already parsed range.
        known_versions: Map of raw id to resolved version.
        pattern: Version regex to use; built from `known_versions` if omitted.
    """
    if isinstance(range_texts, VersionRange):
        return range_texts

    texts = [range_texts] if isinstance(range_texts, str) else list(range_texts)
    regex = pattern or build_version_regex(known_versions.keys())

    def replace(match) -> str:
        # Partial versions such as the "1.20" of "1.20.x" stay as written
        if match.string.startswith(".", match.end()):
            return match.group(0)

        version = known_versions.get(match.group(0))
        if version is not None:
            return str(version)
        return normalize_version(match.group(0))

    rewritten = [regex.sub(replace, x) for x in texts]
    parsed = VersionRange.parse(rewritten)
    if parsed is None:
        joined = " || ".join(rewritten)
        logger.debug(f"Invalid version range: {joined!r}")
        return VersionRange.none(joined)
    return parsed
