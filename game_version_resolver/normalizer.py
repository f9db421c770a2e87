"""Normalization of raw Minecraft version ids into semantic version strings.

The scheme follows the one used by FabricMC's McVersionLookup so that
normalized versions line up with what mod loaders report.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, NamedTuple, Optional, Sequence

from .config import LEGACY_RC_OFFSET, LEGACY_RC_OFFSET_VERSION
from .models import ManifestEntry
from .patterns import (
    ALPHA_REGEX,
    BETA_REGEX,
    EXPERIMENTAL_REGEX,
    INDEV_REGEX,
    PRE_RELEASE_REGEX,
    RELEASE_CANDIDATE_REGEX,
    RELEASE_REGEX,
    SNAPSHOT_REGEX,
)
from .resolver import find_nearest_release, is_legacy_version

# April Fools' releases, Combat Tests and other ids no rule can place.
SPECIAL_VERSIONS: Dict[str, str] = {
    "13w12~": "1.5.1-alpha.13.12.a",
    "2point0_red": "1.5.2-red",
    "2point0_purple": "1.5.2-purple",
    "2point0_blue": "1.5.2-blue",
    "15w14a": "1.8.4-alpha.15.14.a+loveandhugs",
    "1.RV-Pre1": "1.9.2-rv+trendy",
    "3D Shareware v1.34": "1.14-alpha.19.13.shareware",
    "1.14.3 - Combat Test": "1.14.3-rc.4.combat.1",
    "Combat Test 2": "1.14.5-combat.2",
    "Combat Test 3": "1.14.5-combat.3",
    "Combat Test 4": "1.15-rc.3.combat.4",
    "Combat Test 5": "1.15.2-rc.2.combat.5",
    "20w14~": "1.16-alpha.20.13.inf",
    "20w14infinite": "1.16-alpha.20.13.inf",
    "Combat Test 6": "1.16.2-beta.3.combat.6",
    "Combat Test 7": "1.16.3-combat.7",
    "1.16_combat-2": "1.16.3-combat.7.b",
    "1.16_combat-3": "1.16.3-combat.7.c",
    "1.16_combat-4": "1.16.3-combat.8",
    "1.16_combat-5": "1.16.3-combat.8.b",
    "1.16_combat-6": "1.16.3-combat.8.c",
    "22w13oneblockatatime": "1.19-alpha.22.13.oneblockatatime",
    "23w13a_or_b": "1.20-alpha.23.13.ab",
}


class SuffixRule(NamedTuple):
    """Produces the qualifier of an anchored id when `matcher` succeeds."""

    name: str
    matcher: Callable[[str, str], Any]
    handler: Callable[[str, str, Any], str]


def _when_anchored(regex) -> Callable[[str, str], Any]:
    def matcher(version_id: str, anchor: str):
        return regex.search(version_id) if version_id.startswith(anchor) else None
    return matcher


def _release_candidate(version_id: str, anchor: str, match) -> str:
    build = int(match.group(1))
    if anchor == LEGACY_RC_OFFSET_VERSION:
        build += LEGACY_RC_OFFSET
    return f"rc.{build}"


def _pre_release(version_id: str, anchor: str, match) -> str:
    kind = "rc" if is_legacy_version(anchor) else "beta"
    return f"{kind}.{match.group(1)}"


# Evaluated in order, the first matching rule wins.
SUFFIX_RULES: Sequence[SuffixRule] = (
    SuffixRule(
        "experimental",
        lambda version_id, anchor: EXPERIMENTAL_REGEX.search(version_id),
        lambda version_id, anchor, match: f"Experimental.{match.group(1)}",
    ),
    SuffixRule("release_candidate", _when_anchored(RELEASE_CANDIDATE_REGEX), _release_candidate),
    SuffixRule("pre_release", _when_anchored(PRE_RELEASE_REGEX), _pre_release),
    # Already anchored, e.g. "1.16.5-alpha.20.45.a"
    SuffixRule(
        "anchored",
        lambda version_id, anchor: version_id.startswith(anchor),
        lambda version_id, anchor, match: version_id,
    ),
    SuffixRule(
        "snapshot",
        lambda version_id, anchor: SNAPSHOT_REGEX.search(version_id),
        lambda version_id, anchor, match: f"alpha.{match.group(1)}.{match.group(2)}.{match.group(3)}",
    ),
    SuffixRule(
        "old_version",
        lambda version_id, anchor: True,
        lambda version_id, anchor, match: normalize_old_version(version_id),
    ),
)


def _rewrite_rd(version_id: str, match) -> str:
    build = version_id[3:]
    if build == "20090515":
        build = "150000"
    return f"0.0.0-rd.{build}"


# Historical prefixes rewritten before scanning; the first match wins.
PREFIX_REWRITES = (
    (BETA_REGEX.search, lambda version_id, match: f"1.0.0-beta.{match.group(1)}"),
    (ALPHA_REGEX.search, lambda version_id, match: f"1.0.0-alpha.{match.group(1)}"),
    (INDEV_REGEX.search, lambda version_id, match: f"0.31.{match.group(1)}"),
    (lambda version_id: version_id.startswith("c0."), lambda version_id, match: version_id[1:]),
    (lambda version_id: version_id.startswith("rd-"), _rewrite_rd),
)


@dataclass
class _ScanState:
    was_digit: bool = False
    was_leading_zero: bool = False
    was_separator: bool = False
    has_hyphen: bool = False


def _is_digit(c: str) -> bool:
    return "0" <= c <= "9"


def _is_letter(c: str) -> bool:
    return "a" <= c <= "z" or "A" <= c <= "Z"


def normalize_old_version(version_id: str) -> str:
    """Normalize an id that has no release anchor.

    Known historical prefixes (alpha, beta, indev, classic, pre-classic) are
    rewritten first. The result is then scanned character by character:
    digit groups are dot-separated and lose redundant leading zeros, runs of
    separators collapse into a single one, and the first digit-to-letter
    boundary becomes the pre-release hyphen (later ones become dots).
    """
    for matcher, rewrite in PREFIX_REWRITES:
        match = matcher(version_id)
        if match:
            version_id = rewrite(version_id, match)
            break

    state = _ScanState()
    normalized = []
    for i, c in enumerate(version_id):
        if _is_digit(c):
            if i > 0 and not state.was_digit and not state.was_separator:
                normalized.append(".")
            elif state.was_digit and state.was_leading_zero:
                normalized.pop()
            state.was_leading_zero = c == "0" and (not state.was_digit or state.was_leading_zero)
            state.was_separator = False
            state.was_digit = True
        elif c in ".-":
            if state.was_separator:
                continue
            state.was_separator = True
            state.was_digit = False
        elif not _is_letter(c):
            if state.was_separator:
                continue
            c = "."
            state.was_separator = True
            state.was_digit = False
        else:
            if state.was_digit:
                normalized.append("." if state.has_hyphen else "-")
                state.has_hyphen = True
            state.was_separator = False
            state.was_digit = False

        if c == "-":
            state.has_hyphen = True
        normalized.append(c)

    return "".join(normalized).strip(".")


def normalize_version(
    version_id: str,
    entries: Optional[Sequence[ManifestEntry]] = None,
    index: int = 0,
) -> str:
    """Normalize a raw Minecraft version id into a semantic version string.

    Args:
        version_id: Raw id, e.g. "20w45a" or "1.16.5-rc1".
        entries: Optional manifest entries, newest first, used to find the
            release the id belongs to.
        index: Position of `version_id` within `entries`.

    Returns:
        The normalized version. Never raises for any input string.
    """
    special = SPECIAL_VERSIONS.get(version_id)
    if special:
        return special

    if entries:
        anchor = find_nearest_release(entries, index)
    else:
        match = RELEASE_REGEX.search(version_id)
        anchor = match.group(0) if match else None

    if not anchor or version_id == anchor or version_id[1:].startswith(anchor):
        return normalize_old_version(version_id)

    suffix = version_id
    for rule in SUFFIX_RULES:
        match = rule.matcher(version_id, anchor)
        if match:
            suffix = rule.handler(version_id, anchor, match)
            break

    if suffix.startswith(f"{anchor}-"):
        return suffix
    return f"{anchor}-{suffix}"
