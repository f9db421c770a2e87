"""Flag-based filtering of game version collections."""

from enum import IntFlag
from typing import Callable, Iterable, List, Optional, Tuple, TypeVar, Union
import re
import warnings

from .version import Version, VersionType

T = TypeVar("T")

_NON_WORD = re.compile(r"[\W_]+")
_FLAG_SEPARATORS = re.compile(r"[,|]")


class GameVersionFilter(IntFlag):
    """Filters for selecting a subset of game versions.

    Type bits select which kinds of versions survive; selecting all of them
    or none of them disables type filtering. The MIN_*/MAX_* bits keep only
    the versions sharing the lowest/highest component value.
    """

    NONE = 0
    RELEASES = 1
    BETAS = 2
    ALPHAS = 4
    SNAPSHOTS = 6  # BETAS | ALPHAS
    ANY = 7  # RELEASES | SNAPSHOTS
    MIN_PATCH = 8
    MAX_PATCH = 16
    MIN_MINOR = 32
    MAX_MINOR = 64
    MIN_MAJOR = 128
    MAX_MAJOR = 256
    MIN = 168  # MIN_MAJOR | MIN_MINOR | MIN_PATCH
    MAX = 336  # MAX_MAJOR | MAX_MINOR | MAX_PATCH

    def has_flag(self, flag: int) -> bool:
        return (int(self) & int(flag)) == int(flag)

    @classmethod
    def parse(cls, text: Union[str, int, None]) -> Optional["GameVersionFilter"]:
        """Parse a filter such as "min-major, releases" or "RELEASES | MIN".

        Case and non-word characters are ignored. Returns None if any token
        is not a known flag name.
        """
        if text is None:
            return None
        if isinstance(text, int):
            return cls(text)

        names = {_NON_WORD.sub("", name).lower(): member for name, member in cls.__members__.items()}
        value = cls.NONE
        tokens = [_NON_WORD.sub("", x).lower() for x in _FLAG_SEPARATORS.split(text)]
        tokens = [x for x in tokens if x]
        if not tokens:
            return None

        for token in tokens:
            if token not in names:
                return None
            value |= names[token]
        return cls(value)

    @classmethod
    def format(cls, value: int) -> str:
        """Format a filter as a comma-separated list of flag names."""
        value = int(value)
        for name, member in cls.__members__.items():
            if int(member) == value:
                return name

        names = []
        for name, member in cls.__members__.items():
            bit = int(member)
            # Only single-bit flags, so unions are not reported twice
            if bit and bit & (bit - 1) == 0 and value & bit:
                names.append(name)
        return ", ".join(names)

    @classmethod
    def from_version_resolver(cls, name: str) -> "GameVersionFilter":
        """Convert a legacy version resolver name ("exact", "latest", "all").

        Deprecated: use explicit filter flags instead.
        """
        warnings.warn(
            "Version resolvers are deprecated, use GameVersionFilter flags instead",
            DeprecationWarning,
            stacklevel=2,
        )
        key = (name or "").strip().lower()
        if key == "exact":
            return cls.MIN | cls.RELEASES
        if key == "latest":
            return cls.MIN_MAJOR | cls.MIN_MINOR | cls.MAX_PATCH | cls.RELEASES
        if key == "all":
            return cls.MIN_MAJOR | cls.MIN_MINOR
        return cls.MIN_MAJOR | cls.MIN_MINOR | cls.RELEASES


def _has_flag(flags: int, flag: int) -> bool:
    return (int(flags) & int(flag)) == int(flag)


def _version_of(item) -> Version:
    return item if isinstance(item, Version) else item.version


def _kinds_of(item) -> Tuple[bool, bool, bool]:
    """Return (is_release, is_beta, is_alpha) for a game version or a bare version."""
    if isinstance(item, Version):
        version_type = VersionType.from_name(str(item))
        return (
            version_type is VersionType.RELEASE,
            version_type is VersionType.BETA,
            version_type is VersionType.ALPHA,
        )
    return bool(item.is_release), bool(item.is_beta), bool(item.is_alpha)


def _filter_by_type(versions: List[T], flags: int) -> List[T]:
    allow_releases = _has_flag(flags, GameVersionFilter.RELEASES)
    allow_betas = _has_flag(flags, GameVersionFilter.BETAS)
    allow_alphas = _has_flag(flags, GameVersionFilter.ALPHAS)
    if (allow_releases and allow_betas and allow_alphas) or not (allow_releases or allow_betas or allow_alphas):
        return versions

    filtered = []
    for item in versions:
        is_release, is_beta, is_alpha = _kinds_of(item)
        if (is_release and not allow_releases) or (is_beta and not allow_betas) or (is_alpha and not allow_alphas):
            continue
        filtered.append(item)
    return filtered


def _filter_by_extremum(
    versions: List[T],
    selector: Callable[[Version], int],
    flags: int,
    min_flag: GameVersionFilter,
    max_flag: GameVersionFilter,
) -> List[T]:
    if _has_flag(flags, min_flag):
        pick = min
    elif _has_flag(flags, max_flag):
        pick = max
    else:
        return versions

    if not versions:
        return versions

    target = pick(selector(_version_of(x)) for x in versions)
    return [x for x in versions if selector(_version_of(x)) == target]


# Finest component first; each stage narrows the survivors of the previous one.
COMPONENT_STAGES = (
    (lambda v: v.patch, GameVersionFilter.MIN_PATCH, GameVersionFilter.MAX_PATCH),
    (lambda v: v.minor, GameVersionFilter.MIN_MINOR, GameVersionFilter.MAX_MINOR),
    (lambda v: v.major, GameVersionFilter.MIN_MAJOR, GameVersionFilter.MAX_MAJOR),
)


def filter_versions(versions: Iterable[T], flags: int) -> List[T]:
    """Filter game versions by type and extremal components.

    Args:
        versions: Game versions (with `version`, `is_release`, `is_beta`,
            `is_alpha`) or bare `Version` values.
        flags: A `GameVersionFilter` value.

    Returns:
        A new list with the surviving versions in their original order.
    """
    filtered = list(versions)
    if not flags:
        return filtered

    filtered = _filter_by_type(filtered, flags)
    for selector, min_flag, max_flag in COMPONENT_STAGES:
        filtered = _filter_by_extremum(filtered, selector, flags, min_flag, max_flag)
    return filtered
