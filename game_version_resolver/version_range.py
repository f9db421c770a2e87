"""Version ranges in comparator and interval notation.

Accepted syntax, freely mixed:

* comparators: ``>=1.16``, ``<1.17``, ``>1.16.4``, ``<=1.16.5``, ``=1.16.5``
  or a bare version, joined by spaces (AND) and ``||`` (OR);
* x-ranges: ``1.20.x``, ``1.x``, ``*``;
* tilde and caret ranges: ``~1.20.1``, ``^1.16``;
* hyphen ranges: ``1.16 - 1.17`` (both ends inclusive);
* intervals: ``[1.16,1.17)``, ``(,1.12]``, ``[1.16.5]`` (exactly 1.16.5),
  ``(,)`` (anything).

A missing patch number defaults to ``.0``. Pre-release versions are always
eligible, so ``[1.16,1.17)`` contains ``1.16.5-alpha.20.45.a``.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple, Union
import re

from .version import Version, as_version

INTERVAL_LIKE_REGEX = re.compile(r"[\[(][^\])]+[\])]")

INTERVAL_REGEX = re.compile(
    r"(?P<from_bracket>[\[(])\s*(?P<from>[^,\s]+)?\s*(?P<separator>,)?\s*"
    r"(?P<to>[^,\s\])]+)?\s*(?P<to_bracket>[\])])"
)

SEMVER_OPTIONAL_PATCH_REGEX = re.compile(r"((?:\d+|[Xx*])(?:\.\d+|\.[Xx*]))(\.\d+|\.[Xx*])?([\w\-.+]*)")

_OPERATOR_SPACING = re.compile(r"(<=|>=|~>|<|>|=|~|\^)\s+")
_COMPARATOR_REGEX = re.compile(r"(?P<operator><=|>=|~>|<|>|=|~|\^)?v?(?P<version>.*)", re.DOTALL)
_PARTIAL_REGEX = re.compile(
    r"v?(?P<major>\d+|[xX*])(?:\.(?P<minor>\d+|[xX*])(?:\.(?P<patch>\d+|[xX*])"
    r"(?:-(?P<prerelease>[0-9A-Za-z\-.]+))?(?:\+[0-9A-Za-z\-.]+)?)?)?"
)
_HYPHEN_REGEX = re.compile(r"(?P<lower>\S+)\s+-\s+(?P<upper>\S+)")

# The lowest version semver can express.
_LOWEST = Version(0, 0, 0, "0")


@dataclass(frozen=True)
class Bound:
    """One end of a simple range."""

    value: Version
    inclusive: bool


@dataclass(frozen=True)
class SimpleRange:
    """A contiguous range; a missing bound means unbounded on that side."""

    lower: Optional[Bound] = None
    upper: Optional[Bound] = None

    @property
    def is_exact(self) -> bool:
        return (
            self.lower is not None
            and self.upper is not None
            and self.lower.inclusive
            and self.upper.inclusive
            and self.lower.value.compare(self.upper.value) == 0
        )

    def includes(self, version: Version) -> bool:
        if self.lower:
            c = version.compare(self.lower.value)
            if c < 0 or (c == 0 and not self.lower.inclusive):
                return False
        if self.upper:
            c = version.compare(self.upper.value)
            if c > 0 or (c == 0 and not self.upper.inclusive):
                return False
        return True

    def intersect(self, other: "SimpleRange") -> "SimpleRange":
        return SimpleRange(
            _pick_bound(self.lower, other.lower, 1),
            _pick_bound(self.upper, other.upper, -1),
        )

    def format(self) -> str:
        if self.is_exact:
            return str(self.lower.value)

        comparators = []
        if self.lower:
            comparators.append(f"{'>=' if self.lower.inclusive else '>'}{self.lower.value}")
        if self.upper:
            comparators.append(f"{'<=' if self.upper.inclusive else '<'}{self.upper.value}")
        return " ".join(comparators) or "*"


def _pick_bound(a: Optional[Bound], b: Optional[Bound], direction: int) -> Optional[Bound]:
    """Return the tighter of two bounds (the greater one for direction 1)."""
    if a is None:
        return b
    if b is None:
        return a

    c = a.value.compare(b.value) * direction
    if c > 0:
        return a
    if c < 0:
        return b
    return a if not a.inclusive else b


def _interval_to_comparators(match: "re.Match[str]") -> str:
    interval = INTERVAL_REGEX.search(match.group(0))
    if not interval:
        return ""

    from_operator = ">=" if interval.group("from_bracket") == "[" else ">"
    to_operator = "<=" if interval.group("to_bracket") == "]" else "<"
    lower = interval.group("from")
    upper = interval.group("to")

    if not lower and not upper:
        return "*"
    if not lower:
        return f"{to_operator}{upper}"
    if not interval.group("separator"):
        return lower
    if not upper:
        return f"{from_operator}{lower}"
    return f"{from_operator}{lower} {to_operator}{upper}"


def _fix_missing_patch(text: str) -> str:
    def fix(match: "re.Match[str]") -> str:
        if match.group(2):
            return match.group(0)
        return f"{match.group(1)}.0{match.group(3)}"

    return SEMVER_OPTIONAL_PATCH_REGEX.sub(fix, text)


def to_comparator_syntax(text: str) -> str:
    """Rewrite intervals and patch-less versions into plain comparator syntax."""
    return _fix_missing_patch(INTERVAL_LIKE_REGEX.sub(_interval_to_comparators, text.strip()))


def _wildcard(component: Optional[str]) -> Optional[int]:
    if component is None or component in ("x", "X", "*"):
        return None
    return int(component)


def _parse_x_range(operator: str, match: "re.Match[str]") -> SimpleRange:
    major = _wildcard(match.group("major"))
    minor = _wildcard(match.group("minor")) if major is not None else None

    if major is None:
        if operator in ("<", ">"):
            return SimpleRange(upper=Bound(_LOWEST, False))
        return SimpleRange()

    if minor is None:
        low = Version(major, 0, 0, "0")
        high = Version(major + 1, 0, 0, "0")
    else:
        low = Version(major, minor, 0, "0")
        high = Version(major, minor + 1, 0, "0")

    if operator == ">":
        return SimpleRange(lower=Bound(high, True))
    if operator == ">=":
        return SimpleRange(lower=Bound(low, True))
    if operator == "<":
        return SimpleRange(upper=Bound(low, False))
    if operator == "<=":
        return SimpleRange(upper=Bound(high, False))
    return SimpleRange(Bound(low, True), Bound(high, False))


def _components(match: "re.Match[str]") -> Tuple[Optional[int], Optional[int], Optional[int], str]:
    """Return (major, minor, patch, prerelease) of a partial version; wildcards are None."""
    major = _wildcard(match.group("major"))
    minor = _wildcard(match.group("minor")) if major is not None else None
    patch = _wildcard(match.group("patch")) if minor is not None else None
    prerelease = match.group("prerelease") if patch is not None else None
    return major, minor, patch, prerelease or ""


def _partial(text: str) -> "re.Match[str]":
    match = _PARTIAL_REGEX.fullmatch(text)
    if not match:
        raise ValueError(f"Invalid version: {text!r}")
    return match


def _between(low: Version, high: Version) -> SimpleRange:
    return SimpleRange(Bound(low, True), Bound(high, False))


def _parse_tilde(match: "re.Match[str]") -> SimpleRange:
    """`~1.2.3` allows patch updates, `~1` minor updates."""
    major, minor, patch, prerelease = _components(match)
    if major is None:
        return SimpleRange()
    if minor is None:
        return _between(Version(major, 0, 0), Version(major + 1, 0, 0, "0"))
    if patch is None:
        return _between(Version(major, minor, 0), Version(major, minor + 1, 0, "0"))
    return _between(Version(major, minor, patch, prerelease), Version(major, minor + 1, 0, "0"))


def _parse_caret(match: "re.Match[str]") -> SimpleRange:
    """`^1.2.3` allows changes that keep the left-most non-zero component."""
    major, minor, patch, prerelease = _components(match)
    if major is None:
        return SimpleRange()
    if minor is None:
        return _between(Version(major, 0, 0, "0"), Version(major + 1, 0, 0, "0"))

    if major == 0:
        high = Version(0, minor + 1, 0, "0")
    else:
        high = Version(major + 1, 0, 0, "0")

    if patch is None:
        return _between(Version(major, minor, 0, "0"), high)

    if major == 0 and minor == 0:
        high = Version(0, 0, patch + 1, "0")
    if prerelease:
        low = Version(major, minor, patch, prerelease)
    else:
        low = Version(major, minor, patch, "0" if major == 0 else "")
    return _between(low, high)


def _parse_hyphen(lower_text: str, upper_text: str) -> SimpleRange:
    """`1.2.3 - 2.3.4` with both ends inclusive; a partial upper end covers its whole series."""
    major, minor, patch, prerelease = _components(_partial(lower_text))
    if major is None:
        lower = None
    elif minor is None:
        lower = Bound(Version(major, 0, 0, "0"), True)
    elif patch is None:
        lower = Bound(Version(major, minor, 0, "0"), True)
    else:
        lower = Bound(Version(major, minor, patch, prerelease or "0"), True)

    major, minor, patch, prerelease = _components(_partial(upper_text))
    if major is None:
        upper = None
    elif minor is None:
        upper = Bound(Version(major + 1, 0, 0, "0"), False)
    elif patch is None:
        upper = Bound(Version(major, minor + 1, 0, "0"), False)
    elif prerelease:
        upper = Bound(Version(major, minor, patch, prerelease), True)
    else:
        upper = Bound(Version(major, minor, patch + 1, "0"), False)

    return SimpleRange(lower, upper)


def _parse_comparator(token: str) -> SimpleRange:
    """Parse a single comparator such as '>=1.16.0', '~1.20.1' or '1.20.x'.

    Raises:
        ValueError: If the comparator is malformed.
    """
    match = _COMPARATOR_REGEX.fullmatch(token)
    operator = match.group("operator") or ""
    text = match.group("version")

    if operator in ("~", "~>"):
        return _parse_tilde(_partial(text))
    if operator == "^":
        return _parse_caret(_partial(text))

    partial = _PARTIAL_REGEX.fullmatch(text)
    if partial and None in (_wildcard(partial.group(x)) for x in ("major", "minor", "patch")):
        return _parse_x_range(operator, partial)

    version = Version.parse_strict(text)
    if operator == ">":
        return SimpleRange(lower=Bound(version, False))
    if operator == ">=":
        return SimpleRange(lower=Bound(version, True))
    if operator == "<":
        return SimpleRange(upper=Bound(version, False))
    if operator == "<=":
        return SimpleRange(upper=Bound(version, True))
    return SimpleRange(Bound(version, True), Bound(version, True))


def _parse_comparators(text: str) -> List[SimpleRange]:
    """Parse `||`-separated conjunctions of comparators or hyphen ranges.

    Raises:
        ValueError: If any comparator is malformed.
    """
    ranges = []
    for part in text.split("||"):
        hyphen = _HYPHEN_REGEX.fullmatch(part.strip())
        if hyphen:
            ranges.append(_parse_hyphen(hyphen.group("lower"), hyphen.group("upper")))
            continue

        current = SimpleRange()
        for token in _OPERATOR_SPACING.sub(r"\1", part).split():
            current = current.intersect(_parse_comparator(token))
        ranges.append(current)
    return ranges


class VersionRange:
    """A union of simple ranges.

    `str()` returns the text the range was parsed from, `format()` the
    canonical comparator syntax. An empty union matches nothing.
    """

    def __init__(self, ranges: Sequence[SimpleRange], text: Optional[str] = None):
        self._ranges = tuple(ranges)
        self._text = self.format() if text is None else text

    @classmethod
    def parse(cls, value: Union[str, Iterable[str]]) -> Optional["VersionRange"]:
        """Parse one range or several (OR-ed) ranges.

        Returns None if the resulting comparator syntax is malformed.
        """
        texts = [value] if isinstance(value, str) else list(value)
        texts = [x.strip() for x in texts]
        comparators = " || ".join(to_comparator_syntax(x) for x in texts)

        try:
            ranges = _parse_comparators(comparators)
        except ValueError:
            return None
        return cls(ranges, " || ".join(texts))

    @classmethod
    def any(cls, text: Optional[str] = None) -> "VersionRange":
        """Return a range that includes every version."""
        if text is None:
            return ANY_VERSION_RANGE
        return cls(ANY_VERSION_RANGE.ranges, text)

    @classmethod
    def none(cls, text: Optional[str] = None) -> "VersionRange":
        """Return a range that includes no version."""
        if text is None:
            return NONE_VERSION_RANGE
        return cls(NONE_VERSION_RANGE.ranges, text)

    @property
    def ranges(self) -> Sequence[SimpleRange]:
        return self._ranges

    def includes(self, version: Union[str, Version]) -> bool:
        """Check if version falls within any of the simple ranges."""
        parsed = as_version(version)
        if parsed is None:
            return False
        return any(r.includes(parsed) for r in self._ranges)

    def format(self) -> str:
        if not self._ranges:
            return f"<{_LOWEST}"
        return " || ".join(r.format() for r in self._ranges)

    def __contains__(self, version: Union[str, Version]) -> bool:
        return self.includes(version)

    def __str__(self) -> str:
        return self._text

    def __repr__(self) -> str:
        return f"VersionRange({self._text!r})"


ANY_VERSION_RANGE = VersionRange([SimpleRange()], "*")
NONE_VERSION_RANGE = VersionRange([])


def parse_version_range(value: Union[str, Iterable[str]]) -> Optional[VersionRange]:
    return VersionRange.parse(value)


def any_version_range(text: Optional[str] = None) -> VersionRange:
    return VersionRange.any(text)


def none_version_range(text: Optional[str] = None) -> VersionRange:
    return VersionRange.none(text)
