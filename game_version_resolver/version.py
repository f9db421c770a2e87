"""Version parsing and comparison utilities."""

from dataclasses import dataclass, field
from enum import Enum
from functools import total_ordering
from typing import Optional, List, Union
import re

import semantic_version


# Any character from "+" to "_": punctuation, digits and (ignoring case) letters.
_MARKER_PREFIX = r"[\x2b-\x5f]"


class VersionType(Enum):
    """Broad classification of a canonical version."""

    ALPHA = "alpha"
    BETA = "beta"
    RELEASE = "release"

    @classmethod
    def from_name(cls, name: str) -> "VersionType":
        """Classify a version string by its `alpha`/`beta` markers."""
        if re.search(_MARKER_PREFIX + "alpha", name, re.IGNORECASE):
            return cls.ALPHA
        if re.search(_MARKER_PREFIX + "beta", name, re.IGNORECASE):
            return cls.BETA
        return cls.RELEASE


@total_ordering
@dataclass(frozen=True)
class Version:
    """Semantic version representation with comparison support.

    Ordering follows Semantic Versioning precedence: numeric components
    first, then pre-release identifiers. Build metadata is kept for display
    but never affects precedence.
    """

    major: int
    minor: int
    patch: int
    qualifier: str = ""
    build: str = ""
    _semver: semantic_version.Version = field(init=False, repr=False, compare=False)

    # Something that merely looks like a version: up to two prefix letters,
    # major.minor, optional patch and whatever follows.
    LOOSE_PATTERN = re.compile(r"[a-z]{0,2}(\d+)\.(\d+)(?:\.(\d+))?(.*)", re.IGNORECASE | re.DOTALL)

    def __post_init__(self):
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.qualifier:
            text += f"-{self.qualifier}"
        if self.build:
            text += f"+{self.build}"
        object.__setattr__(self, "_semver", semantic_version.Version(text))

    @classmethod
    def parse_strict(cls, version_str: str) -> "Version":
        """Parse a strict semantic version like '1.16.5' or '1.17.0-beta.3'.

        Raises:
            ValueError: If the string is not a valid semantic version.
        """
        parsed = semantic_version.Version(version_str.strip())
        return cls(
            parsed.major,
            parsed.minor,
            parsed.patch,
            ".".join(parsed.prerelease),
            ".".join(parsed.build),
        )

    @classmethod
    def parse(cls, version_str: str) -> Optional["Version"]:
        """Parse a version, falling back to a lenient extraction.

        Returns None if nothing resembling `major.minor` can be found.
        """
        try:
            return cls.parse_strict(version_str)
        except ValueError:
            pass

        match = cls.LOOSE_PATTERN.search(version_str)
        if not match:
            return None

        rest = match.group(4)
        prerelease, _, build = rest.partition("+")
        try:
            return cls(
                int(match.group(1)),
                int(match.group(2)),
                int(match.group(3) or 0),
                ".".join(_identifiers(prerelease, numeric=True)),
                ".".join(_identifiers(build)),
            )
        except ValueError:
            return None

    @property
    def is_prerelease(self) -> bool:
        return bool(self.qualifier)

    @property
    def major_minor(self) -> str:
        """Returns '1.16' format."""
        return f"{self.major}.{self.minor}"

    @property
    def semver(self) -> semantic_version.Version:
        return self._semver

    def compare(self, other: "Version") -> int:
        """Return -1, 0 or 1 by semantic version precedence."""
        if self._semver < other._semver:
            return -1
        if other._semver < self._semver:
            return 1
        return 0

    def __lt__(self, other: "Version") -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) < 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) == 0

    def __hash__(self) -> int:
        return hash((self.major, self.minor, self.patch, self.qualifier))

    def __str__(self) -> str:
        return str(self._semver)


def _identifiers(text: str, numeric: bool = False) -> List[str]:
    """Split free text into valid dot-separated semver identifiers."""
    identifiers = []
    for part in re.split(r"[^0-9A-Za-z-]+", text):
        part = part.strip("-")
        if not part:
            continue
        if numeric and part.isdigit():
            part = str(int(part))
        identifiers.append(part)
    return identifiers


def as_version(value: Union[str, Version]) -> Optional[Version]:
    """Return `value` as a Version, parsing strings leniently."""
    if isinstance(value, Version):
        return value
    return Version.parse(value)
