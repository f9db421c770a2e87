"""Regular expressions recognizing every known shape of Minecraft version ids."""

from typing import Iterable, Optional, Pattern
import re

# Alternatives are ordered by priority: the first one that matches wins.
VERSION_PATTERN = (
    r"0\.\d+(?:\.\d+)?a?(?:_\d+)?|"
    r"\d+\.\d+(?:\.\d+)?(?:-pre\d+| Pre-[Rr]elease \d+|-rc\d+| [Rr]elease Candidate \d+)?|"
    r"\d+w\d+(?:[a-z]+|~)|"
    r"[a-c]\d\.\d+(?:\.\d+)?[a-z]?(?:_\d+)?[a-z]?|"
    r"(Alpha|Beta) v?\d+\.\d+(?:\.\d+)?[a-z]?(?:_\d+)?[a-z]?|"
    r"Inf?dev (?:0\.31 )?\d+(?:-\d+)?|"
    r"(?:rd|inf)-\d+|"
    r"(?:.*[Ee]xperimental [Ss]napshot )(?:\d+)"
)

VERSION_REGEX = re.compile(VERSION_PATTERN)

RELEASE_REGEX = re.compile(r"\d+\.\d+(\.\d+)?")

PRE_RELEASE_REGEX = re.compile(r".+(?:-pre| Pre-[Rr]elease )(\d+)")

RELEASE_CANDIDATE_REGEX = re.compile(r".+(?:-rc| [Rr]elease Candidate )(\d+)")

SNAPSHOT_REGEX = re.compile(r"(?:Snapshot )?(\d+)w0?(0|[1-9]\d*)([a-z])")

EXPERIMENTAL_REGEX = re.compile(r"(?:.*[Ee]xperimental [Ss]napshot )(\d+)")

BETA_REGEX = re.compile(r"(?:b|Beta v?)1\.(\d+(\.\d+)?[a-z]?(_\d+)?[a-z]?)")

ALPHA_REGEX = re.compile(r"(?:a|Alpha v?)[01]\.(\d+(\.\d+)?[a-z]?(_\d+)?[a-z]?)")

INDEV_REGEX = re.compile(r"(?:inf-|Inf?dev )(?:0\.31 )?(\d+(-\d+)?)")

_SPECIAL_CHARACTERS = re.compile(r"[|\\{}()\[\]^$+*?.]")


def escape_literal(literal: str) -> str:
    """Escape a literal version id for use inside the version pattern.

    Hyphens are written as `\\x2d` so they never read as grammar.
    """
    escaped = _SPECIAL_CHARACTERS.sub(lambda m: "\\" + m.group(0), literal)
    return escaped.replace("-", r"\x2d")


def matches_grammar(version: str) -> bool:
    """Return True if the generic grammar recognizes the whole id."""
    match = VERSION_REGEX.search(version)
    return match is not None and match.group(0) == version


def build_version_regex(literals: Optional[Iterable[str]] = None) -> Pattern[str]:
    """Build a regex matching Minecraft version ids.

    Without `literals` the generic grammar is returned. Otherwise every
    literal the grammar does not already recognize verbatim is prepended as
    a higher-priority alternative, so known ids like "3D Shareware v1.34"
    win over partial grammar matches. The result is meant for `sub`/`finditer`.
    """
    if literals is None:
        return VERSION_REGEX

    pattern = VERSION_PATTERN
    for literal in literals:
        if literal and not matches_grammar(literal):
            pattern = f"{escape_literal(literal)}|{pattern}"
    return re.compile(pattern, re.MULTILINE | re.DOTALL)
