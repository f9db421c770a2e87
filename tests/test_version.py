"""Tests for Version parsing and ordering."""

import pytest

from game_version_resolver.version import Version, VersionType, as_version


class TestParse:
    def test_strict_semver(self):
        v = Version.parse("1.16.5")
        assert (v.major, v.minor, v.patch, v.qualifier) == (1, 16, 5, "")

    def test_prerelease(self):
        v = Version.parse("1.17.0-beta.3")
        assert v.qualifier == "beta.3"
        assert v.is_prerelease

    def test_missing_patch_defaults_to_zero(self):
        assert Version.parse("1.17") == Version(1, 17, 0)

    def test_missing_patch_keeps_qualifier(self):
        v = Version.parse("1.16-alpha.20.13.inf")
        assert str(v) == "1.16.0-alpha.20.13.inf"

    def test_build_metadata(self):
        v = Version.parse("1.8.4-alpha.15.14.a+loveandhugs")
        assert v.qualifier == "alpha.15.14.a"
        assert v.build == "loveandhugs"

    def test_prefix_letters(self):
        assert Version.parse("v1.20.1") == Version(1, 20, 1)

    def test_embedded_version(self):
        v = Version.parse("Minecraft 1.20.4")
        assert v == Version(1, 20, 4)

    @pytest.mark.parametrize("text", ["", "latest", "snapshot", "1"])
    def test_unparseable(self, text):
        assert Version.parse(text) is None

    def test_parse_strict_rejects_partial(self):
        with pytest.raises(ValueError):
            Version.parse_strict("1.17")

    def test_as_version(self):
        v = Version(1, 2, 3)
        assert as_version(v) is v
        assert as_version("1.2.3") == v
        assert as_version("nope") is None


class TestOrdering:
    def test_numeric_components(self):
        assert Version.parse("1.9.4") < Version.parse("1.10.0")
        assert Version.parse("1.16.5") < Version.parse("1.17")

    def test_prerelease_before_release(self):
        assert Version.parse("1.16.5-alpha.20.45.a") < Version.parse("1.16.5")
        assert Version.parse("1.16.5-rc.1") < Version.parse("1.16.5")

    def test_prerelease_identifiers(self):
        assert Version.parse("1.17.0-alpha.21.3.a") < Version.parse("1.17.0-beta.1")
        assert Version.parse("1.17.0-beta.2") < Version.parse("1.17.0-beta.10")
        assert Version.parse("1.16.5-alpha.20.45.a") < Version.parse("1.16.5-rc.1")

    def test_compare(self):
        a = Version.parse("1.16.4")
        b = Version.parse("1.16.5")
        assert a.compare(b) == -1
        assert b.compare(a) == 1
        assert a.compare(Version(1, 16, 4)) == 0

    def test_sorting(self):
        versions = [Version.parse(x) for x in ["1.17", "1.16.5-rc.1", "1.16.4", "1.16.5"]]
        assert [str(x) for x in sorted(versions)] == ["1.16.4", "1.16.5-rc.1", "1.16.5", "1.17.0"]

    def test_hashable(self):
        assert len({Version.parse("1.17"), Version.parse("1.17.0")}) == 1


class TestVersionType:
    @pytest.mark.parametrize("name,expected", [
        ("1.17.0-alpha.21.3.a", VersionType.ALPHA),
        ("1.0.0-beta.8.1", VersionType.BETA),
        ("1.17.0", VersionType.RELEASE),
        ("1.16.5-rc.1", VersionType.RELEASE),
        ("1.0.0-rc.1alpha", VersionType.ALPHA),
        ("1.0.0-rcALPHA", VersionType.ALPHA),
        ("1.0.0-rc.2Beta", VersionType.BETA),
        ("alpha", VersionType.RELEASE),
        ("1.0.0 beta", VersionType.RELEASE),
    ])
    def test_from_name(self, name, expected):
        assert VersionType.from_name(name) is expected
