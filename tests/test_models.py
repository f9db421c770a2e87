"""Tests for manifest and version models."""

from datetime import datetime, timezone

import pytest

from game_version_resolver.models import (
    ManifestEntry,
    MinecraftVersion,
    MinecraftVersionType,
    get_manifest_entries,
)
from game_version_resolver.version import Version, VersionType


class TestMinecraftVersionType:
    @pytest.mark.parametrize("text,expected", [
        ("release", MinecraftVersionType.RELEASE),
        ("SNAPSHOT", MinecraftVersionType.SNAPSHOT),
        ("old_beta", MinecraftVersionType.OLD_BETA),
        ("Old Alpha", MinecraftVersionType.OLD_ALPHA),
        ("old-alpha", MinecraftVersionType.OLD_ALPHA),
    ])
    def test_parse(self, text, expected):
        assert MinecraftVersionType.parse(text) is expected

    def test_parse_unknown(self):
        assert MinecraftVersionType.parse("pending") is None
        assert MinecraftVersionType.parse("") is None

    @pytest.mark.parametrize("mc_type,version,expected", [
        (MinecraftVersionType.SNAPSHOT, "1.17.0-beta.1", VersionType.BETA),
        (MinecraftVersionType.SNAPSHOT, "1.16.5-rc.1", VersionType.BETA),
        (MinecraftVersionType.SNAPSHOT, "1.14.2 Pre-Release 4", VersionType.BETA),
        (MinecraftVersionType.SNAPSHOT, "1.17.0-alpha.21.3.a", VersionType.ALPHA),
        (MinecraftVersionType.SNAPSHOT, None, VersionType.ALPHA),
        (MinecraftVersionType.OLD_BETA, "1.0.0-beta.8.1", VersionType.BETA),
        (MinecraftVersionType.OLD_ALPHA, "0.0.0-rd.132211", VersionType.ALPHA),
        (MinecraftVersionType.RELEASE, "1.17.0", VersionType.RELEASE),
    ])
    def test_to_version_type(self, mc_type, version, expected):
        assert mc_type.to_version_type(version) is expected


class TestManifestEntry:
    def test_from_dict(self):
        entry = ManifestEntry.from_dict({
            "id": "1.17",
            "type": "release",
            "url": "https://example.com/1.17.json",
            "time": "2021-06-08T11:00:40+00:00",
            "releaseTime": "2021-06-08T11:00:40+00:00",
            "sha1": "abc",
            "complianceLevel": 1,
        })
        assert entry.id == "1.17"
        assert entry.type is MinecraftVersionType.RELEASE
        assert entry.url == "https://example.com/1.17.json"
        assert entry.compliance_level == 1
        assert entry.release_date == datetime(2021, 6, 8, 11, 0, 40, tzinfo=timezone.utc)

    def test_zulu_timestamps(self):
        entry = ManifestEntry.from_dict({"id": "1.17", "type": "release", "releaseTime": "2021-06-08T11:00:40Z"})
        assert entry.release_date == datetime(2021, 6, 8, 11, 0, 40, tzinfo=timezone.utc)

    def test_missing_fields_have_defaults(self):
        entry = ManifestEntry.from_dict({"id": "b1.8.1", "type": "old_beta"})
        assert entry.url == ""
        assert entry.release_date is None

    @pytest.mark.parametrize("raw", [
        {"type": "release"},
        {"id": "", "type": "release"},
        {"id": "1.17", "type": "pending"},
    ])
    def test_invalid_entries(self, raw):
        with pytest.raises(ValueError):
            ManifestEntry.from_dict(raw)


class TestGetManifestEntries:
    def test_sorted_newest_first(self, manifest_payload):
        entries = get_manifest_entries(manifest_payload)
        assert [x.id for x in entries] == [
            "1.17",
            "1.17-pre1",
            "21w03a",
            "1.16.5",
            "1.16.5-rc1",
            "20w51a",
            "1.16.4",
            "b1.8.1",
            "a1.0.4",
            "rd-132211",
        ]

    def test_mixed_naive_aware_and_missing_dates(self):
        entries = get_manifest_entries({"versions": [
            {"id": "b1.8.1", "type": "old_beta"},
            {"id": "1.16.5", "type": "release", "releaseTime": "2021-01-14T16:05:32"},
            {"id": "1.17", "type": "release", "releaseTime": "2021-06-08T11:00:40+00:00"},
        ]})
        assert [x.id for x in entries] == ["1.17", "1.16.5", "b1.8.1"]
        assert entries[1].release_date.tzinfo == timezone.utc

    @pytest.mark.parametrize("payload", [{}, {"versions": None}, [], {"versions": {"id": "1.17"}}])
    def test_invalid_payload(self, payload):
        with pytest.raises(ValueError):
            get_manifest_entries(payload)


class TestMinecraftVersion:
    def test_release(self):
        version = MinecraftVersion("1.17", Version.parse("1.17"), MinecraftVersionType.RELEASE)
        assert version.is_release
        assert not version.is_snapshot
        assert version.type is VersionType.RELEASE
        assert str(version) == "1.17"

    def test_release_candidate_is_beta(self):
        version = MinecraftVersion("1.16.5-rc1", Version.parse("1.16.5-rc.1"), MinecraftVersionType.SNAPSHOT)
        assert version.is_beta
        assert version.is_snapshot
        assert not version.is_alpha

    def test_snapshot_is_alpha(self):
        version = MinecraftVersion("20w51a", Version.parse("1.17-alpha.20.51.a"), MinecraftVersionType.SNAPSHOT)
        assert version.is_alpha
        assert not version.is_old_alpha

    def test_old_versions(self):
        alpha = MinecraftVersion("a1.0.4", Version.parse("1.0.0-alpha.0.4"), MinecraftVersionType.OLD_ALPHA)
        beta = MinecraftVersion("b1.8.1", Version.parse("1.0.0-beta.8.1"), MinecraftVersionType.OLD_BETA)
        assert alpha.is_alpha and alpha.is_old_alpha
        assert beta.is_beta and beta.is_old_beta
