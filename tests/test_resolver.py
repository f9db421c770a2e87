"""Tests for nearest release resolution."""

import pytest

from game_version_resolver.models import ManifestEntry, MinecraftVersionType
from game_version_resolver.resolver import (
    find_nearest_release,
    find_release_by_snapshot_date,
    is_legacy_version,
)

RELEASE = MinecraftVersionType.RELEASE
SNAPSHOT = MinecraftVersionType.SNAPSHOT


def entries(*items):
    return [ManifestEntry(version_id, mc_type) for version_id, mc_type in items]


class TestFindNearestRelease:
    def test_release_is_its_own_anchor(self, manifest_entries):
        assert find_nearest_release(manifest_entries, 0) == "1.17"

    def test_old_versions_have_no_anchor(self):
        manifest = entries(("b1.8.1", MinecraftVersionType.OLD_BETA), ("a1.0.4", MinecraftVersionType.OLD_ALPHA))
        assert find_nearest_release(manifest, 0) is None
        assert find_nearest_release(manifest, 1) is None

    def test_release_embedded_in_id(self):
        manifest = entries(("1.17", RELEASE), ("1.17-pre1", SNAPSHOT))
        assert find_nearest_release(manifest, 1) == "1.17"

    def test_snapshot_date_wins_over_manifest_order(self):
        manifest = entries(("1.16.5", RELEASE), ("20w51a", SNAPSHOT))
        assert find_nearest_release(manifest, 1) == "1.17"

    def test_backward_scan(self):
        manifest = entries(("1.14", RELEASE), ("19w02a", SNAPSHOT), ("19w01a", SNAPSHOT))
        assert find_nearest_release(manifest, 2) == "1.14"

    def test_forward_scan_increments_patch(self):
        manifest = entries(("90w03a", SNAPSHOT), ("91w01a", SNAPSHOT), ("1.16.5", RELEASE))
        assert find_nearest_release(manifest, 0) == "1.16.6"

    def test_forward_scan_defaults_missing_patch(self):
        manifest = entries(("90w03a", SNAPSHOT), ("1.17", RELEASE))
        assert find_nearest_release(manifest, 0) == "1.17.1"

    def test_no_release_anywhere(self):
        manifest = entries(("90w03a", SNAPSHOT), ("foo", SNAPSHOT))
        assert find_nearest_release(manifest, 1) is None

    @pytest.mark.parametrize("index", [-1, 10, 99])
    def test_index_out_of_range(self, manifest_entries, index):
        assert find_nearest_release(manifest_entries, index) is None


class TestSnapshotDateTable:
    @pytest.mark.parametrize("year,week,expected", [
        (23, 12, "1.20"),
        (23, 40, "1.20"),
        (23, 11, None),
        (20, 45, "1.17"),
        (20, 44, None),
        (21, 20, "1.17"),
        (21, 21, None),
        (15, 31, "1.9"),
        (16, 7, "1.9"),
        (16, 8, None),
        (14, 2, "1.8"),
        (14, 34, "1.8"),
        (14, 35, None),
        (13, 47, "1.7.4"),
        (13, 49, "1.7.4"),
        (13, 36, "1.7.2"),
        (13, 43, "1.7.2"),
        (13, 44, None),
        (13, 16, "1.6"),
        (13, 26, "1.6"),
        (13, 15, None),
        (19, 1, None),
    ])
    def test_lookup(self, year, week, expected):
        assert find_release_by_snapshot_date(year, week) == expected


class TestLegacyVersion:
    @pytest.mark.parametrize("anchor,expected", [
        ("1.16", True),
        ("1.15.2", True),
        ("1.7.10", True),
        ("1.16.1", False),
        ("1.17", False),
        ("1.20.4", False),
    ])
    def test_is_legacy_version(self, anchor, expected):
        assert is_legacy_version(anchor) is expected
