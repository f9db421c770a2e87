"""Shared fixtures for game_version_resolver tests."""

import httpx
import pytest

from game_version_resolver.config import get_game_config
from game_version_resolver.models import get_manifest_entries


# Deliberately out of order; entries are sorted by releaseTime.
MANIFEST_VERSIONS = [
    ("1.16.5", "release", "2021-01-14T16:05:32+00:00"),
    ("1.17", "release", "2021-06-08T11:00:40+00:00"),
    ("21w03a", "snapshot", "2021-01-20T13:42:26+00:00"),
    ("1.17-pre1", "snapshot", "2021-05-27T09:39:21+00:00"),
    ("1.16.5-rc1", "snapshot", "2021-01-13T15:58:55+00:00"),
    ("20w51a", "snapshot", "2020-12-16T14:35:38+00:00"),
    ("1.16.4", "release", "2020-10-29T15:49:37+00:00"),
    ("b1.8.1", "old_beta", "2011-09-18T22:00:00+00:00"),
    ("a1.0.4", "old_alpha", "2010-07-08T22:00:00+00:00"),
    ("rd-132211", "old_alpha", "2009-05-13T20:11:00+00:00"),
]


@pytest.fixture
def manifest_payload():
    return {
        "latest": {"release": "1.17", "snapshot": "1.17"},
        "versions": [
            {
                "id": version_id,
                "type": mc_type,
                "url": f"https://piston-meta.mojang.com/v1/packages/{version_id}.json",
                "time": release_time,
                "releaseTime": release_time,
                "sha1": "0" * 40,
                "complianceLevel": 1,
            }
            for version_id, mc_type, release_time in MANIFEST_VERSIONS
        ],
    }


@pytest.fixture
def manifest_entries(manifest_payload):
    return get_manifest_entries(manifest_payload)


@pytest.fixture
def minecraft_config():
    return get_game_config("minecraft")


@pytest.fixture
def manifest_transport(manifest_payload):
    """Mock transport serving the manifest and recording every request."""
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        if request.url.path.endswith("/version_manifest_v2.json"):
            return httpx.Response(200, json=manifest_payload)
        return httpx.Response(404)

    transport = httpx.MockTransport(handler)
    transport.requests = requests
    return transport
