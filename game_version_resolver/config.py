"""Configuration for supported games and their version APIs."""

from dataclasses import dataclass
from typing import Dict, List

from . import __version__


@dataclass
class GameConfig:
    """Configuration for a game whose versions can be resolved."""

    name: str
    display_name: str
    api_base_url: str
    # Path of the version manifest, relative to api_base_url
    manifest_path: str
    timeout: float = 30.0
    user_agent: str = f"game-version-resolver/{__version__}"

    @property
    def manifest_url(self) -> str:
        return f"{self.api_base_url.rstrip('/')}/{self.manifest_path.lstrip('/')}"


GAMES: Dict[str, GameConfig] = {
    "minecraft": GameConfig(
        name="minecraft",
        display_name="Minecraft: Java Edition",
        api_base_url="https://piston-meta.mojang.com/mc",
        manifest_path="/game/version_manifest_v2.json",
    ),
}

DEFAULT_GAME = "minecraft"

# Anchors up to this release are "legacy": their pre-releases map to `rc.N`
LEGACY_VERSION_MAX = "1.16"

# 1.16 release candidates were numbered after its eight pre-releases
LEGACY_RC_OFFSET_VERSION = "1.16"
LEGACY_RC_OFFSET = 8


def get_game_config(name: str) -> GameConfig:
    """Get configuration for a game.

    Raises:
        ValueError: If the game is unknown.
    """
    key = (name or "").strip().lower()
    if key not in GAMES:
        available = ", ".join(sorted(GAMES.keys()))
        raise ValueError(f"Unknown game: {name}. Available: {available}")
    return GAMES[key]


def get_all_game_keys() -> List[str]:
    return list(GAMES.keys())
