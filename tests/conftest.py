from pathlib import Path

import numpy as np
import pytest

from missiles.config import LaunchConfig, PluginConfig
from missiles.plugin import MissilesPlugin
from missiles.regions import RegionContainer
from missiles.sim.host import GameServer
from missiles.sim.senders import Player
from missiles.sim.vector import Location
from missiles.sim.world import BlockWorld

WORLD = "world"


def build_host(data_folder: Path, ground_level: int = 0, seed: int = 7) -> tuple[GameServer, MissilesPlugin]:
    """64^3 world (empty unless `ground_level` > 0) with an unenabled plugin."""
    game = GameServer()
    game.add_world(BlockWorld.flat(WORLD, 64, 64, 64, ground_level))
    plugin = MissilesPlugin(game, data_folder, RegionContainer(), rng=np.random.default_rng(seed))
    return game, plugin


@pytest.fixture
def host(tmp_path: Path):
    return build_host(tmp_path / "plugins" / "Missiles")


@pytest.fixture
def game(host):
    return host[0]


@pytest.fixture
def plugin(host):
    return host[1]


@pytest.fixture
def enabled_plugin(game, plugin):
    game.load_plugin(plugin)
    return plugin


@pytest.fixture
def make_player(game):
    def _make(name: str, pos: tuple, permissions: tuple = ()) -> Player:
        player = Player(name=name, permissions=set(permissions), location=Location(WORLD, *pos))
        return game.add_player(player)

    return _make


@pytest.fixture
def launch_for():
    def _make(**overrides) -> LaunchConfig:
        return LaunchConfig.from_config(PluginConfig(**overrides))

    return _make
