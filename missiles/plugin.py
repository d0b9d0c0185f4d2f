from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np

from .commands import MissileCommand
from .config import CONFIG_FILENAME, LaunchConfig, PluginConfig, load_config, save_default_config
from .constants import COMMAND_NAME, LAUNCH_INTERVAL_TICKS, MISSILES_PER_LAUNCH
from .missile import Missile

if TYPE_CHECKING:
    from .regions import RegionContainer
    from .sim.host import GameServer
    from .sim.scheduler import ScheduledTask
    from .sim.senders import Player
    from .sim.vector import Location

logger = logging.getLogger("missiles")


class MissilesPlugin:
    """Plugin entry point: config, the `missiles` command and missile launches."""

    name = "Missiles"

    def __init__(
        self,
        server: GameServer,
        data_folder: Path,
        regions: RegionContainer,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.server = server
        self.data_folder = Path(data_folder)
        self.regions = regions
        self.rng = rng if rng is not None else np.random.default_rng()
        self.config = PluginConfig()
        self.missiles: list[Missile] = []

    @property
    def config_path(self) -> Path:
        return self.data_folder / CONFIG_FILENAME

    def on_enable(self) -> None:
        save_default_config(self.data_folder)
        self.config = load_config(self.config_path)
        self.server.commands.register(COMMAND_NAME, MissileCommand(self))
        logger.info("Missiles plugin has been enabled!")

    def on_disable(self) -> None:
        cancelled = self.server.scheduler.cancel_tasks(self)
        for missile in self.active_missiles:
            missile.abandon()
        logger.info(f"Missiles plugin disabled ({cancelled} tasks cancelled)")

    def reload_config(self) -> PluginConfig:
        self.config = load_config(self.config_path)
        logger.info(f"Reloaded {self.config_path}")
        return self.config

    @property
    def active_missiles(self) -> list[Missile]:
        return [m for m in self.missiles if m.active]

    def launch_missile(self, player: Player) -> list[ScheduledTask]:
        """Schedule a salvo at the player's current position.

        The target is fixed at launch; missiles spawn every half second from
        random points in the spawn box above it.
        """
        launch = LaunchConfig.from_config(self.config)
        target = player.location.subtract(0, launch.target_y_offset, 0)

        tasks = []
        for i in range(MISSILES_PER_LAUNCH):
            start = target.add(
                (self.rng.random() - 0.5) * launch.spawn_distance_x,
                launch.spawn_distance_y,
                (self.rng.random() - 0.5) * launch.spawn_distance_z,
            )
            tasks.append(
                self.server.scheduler.run_task_later(
                    self, self._spawn_callback(start, target, launch), i * LAUNCH_INTERVAL_TICKS
                )
            )

        logger.info(
            f"Launching {MISSILES_PER_LAUNCH} {launch.entity_kind.value} missiles at {player.name} "
            f"(target {[round(v, 2) for v in target.to_list()]} in {target.world})"
        )
        return tasks

    def _spawn_callback(self, start: Location, target: Location, launch: LaunchConfig):
        def _spawn(task: ScheduledTask) -> None:
            missile = Missile(self, start, target, launch)
            self.missiles = [m for m in self.missiles if m.active]
            self.missiles.append(missile)
            missile.start()

        return _spawn

    def is_block_in_region_with_flag(self, location: Location, flag: str) -> bool:
        """True if any region covering `location` declares `flag`, whatever its value."""
        manager = self.regions.get(location.world)
        if manager is None:
            return False
        for region in manager.get_applicable_regions(location.block_coords):
            if flag in region.flags:
                return True
        return False
