from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING

from .constants import COLLISION_SCAN_RADIUS, HOMING_PERIOD_TICKS, TRAIL_SPEED, TRAIL_SPREAD
from .errors import MissilesError
from .sim.vector import Location, normalize
from .sim.world import Block

if TYPE_CHECKING:
    from .config import LaunchConfig
    from .plugin import MissilesPlugin
    from .sim.entity import Entity
    from .sim.scheduler import ScheduledTask

logger = logging.getLogger("missiles")


class MissileState(str, Enum):
    ARMED = "armed"
    HOMING = "homing"
    DETONATED = "detonated"
    LOST = "lost"


class Missile:
    """One projectile homing on a fixed point until it hits terrain.

    The entity is spawned on construction; `start()` hooks the per-tick
    homing update onto the host scheduler. The update cancels itself the
    first time it sees the entity gone, or right after detonating.
    """

    def __init__(self, plugin: MissilesPlugin, start: Location, target: Location, launch: LaunchConfig) -> None:
        self.plugin = plugin
        self.start_location = start
        self.target = target
        self.launch = launch
        self.state = MissileState.ARMED
        self.task: ScheduledTask | None = None
        self.cleared_blocks: list[tuple[int, int, int]] = []

        server = plugin.server
        entity = server.spawn_entity(start, launch.entity_kind)
        if entity.is_fireball:
            # No native fire or block damage; detonation handles terrain itself.
            entity.is_incendiary = False
            entity.yield_ = 0.0
        entity.silent = True
        entity.glowing = True
        entity.set_velocity(normalize(target.vector() - start.vector()))
        self.entity: Entity | None = entity

    @property
    def active(self) -> bool:
        if self.state not in (MissileState.ARMED, MissileState.HOMING):
            return False
        if self.entity is None or self.entity.dead:
            return False
        return self.task is None or not self.task.cancelled

    def abandon(self) -> None:
        """Stop homing without detonating; the entity is left to the host."""
        if self.task is not None:
            self.task.cancel()
        if self.state in (MissileState.ARMED, MissileState.HOMING):
            self.state = MissileState.LOST

    def start(self) -> ScheduledTask:
        self.task = self.plugin.server.scheduler.run_task_timer(self.plugin, self._tick, 0, HOMING_PERIOD_TICKS)
        self.state = MissileState.HOMING
        return self.task

    def _tick(self, task: ScheduledTask) -> None:
        entity = self.entity
        if entity is None or entity.dead:
            self.state = MissileState.LOST
            logger.debug(f"Missile entity {self._entity_label()} gone before impact")
            task.cancel()
            return

        server = self.plugin.server
        here = entity.location
        entity.set_velocity(normalize(self.target.vector() - here.vector()))
        server.spawn_particle(
            self.launch.trail_particle, here, self.launch.trail_particle_count, TRAIL_SPREAD, TRAIL_SPEED
        )

        if self.is_colliding_with_block(here):
            self.explode()
            entity.remove()
            self.state = MissileState.DETONATED
            task.cancel()

    def is_colliding_with_block(self, location: Location) -> bool:
        """True if any block in the 3x3x3 neighbourhood of `location` is not air."""
        world = self.plugin.server.get_world(location.world)
        r = COLLISION_SCAN_RADIUS
        for dx in range(-r, r + 1):
            for dy in range(-r, r + 1):
                for dz in range(-r, r + 1):
                    if not world.is_empty(*location.add(dx, dy, dz).block_coords):
                        return True
        return False

    def explode(self) -> list[tuple[int, int, int]]:
        """Burst at the entity's position and clear solid blocks in flagged regions.

        Returns the coordinates of the blocks that were cleared.
        """
        if self.entity is None:
            raise MissilesError("Missile has no entity to detonate")
        server = self.plugin.server
        center = self.entity.location
        server.spawn_particle(self.launch.explosion_particle, center, self.launch.explosion_particle_count)
        server.create_explosion(center, 0.0)

        world = server.get_world(center.world)
        flag = self.plugin.config.region_flag
        radius = self.launch.explosion_radius
        cleared: list[tuple[int, int, int]] = []
        for dx in range(-radius, radius + 1):
            for dy in range(-radius, radius + 1):
                for dz in range(-radius, radius + 1):
                    loc = center.add(dx, dy, dz)
                    if loc.distance(center) > radius:
                        continue
                    coords = loc.block_coords
                    if world.is_empty(*coords):
                        continue
                    if self.plugin.is_block_in_region_with_flag(loc, flag):
                        world.set_block(*coords, Block.AIR)
                        cleared.append(coords)

        self.cleared_blocks = cleared
        logger.info(
            f"Missile {self._entity_label()} detonated at {[round(v, 2) for v in center.to_list()]} "
            f"in {center.world}, cleared {len(cleared)} blocks (flag {flag!r})"
        )
        return cleared

    def _entity_label(self) -> str:
        if self.entity is None:
            return "<none>"
        return f"{self.entity.kind.value}#{self.entity.entity_id}"

    def to_dict(self) -> dict:
        entity = self.entity
        return {
            "entity_id": entity.entity_id if entity is not None else None,
            "kind": self.launch.entity_kind.value,
            "state": self.state.value,
            "world": self.target.world,
            "pos": entity.location.to_list() if entity is not None else None,
            "target": self.target.to_list(),
            "cleared_blocks": len(self.cleared_blocks),
        }
