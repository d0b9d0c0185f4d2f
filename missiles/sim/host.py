from __future__ import annotations

import logging
from collections import deque
from typing import Protocol

import numpy as np

from ..constants import ENTITY_MAX_AGE_TICKS, VOID_Y
from ..errors import UnknownWorldError
from .entity import Entity, EntityKind
from .particles import ExplosionEffect, Particle, ParticleEmission
from .scheduler import TickScheduler
from .senders import CommandSender, Player
from .vector import Location
from .world import Block, BlockWorld

logger = logging.getLogger("missiles")

# Bounded effect logs; the HTTP console reads the tail.
EFFECT_LOG_MAX = 4096


class CommandExecutor(Protocol):
    def on_command(self, sender: CommandSender, label: str, args: list[str]) -> bool: ...


class Plugin(Protocol):
    name: str

    def on_enable(self) -> None: ...

    def on_disable(self) -> None: ...


class CommandMap:
    """Maps command labels to executors and parses raw command lines."""

    def __init__(self) -> None:
        self._executors: dict[str, CommandExecutor] = {}

    def register(self, label: str, executor: CommandExecutor) -> None:
        self._executors[label.lower()] = executor

    def get(self, label: str) -> CommandExecutor | None:
        return self._executors.get(label.lower())

    def dispatch(self, sender: CommandSender, line: str) -> bool:
        parts = line.strip().lstrip("/").split()
        if not parts:
            sender.send_message("Unknown command")
            return False
        label, args = parts[0], parts[1:]
        executor = self.get(label)
        if executor is None:
            sender.send_message("Unknown command")
            return False
        return bool(executor.on_command(sender, label, args))


class GameServer:
    """Minimal tick-driven host: worlds, players, entities, effects and a scheduler."""

    def __init__(self) -> None:
        self.scheduler = TickScheduler()
        self.commands = CommandMap()
        self.worlds: dict[str, BlockWorld] = {}
        self.plugins: list[Plugin] = []
        self._players: dict[str, Player] = {}
        self._entities: dict[int, Entity] = {}
        self.particles: deque[ParticleEmission] = deque(maxlen=EFFECT_LOG_MAX)
        self.explosions: deque[ExplosionEffect] = deque(maxlen=EFFECT_LOG_MAX)

    @property
    def current_tick(self) -> int:
        return self.scheduler.current_tick

    # Worlds ---------------------------------------------------------------

    def add_world(self, world: BlockWorld) -> BlockWorld:
        self.worlds[world.name] = world
        return world

    def get_world(self, name: str) -> BlockWorld:
        try:
            return self.worlds[name]
        except KeyError:
            raise UnknownWorldError(f"World {name!r} is not loaded") from None

    def block_at(self, location: Location) -> Block:
        return self.get_world(location.world).get_block(*location.block_coords)

    # Players --------------------------------------------------------------

    def add_player(self, player: Player) -> Player:
        player.online = True
        self._players[player.name.lower()] = player
        return player

    def remove_player(self, name: str) -> None:
        player = self._players.pop(name.lower(), None)
        if player is not None:
            player.online = False

    @property
    def online_players(self) -> list[Player]:
        return list(self._players.values())

    def get_player_exact(self, name: str) -> Player | None:
        return self._players.get(name.lower())

    def get_player(self, name: str) -> Player | None:
        """Exact (case-insensitive) match, else the closest online name with that prefix."""
        found = self.get_player_exact(name)
        if found is not None:
            return found
        prefix = name.lower()
        best: Player | None = None
        best_delta = None
        for player in self._players.values():
            lowered = player.name.lower()
            if not lowered.startswith(prefix):
                continue
            delta = len(lowered) - len(prefix)
            if best_delta is None or delta < best_delta:
                best, best_delta = player, delta
        return best

    # Entities -------------------------------------------------------------

    def spawn_entity(self, location: Location, kind: EntityKind) -> Entity:
        self.get_world(location.world)
        entity = Entity(kind=kind, location=location)
        self._entities[entity.entity_id] = entity
        logger.debug(f"Spawned {kind.value} #{entity.entity_id} at {location.to_list()}")
        return entity

    def get_entity(self, entity_id: int) -> Entity | None:
        return self._entities.get(entity_id)

    @property
    def entities(self) -> list[Entity]:
        return [e for e in self._entities.values() if not e.dead]

    # Effects --------------------------------------------------------------

    def spawn_particle(
        self,
        particle: Particle,
        location: Location,
        count: int,
        offset: tuple[float, float, float] = (0.0, 0.0, 0.0),
        speed: float = 0.0,
    ) -> ParticleEmission:
        emission = ParticleEmission(
            particle=particle, location=location, count=count, offset=offset, speed=speed, tick=self.current_tick
        )
        self.particles.append(emission)
        return emission

    def create_explosion(self, location: Location, power: float, set_fire: bool = False) -> ExplosionEffect:
        """Explosion effect; a positive power also breaks blocks within `power` blocks."""
        broken = 0
        if power > 0.0:
            world = self.get_world(location.world)
            r = int(np.ceil(power))
            cx, cy, cz = location.block_coords
            for dy in range(-r, r + 1):
                for dz in range(-r, r + 1):
                    for dx in range(-r, r + 1):
                        if dx * dx + dy * dy + dz * dz > power * power:
                            continue
                        block = world.get_block(cx + dx, cy + dy, cz + dz)
                        if block in (Block.AIR, Block.BEDROCK):
                            continue
                        world.set_block(cx + dx, cy + dy, cz + dz, Block.AIR)
                        broken += 1
        effect = ExplosionEffect(
            location=location, power=power, set_fire=set_fire, blocks_broken=broken, tick=self.current_tick
        )
        self.explosions.append(effect)
        return effect

    # Plugins & commands ---------------------------------------------------

    def load_plugin(self, plugin: Plugin) -> Plugin:
        self.plugins.append(plugin)
        plugin.on_enable()
        return plugin

    def disable_plugins(self) -> None:
        for plugin in reversed(self.plugins):
            plugin.on_disable()
        self.plugins.clear()

    def dispatch_command(self, sender: CommandSender, line: str) -> bool:
        return self.commands.dispatch(sender, line)

    # Simulation -----------------------------------------------------------

    def tick(self) -> None:
        """Run scheduled tasks, then move entities."""
        self.scheduler.heartbeat()
        self._tick_entities()

    def run_ticks(self, n: int) -> None:
        for _ in range(n):
            self.tick()

    def _tick_entities(self) -> None:
        for entity in list(self._entities.values()):
            if entity.dead:
                continue
            entity.age += 1
            if entity.age > ENTITY_MAX_AGE_TICKS:
                entity.remove()
                continue

            next_loc = entity.location.add(*(float(v) for v in entity.velocity))
            if self.block_at(next_loc) != Block.AIR:
                # Native impact: fireballs burst with their own yield.
                if entity.is_fireball:
                    self.create_explosion(entity.location, entity.yield_, set_fire=entity.is_incendiary)
                entity.remove()
                continue

            entity.location = next_loc
            if next_loc.y < VOID_Y:
                entity.remove()

        self._entities = {eid: e for eid, e in self._entities.items() if not e.dead}
