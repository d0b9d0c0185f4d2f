from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from .vector import Location


class Particle(str, Enum):
    SMOKE_NORMAL = "SMOKE_NORMAL"
    SMOKE_LARGE = "SMOKE_LARGE"
    CLOUD = "CLOUD"
    FLAME = "FLAME"
    SOUL_FIRE_FLAME = "SOUL_FIRE_FLAME"
    FIREWORKS_SPARK = "FIREWORKS_SPARK"
    CAMPFIRE_COSY_SMOKE = "CAMPFIRE_COSY_SMOKE"
    EXPLOSION_NORMAL = "EXPLOSION_NORMAL"
    EXPLOSION_LARGE = "EXPLOSION_LARGE"
    EXPLOSION_HUGE = "EXPLOSION_HUGE"
    LAVA = "LAVA"
    END_ROD = "END_ROD"


@dataclass(frozen=True)
class ParticleEmission:
    particle: Particle
    location: Location
    count: int
    offset: tuple[float, float, float] = (0.0, 0.0, 0.0)
    speed: float = 0.0
    tick: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "particle": self.particle.value,
            "world": self.location.world,
            "pos": self.location.to_list(),
            "count": self.count,
            "offset": list(self.offset),
            "speed": self.speed,
            "tick": self.tick,
        }


@dataclass(frozen=True)
class ExplosionEffect:
    location: Location
    power: float
    set_fire: bool = False
    blocks_broken: int = 0
    tick: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "world": self.location.world,
            "pos": self.location.to_list(),
            "power": self.power,
            "set_fire": self.set_fire,
            "blocks_broken": self.blocks_broken,
            "tick": self.tick,
        }
