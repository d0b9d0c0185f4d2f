from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from enum import Enum

import numpy as np

from .vector import Location

_entity_ids = itertools.count(1)


class EntityKind(str, Enum):
    FIREBALL = "FIREBALL"
    SMALL_FIREBALL = "SMALL_FIREBALL"
    DRAGON_FIREBALL = "DRAGON_FIREBALL"
    WITHER_SKULL = "WITHER_SKULL"
    ARROW = "ARROW"
    SNOWBALL = "SNOWBALL"
    EGG = "EGG"
    ENDER_PEARL = "ENDER_PEARL"
    SHULKER_BULLET = "SHULKER_BULLET"

    @property
    def is_fireball(self) -> bool:
        return self in _FIREBALL_KINDS


_FIREBALL_KINDS = frozenset(
    {EntityKind.FIREBALL, EntityKind.SMALL_FIREBALL, EntityKind.DRAGON_FIREBALL, EntityKind.WITHER_SKULL}
)


@dataclass(eq=False)
class Entity:
    kind: EntityKind
    location: Location
    velocity: np.ndarray = field(default_factory=lambda: np.zeros(3, dtype=np.float64))  # blocks / tick
    entity_id: int = field(default_factory=lambda: next(_entity_ids))

    silent: bool = False
    glowing: bool = False
    # Only meaningful for fireball-like kinds.
    is_incendiary: bool = True
    yield_: float = 1.0

    # State
    age: int = 0
    dead: bool = False

    def set_velocity(self, vel: np.ndarray) -> None:
        self.velocity = np.asarray(vel, dtype=np.float64).copy()

    def remove(self) -> None:
        self.dead = True

    @property
    def is_fireball(self) -> bool:
        return self.kind.is_fireball
