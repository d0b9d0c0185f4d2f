from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np


def normalize(vec: np.ndarray) -> np.ndarray:
    """Unit vector along `vec`; the zero vector stays zero."""
    v = np.asarray(vec, dtype=np.float64)
    norm = float(np.linalg.norm(v))
    if norm <= 1e-12:
        return np.zeros(3, dtype=np.float64)
    return v / norm


@dataclass(frozen=True)
class Location:
    """A point in a named world. y is up."""

    world: str
    x: float
    y: float
    z: float

    def vector(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=np.float64)

    def add(self, dx: float, dy: float, dz: float) -> Location:
        return Location(self.world, self.x + dx, self.y + dy, self.z + dz)

    def subtract(self, dx: float, dy: float, dz: float) -> Location:
        return Location(self.world, self.x - dx, self.y - dy, self.z - dz)

    def distance(self, other: Location) -> float:
        if other.world != self.world:
            raise ValueError(f"Cannot measure distance between worlds {self.world} and {other.world}")
        return math.sqrt((self.x - other.x) ** 2 + (self.y - other.y) ** 2 + (self.z - other.z) ** 2)

    @property
    def block_coords(self) -> tuple[int, int, int]:
        """Integer coordinates of the block containing this point."""
        return (math.floor(self.x), math.floor(self.y), math.floor(self.z))

    def to_list(self) -> list[float]:
        return [self.x, self.y, self.z]
