from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

import numpy as np


class Block(IntEnum):
    AIR = 0
    STONE = 1
    DIRT = 2
    GRASS = 3
    WOOD = 4
    GLASS = 5
    BEDROCK = 6


@dataclass
class BlockWorld:
    name: str
    voxels: np.ndarray  # uint8[sy, sz, sx] (y-major, y is up)

    @classmethod
    def empty(cls, name: str, size_x: int, size_y: int, size_z: int) -> BlockWorld:
        return cls(name=name, voxels=np.zeros((size_y, size_z, size_x), dtype=np.uint8))

    @classmethod
    def flat(cls, name: str, size_x: int, size_y: int, size_z: int, ground_level: int) -> BlockWorld:
        """Bedrock floor, stone up to `ground_level - 1`, grass on top."""
        world = cls.empty(name, size_x, size_y, size_z)
        if ground_level <= 0:
            return world
        top = min(ground_level, size_y)
        world.voxels[:top] = Block.STONE
        world.voxels[0] = Block.BEDROCK
        if top > 1:
            world.voxels[top - 1] = Block.GRASS
        return world

    @property
    def size_y(self) -> int:
        return int(self.voxels.shape[0])

    @property
    def size_z(self) -> int:
        return int(self.voxels.shape[1])

    @property
    def size_x(self) -> int:
        return int(self.voxels.shape[2])

    def in_bounds(self, ix: int, iy: int, iz: int) -> bool:
        return 0 <= ix < self.size_x and 0 <= iy < self.size_y and 0 <= iz < self.size_z

    def get_block(self, ix: int, iy: int, iz: int) -> Block:
        # Everything outside the stored volume is open air.
        if not self.in_bounds(ix, iy, iz):
            return Block.AIR
        return Block(int(self.voxels[iy, iz, ix]))

    def set_block(self, ix: int, iy: int, iz: int, block: Block | int) -> None:
        if not self.in_bounds(ix, iy, iz):
            return
        self.voxels[iy, iz, ix] = int(block)

    def is_empty(self, ix: int, iy: int, iz: int) -> bool:
        return self.get_block(ix, iy, iz) == Block.AIR

    def fill(
        self,
        min_ix: int,
        min_iy: int,
        min_iz: int,
        max_ix_excl: int,
        max_iy_excl: int,
        max_iz_excl: int,
        block: Block | int,
    ) -> None:
        min_ix = max(min_ix, 0)
        min_iy = max(min_iy, 0)
        min_iz = max(min_iz, 0)
        max_ix_excl = min(max_ix_excl, self.size_x)
        max_iy_excl = min(max_iy_excl, self.size_y)
        max_iz_excl = min(max_iz_excl, self.size_z)
        if min_ix >= max_ix_excl or min_iy >= max_iy_excl or min_iz >= max_iz_excl:
            return
        self.voxels[min_iy:max_iy_excl, min_iz:max_iz_excl, min_ix:max_ix_excl] = int(block)

    def count_non_empty(self) -> int:
        return int(np.count_nonzero(self.voxels != Block.AIR))
