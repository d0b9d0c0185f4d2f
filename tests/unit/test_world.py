import numpy as np

from missiles.sim.vector import Location, normalize
from missiles.sim.world import Block, BlockWorld


def test_get_and_set_block():
    world = BlockWorld.empty("w", 8, 8, 8)
    assert world.get_block(1, 2, 3) == Block.AIR

    world.set_block(1, 2, 3, Block.STONE)
    assert world.get_block(1, 2, 3) == Block.STONE
    # y-major storage
    assert world.voxels[2, 3, 1] == Block.STONE
    assert not world.is_empty(1, 2, 3)


def test_out_of_bounds_is_air_and_writes_are_ignored():
    world = BlockWorld.empty("w", 4, 4, 4)
    assert world.get_block(-1, 0, 0) == Block.AIR
    assert world.get_block(0, 10, 0) == Block.AIR

    world.set_block(10, 10, 10, Block.STONE)
    assert world.count_non_empty() == 0


def test_fill_clamps_to_bounds():
    world = BlockWorld.empty("w", 4, 4, 4)
    world.fill(-2, 0, -2, 2, 1, 2, Block.DIRT)
    assert world.count_non_empty() == 4
    assert world.get_block(1, 0, 1) == Block.DIRT
    assert world.get_block(2, 0, 2) == Block.AIR


def test_flat_world_layers():
    world = BlockWorld.flat("w", 4, 10, 4, ground_level=5)
    assert world.get_block(0, 0, 0) == Block.BEDROCK
    assert world.get_block(0, 3, 0) == Block.STONE
    assert world.get_block(0, 4, 0) == Block.GRASS
    assert world.get_block(0, 5, 0) == Block.AIR


def test_location_block_coords_floor_negative():
    loc = Location("w", -0.5, 2.9, 3.0)
    assert loc.block_coords == (-1, 2, 3)


def test_location_arithmetic():
    loc = Location("w", 1.0, 2.0, 3.0)
    assert loc.add(1, 1, 1) == Location("w", 2.0, 3.0, 4.0)
    assert loc.subtract(0, 5, 0) == Location("w", 1.0, -3.0, 3.0)
    assert loc.distance(Location("w", 4.0, 6.0, 3.0)) == 5.0


def test_normalize_zero_vector_stays_zero():
    out = normalize(np.zeros(3))
    assert np.all(out == 0.0)
    assert np.allclose(normalize(np.array([0.0, -3.0, 4.0])), [0.0, -0.6, 0.8])
