from pathlib import Path

import numpy as np
from hypothesis import given, settings
from hypothesis import strategies as st

from missiles.config import LaunchConfig, PluginConfig
from missiles.constants import MISSILES_PER_LAUNCH
from missiles.missile import Missile
from missiles.regions import ProtectedRegion
from missiles.sim.senders import Player
from missiles.sim.vector import Location, normalize
from missiles.sim.world import Block
from tests.conftest import WORLD, build_host

CENTER = Location(WORLD, 30.5, 30.5, 30.5)
coords = st.floats(min_value=-100.0, max_value=100.0, allow_nan=False)
offsets = st.tuples(*[st.integers(min_value=-3, max_value=3)] * 3)


@given(st.tuples(coords, coords, coords), st.tuples(coords, coords, coords))
def test_initial_velocity_is_unit_toward_target(start_xyz, target_xyz):
    game, plugin = build_host(Path("unused"))
    start = Location(WORLD, *start_xyz)
    target = Location(WORLD, *target_xyz)
    missile = Missile(plugin, start, target, LaunchConfig.from_config(PluginConfig()))

    delta = target.vector() - start.vector()
    vel = missile.entity.velocity
    if np.linalg.norm(delta) > 1e-6:
        assert abs(np.linalg.norm(vel) - 1.0) < 1e-9
        assert np.allclose(vel * np.linalg.norm(delta), delta, atol=1e-6)
    assert np.all(np.isfinite(vel))


@given(st.tuples(coords, coords, coords))
def test_normalize_never_produces_nan(xyz):
    out = normalize(np.array(xyz))
    assert np.all(np.isfinite(out))
    assert np.linalg.norm(out) <= 1.0 + 1e-9


@given(st.sets(offsets, max_size=12))
def test_collision_scan_matches_unit_neighbourhood(solid_offsets):
    game, plugin = build_host(Path("unused"))
    world = game.get_world(WORLD)
    bx, by, bz = CENTER.block_coords
    for dx, dy, dz in solid_offsets:
        world.set_block(bx + dx, by + dy, bz + dz, Block.STONE)

    missile = Missile(plugin, CENTER, CENTER.add(0, -10, 0), LaunchConfig.from_config(PluginConfig()))
    expected = any(max(abs(dx), abs(dy), abs(dz)) <= 1 for dx, dy, dz in solid_offsets)
    assert missile.is_colliding_with_block(CENTER) == expected


@settings(max_examples=50)
@given(
    st.sets(offsets, max_size=30),
    st.integers(min_value=0, max_value=3),
    offsets,
    offsets,
)
def test_detonation_only_clears_flagged_blocks_within_radius(solid_offsets, radius, corner_a, corner_b):
    game, plugin = build_host(Path("unused"))
    plugin.config = PluginConfig(explosion_radius=radius, region_flag="X")
    world = game.get_world(WORLD)
    bx, by, bz = CENTER.block_coords
    for dx, dy, dz in solid_offsets:
        world.set_block(bx + dx, by + dy, bz + dz, Block.STONE)

    region = ProtectedRegion(
        "zone",
        (bx + corner_a[0], by + corner_a[1], bz + corner_a[2]),
        (bx + corner_b[0], by + corner_b[1], bz + corner_b[2]),
        flags={"X": None},
    )
    plugin.regions.create(WORLD).add_region(region)

    missile = Missile(plugin, CENTER, CENTER.add(0, -10, 0), LaunchConfig.from_config(plugin.config))
    cleared = set(missile.explode())

    for dx, dy, dz in solid_offsets:
        block = (bx + dx, by + dy, bz + dz)
        should_clear = (dx * dx + dy * dy + dz * dz) <= radius * radius and region.contains(*block)
        assert (block in cleared) == should_clear
        assert world.is_empty(*block) == should_clear
    assert cleared <= {(bx + dx, by + dy, bz + dz) for dx, dy, dz in solid_offsets}


@settings(max_examples=25)
@given(st.integers(min_value=0, max_value=2**32 - 1), st.integers(min_value=0, max_value=80))
def test_launch_always_schedules_five_staggered_spawns(seed, spawn_xz):
    game, plugin = build_host(Path("unused"), seed=seed)
    plugin.config = PluginConfig.model_validate({"spawnDistance": {"x": spawn_xz, "z": spawn_xz}})
    player = game.add_player(Player(name="p", location=Location(WORLD, 32.0, 30.0, 32.0)))

    tasks = plugin.launch_missile(player)
    assert [t.delay for t in tasks] == [10 * i for i in range(MISSILES_PER_LAUNCH)]

    game.run_ticks(41)
    for missile in plugin.missiles:
        dx = missile.start_location.x - missile.target.x
        dz = missile.start_location.z - missile.target.z
        assert abs(dx) <= spawn_xz / 2 and abs(dz) <= spawn_xz / 2
        assert missile.start_location.y - missile.target.y == 20
