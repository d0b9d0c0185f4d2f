import numpy as np

from missiles.constants import ENTITY_MAX_AGE_TICKS
from missiles.regions import ProtectedRegion, RegionContainer
from missiles.sim.entity import EntityKind
from missiles.sim.vector import Location
from missiles.sim.world import Block


def test_entity_moves_by_velocity_each_tick(game):
    entity = game.spawn_entity(Location("world", 5.5, 30.0, 5.5), EntityKind.SNOWBALL)
    entity.set_velocity(np.array([0.5, -1.0, 0.0]))
    game.run_ticks(4)
    assert entity.location == Location("world", 7.5, 26.0, 5.5)
    assert entity.age == 4


def test_native_fireball_impact_uses_its_yield(game):
    world = game.get_world("world")
    world.set_block(5, 4, 5, Block.STONE)
    entity = game.spawn_entity(Location("world", 5.5, 5.5, 5.5), EntityKind.FIREBALL)
    entity.set_velocity(np.array([0.0, -1.0, 0.0]))

    game.tick()

    assert entity.dead
    assert game.get_entity(entity.entity_id) is None
    (explosion,) = game.explosions
    assert explosion.power == 1.0
    assert explosion.set_fire is True
    assert explosion.blocks_broken == 1
    assert world.is_empty(5, 4, 5)


def test_defused_fireball_impact_breaks_nothing(game):
    world = game.get_world("world")
    world.set_block(5, 4, 5, Block.STONE)
    entity = game.spawn_entity(Location("world", 5.5, 5.5, 5.5), EntityKind.FIREBALL)
    entity.is_incendiary = False
    entity.yield_ = 0.0
    entity.set_velocity(np.array([0.0, -1.0, 0.0]))

    game.tick()

    assert entity.dead
    assert game.explosions[-1].blocks_broken == 0
    assert world.get_block(5, 4, 5) == Block.STONE


def test_non_fireball_impact_has_no_explosion(game):
    game.get_world("world").set_block(5, 4, 5, Block.STONE)
    entity = game.spawn_entity(Location("world", 5.5, 5.5, 5.5), EntityKind.ARROW)
    entity.set_velocity(np.array([0.0, -1.0, 0.0]))
    game.tick()
    assert entity.dead
    assert len(game.explosions) == 0


def test_entities_despawn_with_age_and_in_the_void(game):
    old = game.spawn_entity(Location("world", 5.5, 30.0, 5.5), EntityKind.SNOWBALL)
    falling = game.spawn_entity(Location("world", 5.5, -63.5, 5.5), EntityKind.SNOWBALL)
    falling.set_velocity(np.array([0.0, -1.0, 0.0]))

    game.tick()
    assert falling.dead
    assert not old.dead

    game.run_ticks(ENTITY_MAX_AGE_TICKS)
    assert old.dead
    assert game.entities == []


def test_explosion_power_spares_bedrock(game):
    world = game.get_world("world")
    world.fill(0, 0, 0, 10, 3, 10, Block.STONE)
    world.fill(0, 0, 0, 10, 1, 10, Block.BEDROCK)

    effect = game.create_explosion(Location("world", 5.5, 2.5, 5.5), 2.0)

    assert effect.blocks_broken > 0
    assert np.all(world.voxels[0] == Block.BEDROCK)
    assert world.is_empty(5, 2, 5)


def test_region_manager_lookup_and_removal():
    manager = RegionContainer().create("world")
    manager.add_region(ProtectedRegion("Arena", (0, 0, 0), (1, 1, 1)))
    assert manager.get_region("arena").id == "Arena"
    assert manager.remove_region("ARENA").id == "Arena"
    assert manager.get_region("arena") is None
    assert manager.regions == []
