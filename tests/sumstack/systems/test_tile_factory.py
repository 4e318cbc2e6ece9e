import random

from sumstack.config import GameConfig
from sumstack.factories.tiles import TileFactory
from sumstack.systems.board_ops import all_tiles
from sumstack.world import create_world


def test_make_row_fills_every_column_with_fresh_ids():
    world = create_world()
    factory = TileFactory(world, GameConfig(), random.Random(3))
    first = factory.make_row(9)
    second = factory.make_row(8)
    assert [t.col for t in first] == list(range(7))
    assert all(t.row == 9 for t in first)
    ids = {t.id for t in first} | {t.id for t in second}
    assert len(ids) == 14
    assert len(all_tiles(world)) == 14


def test_values_stay_within_range():
    world = create_world()
    factory = TileFactory(world, GameConfig(), random.Random())
    values = {factory.next_value() for _ in range(500)}
    assert values <= set(range(1, 10))
    assert len(values) == 9


def test_initial_rows_fill_from_bottom():
    config = GameConfig(rows=6, cols=4, initial_rows=3)
    world = create_world(config)
    factory = TileFactory(world, config, random.Random(1))
    spawned = factory.spawn_initial_rows()
    assert len(spawned) == 12
    assert {t.row for t in spawned} == {3, 4, 5}
